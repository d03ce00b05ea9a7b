"""Session DTOs and the identity-backend contract shared across application layers."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Protocol


class AuthMode(str, Enum):
    LOG_IN = "login"
    SIGN_UP = "signup"


@dataclass(frozen=True)
class Session:
    """Proof of authentication issued by the identity backend."""

    uid: str
    email: str
    id_token: str
    refresh_token: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


class IdentityServiceError(Exception):
    """Raised by an identity backend when an authentication call is rejected."""

    def __init__(self, description: str, code: Optional[str] = None):
        super().__init__(description)
        self.description = description
        self.code = code


class IdentityService(Protocol):
    async def sign_in(self, email: str, password: str) -> Session:
        ...

    async def create_account(self, email: str, password: str) -> Session:
        ...

    def current_session(self) -> Optional[Session]:
        ...

    def sign_out(self) -> None:
        ...
