import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import requests

from use_cases.session_models import IdentityServiceError, Session

log = logging.getLogger(__name__)

PRODUCTION_BASE_URL = "https://identitytoolkit.googleapis.com"

NETWORK_ERROR_MESSAGE = (
    "Network error (such as timeout, interrupted connection or unreachable host) has occurred."
)
INTERNAL_ERROR_MESSAGE = (
    "An internal error has occurred, print and inspect the error details for more information."
)

# REST error codes -> texts the Firebase client SDKs show to users
ERROR_DESCRIPTIONS = {
    "EMAIL_EXISTS": "The email address is already in use by another account.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "WEAK_PASSWORD": "The password must be 6 characters long or more.",
    "EMAIL_NOT_FOUND": (
        "There is no user record corresponding to this identifier. The user may have been deleted."
    ),
    "INVALID_PASSWORD": "The password is invalid or the user does not have a password.",
    "INVALID_LOGIN_CREDENTIALS": "The supplied auth credential is malformed or has expired.",
    "USER_DISABLED": "The user account has been disabled by an administrator.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": (
        "We have blocked all requests from this device due to unusual activity. Try again later."
    ),
    "OPERATION_NOT_ALLOWED": (
        "The given sign-in provider is disabled for this Firebase project. "
        "Enable it in the Firebase console, under the sign-in method tab of the Auth section."
    ),
}


def describe_error(message: str) -> tuple[str, str]:
    """
    Splits a REST error message such as "WEAK_PASSWORD : Password should be at least 6 characters"
    into (code, human readable description). Unknown codes keep the raw message.
    """
    code = message.split(":", 1)[0].strip()
    return code, ERROR_DESCRIPTIONS.get(code, message)


class FirebaseIdentityService:
    """Email/password accounts on Firebase Authentication via its REST API."""

    def __init__(self, api_key: str, emulator_host: Optional[str] = None, timeout: float = 10.0):
        self.api_key = api_key
        self.timeout = timeout
        if emulator_host:
            self.base_url = f"http://{emulator_host}/identitytoolkit.googleapis.com"
        else:
            self.base_url = PRODUCTION_BASE_URL
        self._session: Optional[Session] = None

    async def sign_in(self, email: str, password: str) -> Session:
        return await self._authenticate("signInWithPassword", email, password)

    async def create_account(self, email: str, password: str) -> Session:
        return await self._authenticate("signUp", email, password)

    def current_session(self) -> Optional[Session]:
        if self._session is not None and self._session.is_expired():
            log.info(f"Session for uid={self._session.uid} expired")
            self._session = None
        return self._session

    def sign_out(self) -> None:
        if self._session is not None:
            log.info(f"Signing out uid={self._session.uid}")
        self._session = None

    async def _authenticate(self, endpoint: str, email: str, password: str) -> Session:
        payload = {"email": email, "password": password, "returnSecureToken": True}
        body = await asyncio.to_thread(self._post, endpoint, payload)
        session = self._session_from_response(body)
        self._session = session
        return session

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/v1/accounts:{endpoint}"
        try:
            resp = requests.post(url, params={"key": self.api_key}, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"❌ Network error calling accounts:{endpoint}: {e}")
            raise IdentityServiceError(NETWORK_ERROR_MESSAGE, code="NETWORK_ERROR") from e

        try:
            body = resp.json()
        except ValueError as e:
            log.error(f"❌ Non-JSON response from accounts:{endpoint}: HTTP {resp.status_code}")
            raise IdentityServiceError(INTERNAL_ERROR_MESSAGE, code="INTERNAL_ERROR") from e

        if not isinstance(body, dict):
            log.error(f"❌ Unexpected {type(body).__name__} body from accounts:{endpoint}: HTTP {resp.status_code}")
            raise IdentityServiceError(INTERNAL_ERROR_MESSAGE, code="INTERNAL_ERROR")

        if resp.status_code == 200:
            return body

        error = body.get("error")
        message = (error.get("message") if isinstance(error, dict) else None) or f"HTTP {resp.status_code}"
        code, description = describe_error(message)
        log.warning(f"⚠️ accounts:{endpoint} rejected: {code}")
        raise IdentityServiceError(description, code=code)

    @staticmethod
    def _session_from_response(body: Dict[str, Any]) -> Session:
        if not isinstance(body, dict):
            log.error(f"❌ Malformed auth response: {type(body).__name__} instead of an object")
            raise IdentityServiceError(INTERNAL_ERROR_MESSAGE, code="INTERNAL_ERROR")
        try:
            expires_in = int(body.get("expiresIn", 3600))
            return Session(
                uid=body["localId"],
                email=body.get("email", ""),
                id_token=body["idToken"],
                refresh_token=body.get("refreshToken", ""),
                expires_at=datetime.now(timezone.utc) + timedelta(seconds=expires_in),
            )
        except (KeyError, TypeError, ValueError) as e:
            log.error(f"❌ Malformed auth response, missing {e}")
            raise IdentityServiceError(INTERNAL_ERROR_MESSAGE, code="INTERNAL_ERROR") from e
