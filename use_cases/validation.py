"""Local credential checks applied before anything is sent to the identity backend."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from use_cases.session_models import AuthMode

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")
MIN_PASSWORD_LENGTH = 6


class AuthErrorKind(str, Enum):
    EMPTY_EMAIL = "EMPTY_EMAIL"
    EMPTY_PASSWORD = "EMPTY_PASSWORD"
    INVALID_EMAIL_FORMAT = "INVALID_EMAIL_FORMAT"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    BACKEND_AUTH_ERROR = "BACKEND_AUTH_ERROR"


ERROR_MESSAGES = {
    AuthErrorKind.EMPTY_EMAIL: "Please enter your email",
    AuthErrorKind.EMPTY_PASSWORD: "Please enter your password",
    AuthErrorKind.INVALID_EMAIL_FORMAT: "Please enter a valid email address",
    AuthErrorKind.WEAK_PASSWORD: f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
}


@dataclass(frozen=True)
class ValidationFailure:
    kind: AuthErrorKind
    message: str


def is_valid_email(email: str) -> bool:
    # fullmatch, not match + "$": "$" still accepts a trailing newline
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_password(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH


def _failure(kind: AuthErrorKind) -> ValidationFailure:
    return ValidationFailure(kind=kind, message=ERROR_MESSAGES[kind])


def validate_credentials(email: str, password: str, mode: AuthMode) -> Optional[ValidationFailure]:
    """
    Returns the first failing rule, or None when the credentials may be submitted.
    Order: empty email, empty password, email format, password length (sign-up only).
    Login never applies a length rule; the backend decides whether the password is right.
    """
    if email == "":
        return _failure(AuthErrorKind.EMPTY_EMAIL)
    if password == "":
        return _failure(AuthErrorKind.EMPTY_PASSWORD)
    if not is_valid_email(email):
        return _failure(AuthErrorKind.INVALID_EMAIL_FORMAT)
    if mode is AuthMode.SIGN_UP and not is_valid_password(password):
        return _failure(AuthErrorKind.WEAK_PASSWORD)
    return None
