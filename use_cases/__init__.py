"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthFlowController, AuthFlowStatus, AuthFormState, SubmitResult
from .bootstrap import StartupResult, StartupStatus, run_startup
from .session_models import AuthMode, IdentityService, IdentityServiceError, Session
from .validation import AuthErrorKind, ValidationFailure, is_valid_email, is_valid_password, validate_credentials

__all__ = [
    "AuthErrorKind",
    "AuthFlowController",
    "AuthFlowStatus",
    "AuthFormState",
    "AuthMode",
    "IdentityService",
    "IdentityServiceError",
    "Session",
    "StartupResult",
    "StartupStatus",
    "SubmitResult",
    "ValidationFailure",
    "is_valid_email",
    "is_valid_password",
    "run_startup",
    "validate_credentials",
]
