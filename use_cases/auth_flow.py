"""Authentication flow orchestration (application layer)."""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from use_cases.session_models import AuthMode, IdentityService, IdentityServiceError, Session
from use_cases.validation import (
    AuthErrorKind,
    ERROR_MESSAGES,
    is_valid_password,
    validate_credentials,
)

log = logging.getLogger(__name__)

AuthFlowStatus = Literal["AUTHENTICATED", "REJECTED", "FAILED", "IGNORED", "DISCARDED"]
FormField = Literal["email", "password"]

UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."


@dataclass(frozen=True)
class SubmitResult:
    """Result contract for a single submit attempt."""

    status: AuthFlowStatus
    reason: str
    session: Optional[Session] = None


@dataclass
class AuthFormState:
    """Transient form state for one login screen session."""

    email: str = ""
    password: str = ""
    mode: AuthMode = AuthMode.LOG_IN
    password_visible: bool = False
    loading: bool = False
    error: Optional[str] = None
    error_kind: Optional[AuthErrorKind] = None

    @property
    def show_error(self) -> bool:
        return self.error is not None


class AuthFlowController:
    """
    Drives the login / sign-up form: local validation, one backend call per
    valid submit, and the state transitions around it.

    All methods must be called from the event loop that owns the controller.
    The only suspension point is the identity-service call inside submit();
    while it is pending `loading` is True and submit()/toggle_mode() are no-ops.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        on_authenticated: Optional[Callable[[Session], None]] = None,
    ):
        self._identity_service = identity_service
        self._on_authenticated = on_authenticated
        self._closed = False
        self.state = AuthFormState()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def can_submit(self) -> bool:
        if self.state.loading:
            return False
        if self.state.mode is AuthMode.SIGN_UP and not is_valid_password(self.state.password):
            return False
        return True

    def on_field_changed(self, field: FormField) -> None:
        self._clear_error()

    def set_email(self, value: str) -> None:
        self.state.email = value
        self.on_field_changed("email")

    def set_password(self, value: str) -> None:
        self.state.password = value
        self.on_field_changed("password")

    def toggle_mode(self) -> bool:
        """Switches between log-in and sign-up. Silently ignored while a request is in flight."""
        if self.state.loading:
            log.debug("Mode toggle ignored: authentication request in flight")
            return False
        self.state.mode = AuthMode.SIGN_UP if self.state.mode is AuthMode.LOG_IN else AuthMode.LOG_IN
        self._clear_error()
        return True

    def toggle_password_visibility(self) -> None:
        self.state.password_visible = not self.state.password_visible

    def on_screen_entered(self) -> Optional[Session]:
        """Already-signed-in shortcut: emits Authenticated if the backend still holds a session."""
        session = self._identity_service.current_session()
        if session is not None and not self._closed:
            log.info("Existing session found, skipping login form")
            self._emit_authenticated(session)
        return session

    async def submit(self) -> SubmitResult:
        state = self.state
        if self._closed:
            return SubmitResult(status="IGNORED", reason="screen_closed")
        if state.loading:
            return SubmitResult(status="IGNORED", reason="request_in_flight")

        # Same rule that disables the submit button.
        if state.mode is AuthMode.SIGN_UP and not is_valid_password(state.password):
            return self._reject(AuthErrorKind.WEAK_PASSWORD, ERROR_MESSAGES[AuthErrorKind.WEAK_PASSWORD])

        failure = validate_credentials(state.email, state.password, state.mode)
        if failure is not None:
            return self._reject(failure.kind, failure.message)

        state.loading = True
        self._clear_error()
        mode = state.mode
        log.info(f"Submitting {mode.value} request to identity service")
        try:
            if mode is AuthMode.LOG_IN:
                session = await self._identity_service.sign_in(state.email, state.password)
            else:
                session = await self._identity_service.create_account(state.email, state.password)
        except IdentityServiceError as e:
            if self._closed:
                log.info("Discarding failed auth result: screen already closed")
                return SubmitResult(status="DISCARDED", reason="screen_closed")
            state.loading = False
            state.error = e.description
            state.error_kind = AuthErrorKind.BACKEND_AUTH_ERROR
            log.warning(f"Identity service rejected {mode.value}: {e.code or e.description}")
            return SubmitResult(status="FAILED", reason=e.description)
        except Exception:
            # loading must never outlive the call, whatever the backend raised
            log.exception(f"Unexpected error from identity service during {mode.value}")
            if self._closed:
                return SubmitResult(status="DISCARDED", reason="screen_closed")
            state.loading = False
            state.error = UNEXPECTED_ERROR_MESSAGE
            state.error_kind = AuthErrorKind.BACKEND_AUTH_ERROR
            return SubmitResult(status="FAILED", reason=UNEXPECTED_ERROR_MESSAGE)

        if self._closed:
            log.info("Discarding successful auth result: screen already closed")
            return SubmitResult(status="DISCARDED", reason="screen_closed", session=session)

        state.loading = False
        self._clear_error()
        state.email = ""
        state.password = ""
        log.info(f"{mode.value} succeeded for uid={session.uid}")
        self._emit_authenticated(session)
        return SubmitResult(status="AUTHENTICATED", reason=mode.value, session=session)

    def close(self) -> None:
        """Screen teardown: results of a still-running request will be dropped."""
        self._closed = True

    def _reject(self, kind: AuthErrorKind, message: str) -> SubmitResult:
        self.state.loading = False
        self.state.error = message
        self.state.error_kind = kind
        return SubmitResult(status="REJECTED", reason=kind.value)

    def _clear_error(self) -> None:
        self.state.error = None
        self.state.error_kind = None

    def _emit_authenticated(self, session: Session) -> None:
        if self._on_authenticated is not None:
            self._on_authenticated(session)
