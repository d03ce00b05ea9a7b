from datetime import datetime, timedelta, timezone

from use_cases.session_models import AuthMode, IdentityServiceError, Session


def _session(expires_at) -> Session:
    return Session(uid="u", email="a@b.com", id_token="t", refresh_token="r", expires_at=expires_at)


def test_is_expired() -> None:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert _session(now + timedelta(seconds=1)).is_expired(now) is False
    assert _session(now).is_expired(now) is True


def test_identity_service_error_carries_description() -> None:
    err = IdentityServiceError("wrong password", code="INVALID_PASSWORD")
    assert str(err) == "wrong password"
    assert err.description == "wrong password"
    assert err.code == "INVALID_PASSWORD"


def test_auth_mode_values() -> None:
    assert AuthMode("login") is AuthMode.LOG_IN
    assert AuthMode("signup") is AuthMode.SIGN_UP
