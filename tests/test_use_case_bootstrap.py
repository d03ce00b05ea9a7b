from unittest.mock import patch

import pytest

import auth
from identity_fakes import FakeIdentityService, make_session
from use_cases import bootstrap


@pytest.fixture
def session_state():
    state = {}
    with patch.object(bootstrap.session_manager.st, "session_state", state):
        yield state


@patch("use_cases.bootstrap.auth.get_identity_service")
@patch("use_cases.bootstrap.auth.load_identity_config", side_effect=auth.ConfigError("no key"))
def test_run_startup_stops_without_identity_config(_mock_config, mock_get_service, session_state) -> None:
    result = bootstrap.run_startup()

    assert result.status == "STOP"
    assert result.reason == "identity_not_configured"
    assert result.planned_steps == ("init_session_state",)
    mock_get_service.assert_not_called()
    assert session_state["identity_service"] is None


@patch("use_cases.bootstrap.auth.load_identity_config")
def test_run_startup_first_run(_mock_config, session_state) -> None:
    service = FakeIdentityService()
    with patch("use_cases.bootstrap.auth.get_identity_service", return_value=service):
        result = bootstrap.run_startup()

    assert result.status == "CONTINUE"
    assert result.planned_steps == (
        "init_session_state",
        "configure_identity_service",
        "ensure_auth_controller",
        "check_current_session",
    )
    assert session_state["identity_service"] is service
    assert session_state["auth_controller"] is not None
    assert session_state["auth_session"] is None


@patch("use_cases.bootstrap.auth.load_identity_config")
def test_run_startup_restores_existing_session(_mock_config, session_state) -> None:
    service = FakeIdentityService()
    service.existing_session = make_session(uid="returning")
    with patch("use_cases.bootstrap.auth.get_identity_service", return_value=service):
        bootstrap.run_startup()

    assert session_state["auth_session"].uid == "returning"


@patch("use_cases.bootstrap.auth.get_identity_service")
@patch("use_cases.bootstrap.auth.load_identity_config")
def test_run_startup_rerun_reuses_service_and_controller(mock_config, mock_get_service, session_state) -> None:
    mock_get_service.return_value = FakeIdentityService()
    bootstrap.run_startup()
    controller = session_state["auth_controller"]

    result = bootstrap.run_startup()

    assert result.planned_steps == ("init_session_state", "ensure_auth_controller")
    assert session_state["auth_controller"] is controller
    mock_config.assert_called_once()
    mock_get_service.assert_called_once()


@patch("use_cases.bootstrap.auth.get_identity_service")
@patch("use_cases.bootstrap.auth.load_identity_config")
def test_replaced_controller_picks_up_live_session(_mock_config, mock_get_service, session_state) -> None:
    service = FakeIdentityService()
    mock_get_service.return_value = service
    bootstrap.run_startup()
    assert session_state["auth_session"] is None

    # controller dropped while the service still holds a session
    service.existing_session = make_session(uid="kept")
    session_state["auth_controller"] = None
    result = bootstrap.run_startup()

    assert "check_current_session" in result.planned_steps
    assert session_state["auth_session"].uid == "kept"
