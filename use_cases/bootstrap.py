"""Startup orchestration: identity backend configuration and the signed-in shortcut."""

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import auth
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]
    reason: str = ""


def run_startup() -> StartupResult:
    """Run startup bootstrap. Safe to call on every Streamlit rerun."""
    executed_steps = []

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    state = session_manager.st.session_state
    if state["identity_service"] is None:
        try:
            config = auth.load_identity_config()
        except auth.ConfigError as e:
            log.error(f"Identity backend is not configured: {e}")
            return StartupResult(status="STOP", planned_steps=tuple(executed_steps), reason="identity_not_configured")
        state["identity_service"] = auth.get_identity_service(config)
        executed_steps.append("configure_identity_service")

    previous = state["auth_controller"]
    controller = session_manager.get_or_create_controller(state["identity_service"])
    executed_steps.append("ensure_auth_controller")

    # A new controller means the login screen is being entered. The check only finds
    # something when the service kept a live session while the controller was replaced.
    if controller is not previous:
        controller.on_screen_entered()
        executed_steps.append("check_current_session")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
