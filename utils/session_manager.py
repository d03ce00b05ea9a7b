import logging

import streamlit as st

from use_cases.auth_flow import AuthFlowController
from use_cases.session_models import IdentityService, Session

"""
SESSION STATE CONTRACT

Streamlit session state for one browser session.

st.session_state keys:

identity_service: IdentityService | None
    identity backend client for this browser session
    default: None
    owner: bootstrap

auth_controller: AuthFlowController | None
    login form state machine
    default: None
    owner: session_manager

auth_session: Session | None
    session of the signed-in user; None shows the login screen
    default: None
    owner: auth_controller (via on_authenticated)
"""

log = logging.getLogger(__name__)


def init_session_state():
    if "identity_service" not in st.session_state:
        st.session_state["identity_service"] = None
    if "auth_controller" not in st.session_state:
        st.session_state["auth_controller"] = None
    if "auth_session" not in st.session_state:
        st.session_state["auth_session"] = None


def mark_authenticated(session: Session) -> None:
    st.session_state["auth_session"] = session


def get_or_create_controller(identity_service: IdentityService) -> AuthFlowController:
    controller = st.session_state.get("auth_controller")
    if controller is None or controller.closed:
        controller = AuthFlowController(identity_service, on_authenticated=mark_authenticated)
        st.session_state["auth_controller"] = controller
    return controller


def is_authenticated() -> bool:
    return st.session_state.get("auth_session") is not None


def logout():
    identity_service = st.session_state.get("identity_service")
    if identity_service is not None:
        identity_service.sign_out()
    controller = st.session_state.get("auth_controller")
    if controller is not None:
        controller.close()
    st.session_state["auth_controller"] = None
    st.session_state["auth_session"] = None
    log.info("User logged out")
    st.rerun()
