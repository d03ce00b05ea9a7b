import asyncio

import streamlit as st

from use_cases.auth_flow import AuthFlowController
from use_cases.session_models import AuthMode
from use_cases.validation import MIN_PASSWORD_LENGTH, is_valid_password


def _sync_fields(controller: AuthFlowController, email: str, password: str):
    # Every edit clears a stale error, same as typing into the field.
    if email != controller.state.email:
        controller.set_email(email)
    if password != controller.state.password:
        controller.set_password(password)


def render_auth_screen(controller: AuthFlowController):
    state = controller.state
    is_login = state.mode is AuthMode.LOG_IN

    st.markdown("<h1 style='text-align: center;'>🛒</h1>", unsafe_allow_html=True)
    st.title("Shopping List")

    email = st.text_input("Email", key="login_email", autocomplete="email", placeholder="you@example.com")

    col_pw, col_eye = st.columns([6, 1], vertical_alignment="bottom")
    with col_pw:
        password = st.text_input(
            "Password",
            key="login_password",
            type="default" if state.password_visible else "password",
            autocomplete="current-password" if is_login else "new-password",
        )
    with col_eye:
        st.button(
            "🙈" if state.password_visible else "👁",
            key="toggle_password_visibility",
            on_click=controller.toggle_password_visibility,
            help="Show / hide password",
        )

    _sync_fields(controller, email, password)

    if not is_login:
        ok = is_valid_password(state.password)
        icon = "✅" if ok else "⚪"
        st.caption(f"{icon} Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if state.show_error:
        st.error(state.error)

    label = "Log In" if is_login else "Sign Up"
    if st.button(label, key="auth_submit", type="primary", use_container_width=True, disabled=not controller.can_submit):
        with st.spinner("Signing in..." if is_login else "Creating account..."):
            asyncio.run(controller.submit())
        st.rerun()

    st.button(
        "Don't have an account? Sign Up" if is_login else "Already have an account? Log In",
        key="toggle_auth_mode",
        type="tertiary",
        on_click=controller.toggle_mode,
        disabled=state.loading,
    )
