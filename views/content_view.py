import streamlit as st

from utils import session_manager


def render_content_screen():
    session = st.session_state.get("auth_session")

    st.title("🛒 Shopping List")
    if session is not None:
        st.caption(f"Signed in as {session.email}")
    st.info("Your lists will appear here.")

    if st.button("Log out", key="logout", type="secondary"):
        session_manager.logout()
