import streamlit as st

from infrastructure.observability import setup_observability
from use_cases import bootstrap
from utils import session_manager
from views import content_view, login_view


def main():
    setup_observability()

    st.set_page_config(page_title="Shopping List", page_icon="🛒", layout="centered")

    # --- STARTUP ORCHESTRATION ---
    startup_result = bootstrap.run_startup()
    if startup_result.status == "STOP":
        st.error("🚨 Authentication backend is not configured. Set `FIREBASE_API_KEY` in `secrets.toml` or the environment.")
        st.stop()
        return

    # --- LOGIN GATE ---
    if not session_manager.is_authenticated():
        controller = session_manager.get_or_create_controller(st.session_state["identity_service"])
        login_view.render_auth_screen(controller)
        return

    content_view.render_content_screen()


if __name__ == "__main__":
    main()
