from unittest.mock import patch, MagicMock

from identity_fakes import make_session
from views import content_view


@patch("views.content_view.session_manager.logout")
def test_shell_shows_signed_in_email(mock_logout):
    mock_st = MagicMock()
    mock_st.session_state = {"auth_session": make_session(email="a@b.com")}
    mock_st.button.return_value = False

    with patch("views.content_view.st", mock_st):
        content_view.render_content_screen()

    mock_st.caption.assert_called_once_with("Signed in as a@b.com")
    mock_logout.assert_not_called()


@patch("views.content_view.session_manager.logout")
def test_logout_button(mock_logout):
    mock_st = MagicMock()
    mock_st.session_state = {"auth_session": make_session()}
    mock_st.button.return_value = True

    with patch("views.content_view.st", mock_st):
        content_view.render_content_screen()

    mock_logout.assert_called_once()
