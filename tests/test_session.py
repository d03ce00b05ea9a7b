import asyncio
from unittest.mock import patch

import pytest
import streamlit as st

from identity_fakes import FakeIdentityService, make_session
from utils import session_manager


@pytest.fixture
def session_state():
    state = {}
    with patch.object(st, "session_state", state):
        yield state


def test_init_session_state(session_state):
    session_manager.init_session_state()
    assert session_state == {
        "identity_service": None,
        "auth_controller": None,
        "auth_session": None,
    }


def test_init_session_state_keeps_existing_values(session_state):
    session = make_session()
    session_state["auth_session"] = session
    session_manager.init_session_state()
    assert session_state["auth_session"] is session


def test_controller_is_created_once(session_state):
    session_manager.init_session_state()
    service = FakeIdentityService()

    first = session_manager.get_or_create_controller(service)
    second = session_manager.get_or_create_controller(service)

    assert first is second


def test_closed_controller_is_replaced(session_state):
    session_manager.init_session_state()
    service = FakeIdentityService()
    first = session_manager.get_or_create_controller(service)
    first.close()

    assert session_manager.get_or_create_controller(service) is not first


def test_successful_submit_marks_session_authenticated(session_state):
    session_manager.init_session_state()
    service = FakeIdentityService()
    controller = session_manager.get_or_create_controller(service)
    controller.set_email("a@b.com")
    controller.set_password("hunter2")

    asyncio.run(controller.submit())

    assert session_manager.is_authenticated() is True
    assert session_state["auth_session"] == service.session


@patch('streamlit.rerun')
def test_logout(mock_rerun, session_state):
    session_manager.init_session_state()
    service = FakeIdentityService()
    service.existing_session = make_session()
    controller = session_manager.get_or_create_controller(service)
    session_state["identity_service"] = service
    session_state["auth_session"] = service.existing_session

    session_manager.logout()

    assert service.signed_out is True
    assert controller.closed is True
    assert session_state["auth_controller"] is None
    assert session_state["auth_session"] is None
    mock_rerun.assert_called_once()
