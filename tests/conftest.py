import pytest

from identity_fakes import FakeIdentityService


@pytest.fixture
def identity_service():
    return FakeIdentityService()
