import httpx
import pytest

from adminsdk import AdminClient
from mock_api.database import reset_all
from mock_api.main import app


@pytest.fixture(autouse=True)
def reset():
    reset_all()
    yield
    reset_all()


@pytest.fixture
def client():
    return AdminClient(base_url="http://test/api", transport=httpx.ASGITransport(app=app))
