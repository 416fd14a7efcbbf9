import base64

import pytest

from app import create_app
from fakes import FakePool


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def app(pool):
    app = create_app(
        {
            "TESTING": True,
            "BASIC_AUTH_USERNAME": "abc",
            "BASIC_AUTH_PASSWORD": "123",
            "REQUEST_TIMEOUT_SECONDS": None,
        },
        db_pool=pool,
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    token = base64.b64encode(b"abc:123").decode("ascii")
    return {"Authorization": f"Basic {token}"}
