import pytest

from spendwise import create_app
from spendwise.config import TestingConfig


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    client.post("/auth/register", json={"name": "Asha", "email": "asha@example.com", "password": "s3cret"})
    resp = client.post("/auth/login", json={"email": "asha@example.com", "password": "s3cret"})
    assert resp.status_code == 200
    return client
