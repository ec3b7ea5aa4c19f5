"""
Shared fixtures: a throwaway sqlite database, one application client for the
whole session, and helpers for creating accounts.
"""

import os
import tempfile
import uuid

# Must be set before notekeeper.config is imported.
_tmp_dir = tempfile.mkdtemp(prefix="notekeeper-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ENV"] = "development"

import pytest
from fastapi.testclient import TestClient

from notekeeper.main import app
from notekeeper.utils.rate_limit import auth_limiter


@pytest.fixture(scope="session")
def app_client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client(app_client):
    """Client with an empty cookie jar and a fresh rate-limit window."""
    app_client.cookies.clear()
    auth_limiter.reset()
    yield app_client
    app_client.cookies.clear()
    auth_limiter.reset()


def unique_email(prefix="user"):
    return f"{prefix}-{uuid.uuid4().hex[:12]}@example.com"


@pytest.fixture
def signup(client):
    """Sign up a new account; the session cookie lands in the client jar.

    The limiter is reset afterwards so account setup does not eat into the
    request budget of the test itself.
    """
    def _signup(email=None, password="secret1", **extra):
        email = email or unique_email()
        resp = client.post("/api/auth/signup", json={"email": email, "password": password, **extra})
        assert resp.status_code == 201, resp.text
        auth_limiter.reset()
        return email, password
    return _signup


@pytest.fixture
def login(client):
    def _login(email, password):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        auth_limiter.reset()
        return resp
    return _login
