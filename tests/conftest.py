"""Global pytest fixtures for the Chirpy API."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any, Callable

import pytest
from flask import Flask

from api import create_app
from models.db_storage import DBStorage
from models.user import User
from utils.refresh_tokens import RefreshTokenService
from utils.security import hash_password
from utils.sessions import SessionManager

from tests.helpers.auth import TEST_PASSWORD, TEST_SECRET


@pytest.fixture()
def app(tmp_path) -> Generator[Flask, None, None]:
    """Create a Flask app backed by a fresh in-memory database."""

    application = create_app("testing")
    index = tmp_path / "index.html"
    index.write_text("<html><body>Welcome to Chirpy</body></html>")
    application.config["FILESERVER_ROOT"] = str(tmp_path)
    yield application


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def app_storage(app: Flask) -> DBStorage:
    """Storage instance used by ``app``."""

    return app.extensions["storage"]


@pytest.fixture()
def storage() -> Generator[DBStorage, None, None]:
    """Standalone storage on its own in-memory database."""

    db = DBStorage("sqlite://")
    db.reload()
    yield db
    db.close()


@pytest.fixture()
def make_user() -> Callable[..., User]:
    """Factory persisting a user in the given storage."""

    def _factory(db: DBStorage, email: str = "user@example.com", password: str = TEST_PASSWORD) -> User:
        user = User(email=email, password_hash=hash_password(password))
        db.new(user)
        db.save()
        return user

    return _factory


@pytest.fixture()
def user(storage: DBStorage, make_user: Callable[..., User]) -> User:
    return make_user(storage)


@pytest.fixture()
def refresh_tokens(storage: DBStorage) -> RefreshTokenService:
    return RefreshTokenService(storage)


@pytest.fixture()
def sessions(storage: DBStorage, refresh_tokens: RefreshTokenService) -> SessionManager:
    return SessionManager(storage, secret=TEST_SECRET, refresh_tokens=refresh_tokens)


@pytest.fixture()
def register(client: Any) -> Callable[..., dict]:
    """Create an account through the API and return its JSON payload."""

    def _register(email: str = "user@example.com", password: str = TEST_PASSWORD) -> dict:
        resp = client.post("/api/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _register


@pytest.fixture()
def login(client: Any, register: Callable[..., dict]) -> Callable[..., dict]:
    """Register then log in; returns the login payload."""

    def _login(email: str = "user@example.com", password: str = TEST_PASSWORD) -> dict:
        register(email, password)
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login
