"""Shared pytest fixtures."""

import pytest

from api import create_app
from models.user import User
from services.auth_service import AuthService
from services.settings import SecuritySettings
from utils.exceptions import NotFound, StoreError
from utils.security import hash_password

TEST_SECRET = "test-secret"


class FakeUserStore:
    """In-memory stand-in for UserStore."""

    def __init__(self):
        self.users = {}

    def add(self, first_name, last_name, email, password):
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
        )
        self.users[email] = user
        return user

    def get_by_email(self, email):
        try:
            return self.users[email]
        except KeyError:
            raise NotFound("User not found") from None

    def get_by_id(self, user_id):
        for user in self.users.values():
            if user.id == user_id:
                return user
        raise NotFound("User not found")


class FakeRefreshTokenStore:
    """In-memory stand-in for RefreshTokenStore; set fail=True to break writes."""

    def __init__(self, fail=False):
        self.fail = fail
        self.records = []
        self.saves = 0

    def create(self, refresh_token):
        if self.fail:
            raise StoreError()
        self.records.append(refresh_token)
        return refresh_token

    def save(self, refresh_token):
        self.saves += 1
        return refresh_token

    def get_by_token(self, token):
        for record in self.records:
            if record.token == token:
                return record
        raise NotFound("Refresh token not found")


@pytest.fixture
def settings():
    return SecuritySettings(
        jwt_secret=TEST_SECRET,
        access_token_ttl_minutes=15,
        refresh_token_ttl_hours=24,
        refresh_tokens_enabled=True,
    )


@pytest.fixture
def user_store():
    store = FakeUserStore()
    store.add("Ada", "Lovelace", "ada@example.com", "secret1")
    return store


@pytest.fixture
def refresh_store():
    return FakeRefreshTokenStore()


@pytest.fixture
def auth_service(user_store, refresh_store, settings):
    return AuthService(user_store, refresh_store, settings)


@pytest.fixture
def app(tmp_path):
    app = create_app(
        "test",
        overrides={"DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}"},
    )
    yield app
    app.extensions["storage"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered(client):
    """Register a user through the API and return the request payload."""
    payload = {
        "firstName": "A",
        "lastName": "B",
        "email": "a@b.com",
        "password": "secret1",
    }
    resp = client.post("/api/v1/auth/register", json=payload)
    assert resp.status_code == 201
    return {**payload, "id": resp.get_json()["data"]["id"]}


@pytest.fixture
def auth_headers(client, registered):
    resp = client.post(
        "/api/v1/auth/login",
        json={"email": registered["email"], "password": registered["password"]},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}
