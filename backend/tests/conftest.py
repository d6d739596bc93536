from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.models.enums import UserRole
from app.services.users import UserService

API = "/v1"


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "db_create_all": True,
        "environment": "test",
        "allowed_origins": "http://testserver",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    """Test client bound to a fresh in-memory database."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def auth(user: dict) -> dict:
    """Identity header for the given user."""
    return {"X-User-Id": user["id"]}


def promote(client: TestClient, user: dict, role: str = "admin") -> dict:
    """Change a user's role through the service layer, on the app's event loop."""

    async def _set_role():
        async with client.app.state.database.session_factory() as db:
            await UserService(db).set_role(UUID(user["id"]), UserRole(role))

    client.portal.call(_set_role)
    return {**user, "role": role}


@pytest.fixture
def make_user(client):
    counter = {"n": 0}

    def _make_user(role: str = "tenant", **fields) -> dict:
        counter["n"] += 1
        payload = {
            "email": f"{role}{counter['n']}@example.com",
            "full_name": f"{role.title()} User{counter['n']}",
            "role": "tenant" if role == "admin" else role,
        }
        payload.update(fields)
        response = client.post(f"{API}/users", json=payload)
        assert response.status_code == 201, response.text
        if role == "admin":
            return promote(client, response.json())
        return response.json()

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def operator(make_user):
    return make_user("operator")


@pytest.fixture
def tenant(make_user):
    return make_user("tenant")


@pytest.fixture
def make_property(client, operator):
    def _make_property(owner: dict = None, **fields) -> dict:
        payload = {"title": "Sunny flat"}
        payload.update(fields)
        response = client.post(f"{API}/properties", json=payload, headers=auth(owner or operator))
        assert response.status_code == 201, response.text
        return response.json()

    return _make_property
