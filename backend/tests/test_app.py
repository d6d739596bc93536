import pytest

from app.core.env_validation import EnvironmentValidationError, check_settings
from app.main import create_app
from conftest import make_settings


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "Rental Marketplace"}


def test_root_endpoint(client):
    data = client.get("/").json()
    assert data["service"] == "Rental Marketplace"
    assert data["docs"] == "Disabled in production"


def test_test_settings_are_valid():
    assert check_settings(make_settings()) == []


def test_unsupported_database_scheme():
    problems = check_settings(make_settings(database_url="mysql://localhost/db"))
    assert len(problems) == 1
    assert "DATABASE_URL" in problems[0]


def test_production_rejects_sqlite_and_create_all():
    problems = check_settings(make_settings(environment="production"))
    assert any("SQLite" in p for p in problems)
    assert any("DB_CREATE_ALL" in p for p in problems)


def test_wildcard_cors_rejected_outside_debug():
    assert check_settings(make_settings(allowed_origins="*"))
    assert check_settings(make_settings(allowed_origins="*", debug=True)) == []


def test_invalid_settings_refuse_to_start():
    with pytest.raises(EnvironmentValidationError):
        create_app(make_settings(db_pool_size=0))
