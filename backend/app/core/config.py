"""Application configuration using Pydantic Settings."""

from enum import Enum

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"

class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Rental Marketplace"
    debug: bool = False
    environment: Environment = Environment.DEVELOPMENT
    api_v1_prefix: str = "/v1"
    log_level: str = "INFO"

    # Database
    database_url: str
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_command_timeout: float = 30.0
    db_echo: bool = False
    # Dev/test only: create tables at startup instead of running migrations
    db_create_all: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Booking requests
    enforce_booking_transitions: bool = True

    # Matching
    matching_default_limit: int = 50
    matching_recommendation_min_score: int = 60

    @property
    def cors_origins(self) -> list[str]:
        """ALLOWED_ORIGINS split into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency: the settings the running app was created with."""
    return request.app.state.settings
