"""
Runtime Environment Validation Module

Validates the loaded settings at application startup. If validation fails,
the application refuses to start (hard fail) instead of erroring on the first
request.
"""

import logging
import sys

from pydantic import ValidationError

from app.core.config import Environment, Settings

logger = logging.getLogger(__name__)

SUPPORTED_DATABASE_SCHEMES = ("postgresql", "sqlite")


class EnvironmentValidationError(RuntimeError):
    """Raised when the configuration cannot be used to start the application."""


def check_settings(settings: Settings) -> list[str]:
    """Return a list of configuration problems (empty when valid)."""
    problems: list[str] = []

    # 1. Database URL: scheme check
    if not settings.database_url.startswith(SUPPORTED_DATABASE_SCHEMES):
        problems.append(
            "DATABASE_URL must be a PostgreSQL (postgresql+asyncpg://) "
            "or SQLite (sqlite+aiosqlite://) connection string"
        )
    elif settings.is_sqlite and settings.environment == Environment.PRODUCTION:
        problems.append("SQLite is not supported when ENVIRONMENT=production")

    # 2. CORS: wildcard is not allowed outside debug mode
    if not settings.debug and "*" in settings.cors_origins:
        problems.append(
            "Wildcard CORS origin (*) detected in production mode. "
            "Set ALLOWED_ORIGINS to specific domains (comma-separated)."
        )

    # 3. Pool sizing
    if settings.db_pool_size < 1:
        problems.append("DB_POOL_SIZE must be at least 1")
    if settings.db_command_timeout <= 0:
        problems.append("DB_COMMAND_TIMEOUT must be positive")

    # 4. Table auto-creation is a development convenience
    if settings.db_create_all and settings.environment == Environment.PRODUCTION:
        problems.append("DB_CREATE_ALL must be disabled in production; run alembic migrations")

    return problems


def validate_environment(settings: Settings) -> Settings:
    """
    Validate the settings the application is about to start with.

    Raises:
        EnvironmentValidationError: If any check fails
    """
    problems = check_settings(settings)
    if problems:
        for problem in problems:
            logger.error(f"[STARTUP] {problem}")
        raise EnvironmentValidationError("; ".join(problems))

    logger.info("[STARTUP] Environment validation passed")
    logger.info(f"[STARTUP]    App: {settings.app_name}")
    logger.info(f"[STARTUP]    Environment: {settings.environment.value}")
    logger.info(f"[STARTUP]    CORS Origins: {settings.allowed_origins}")
    logger.info(f"[STARTUP]    Booking transitions enforced: {settings.enforce_booking_transitions}")
    return settings


def load_settings_or_exit() -> Settings:
    """Load settings from the environment and validate them, exiting with code 1 on failure."""
    try:
        settings = Settings()
    except ValidationError as e:
        print("FATAL: Environment validation failed", file=sys.stderr)
        print("\nMissing or invalid environment variables:", file=sys.stderr)
        for error in e.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            print(f"   - {field}: {error['msg']}", file=sys.stderr)
        print("\nPlease check your .env file or environment variables.", file=sys.stderr)
        sys.exit(1)

    try:
        return validate_environment(settings)
    except EnvironmentValidationError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    # Allow running this module directly to check a deployment's configuration
    load_settings_or_exit()
    print("All environment variables are valid!")
