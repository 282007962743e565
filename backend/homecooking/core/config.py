"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

#: Placeholder shipped in ``.env.example``; refused in production.
PLACEHOLDER_SECRET: Final[str] = "change-me-in-production"

#: Refresh tokens always live one week.
REFRESH_TOKEN_EXPIRY_HOURS: Final[int] = 7 * 24


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable.

    Unparseable values fall back to ``default`` so a typo never crashes
    import; :func:`validate_config` still rejects out-of-range results.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val.strip())
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        HS256 secret for **access** tokens.
    JWT_REFRESH_SECRET_KEY: str
        HS256 secret for **refresh** tokens. Must differ from the access
        secret so neither kind can be minted with the other's key.
    TOKEN_EXPIRY_HOURS: int
        Access token lifetime in hours (``24`` by default).
    REFRESH_TOKEN_EXPIRY_HOURS: int
        Refresh token lifetime in hours (fixed at one week).
    REFRESH_TOKEN_SINGLE_USE: bool
        When ``True`` a refresh token can be exchanged only once.
    REDIS_URL: str | None
        Optional Redis connection used by the single-use refresh registry
        and as rate-limit storage.
    SHARE_CODE_BYTES / INVITE_CODE_BYTES: int
        Random bytes behind each generated code (hex encoded, so codes are
        twice as long).
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to ``POST /auth/login``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    APP_ENV = "development"
    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", PLACEHOLDER_SECRET)
    JWT_SECRET_KEY = os.getenv("JWT_SECRET", PLACEHOLDER_SECRET)
    JWT_REFRESH_SECRET_KEY = os.getenv("REFRESH_SECRET", PLACEHOLDER_SECRET + "-refresh")
    TOKEN_EXPIRY_HOURS = env_int("TOKEN_EXPIRY_HOURS", 24)
    REFRESH_TOKEN_EXPIRY_HOURS = REFRESH_TOKEN_EXPIRY_HOURS
    REFRESH_TOKEN_SINGLE_USE = env_bool("REFRESH_TOKEN_SINGLE_USE", False)

    # Ephemeral codes
    SHARE_CODE_BYTES = 8
    INVITE_CODE_BYTES = 8

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./homecooking.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Redis (optional)
    REDIS_URL = os.getenv("REDIS_URL") or None

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = 600
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_HOPS = env_int("PROXY_HOPS", 1)

    # Rate limiting
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", REDIS_URL or "memory://")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    APP_ENV = "development"
    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables rate limiting.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses fixed, distinct token secrets so tests are reproducible.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PROPAGATE_EXCEPTIONS = True
    JWT_SECRET_KEY = "test-access-secret"
    JWT_REFRESH_SECRET_KEY = "test-refresh-secret"
    TOKEN_EXPIRY_HOURS = 1
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled. :func:`validate_config` refuses
    to boot while any secret still carries the placeholder value.
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def validate_config(config: Mapping[str, Any]) -> None:
    """Reject configurations that cannot run safely.

    :param config: Loaded Flask config (or any mapping with the same keys).
    :raises RuntimeError: On empty secrets, identical access/refresh secrets,
        a non-positive token lifetime, or placeholder secrets in production.
    """
    access = str(config.get("JWT_SECRET_KEY") or "")
    refresh = str(config.get("JWT_REFRESH_SECRET_KEY") or "")
    if not access or not refresh:
        raise RuntimeError("JWT_SECRET_KEY and JWT_REFRESH_SECRET_KEY must be set.")
    if access == refresh:
        raise RuntimeError("Access and refresh token secrets must differ.")

    hours = config.get("TOKEN_EXPIRY_HOURS")
    if not isinstance(hours, int) or hours <= 0:
        raise RuntimeError("TOKEN_EXPIRY_HOURS must be a positive integer.")

    if str(config.get("APP_ENV", "")).lower() == "production":
        for key in ("SECRET_KEY", "JWT_SECRET_KEY", "JWT_REFRESH_SECRET_KEY"):
            if str(config.get(key, "")).startswith(PLACEHOLDER_SECRET):
                raise RuntimeError(f"{key} must be changed in production.")
