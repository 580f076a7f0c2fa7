"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Loads .env during development (no-op when the file is missing)
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
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Not used for tokens, which carry their own keys.
    JWT_ACCESS_KEY: str
        Secret used to sign access tokens.
    JWT_REFRESH_KEY: str
        Secret used to sign refresh tokens. Must differ from the access key.
    CRYPTO_TOKEN_KEY: str
        Key for the HMAC applied to tokens before they touch Redis.
    ACCESS_TOKEN_TTL_SECONDS: int
        Lifetime of access tokens (3 days by default).
    REFRESH_TOKEN_TTL_SECONDS: int
        Lifetime of refresh tokens (10 days by default).
    BLACKLIST_TTL_SECONDS: int
        Minimum time a revoked access token stays blacklisted.
    REDIS_URL: str
        Connection string of the token index store.
    S3_BUCKET, AWS_REGION: str
        Object storage target for uploaded images.
    MAX_IMAGE_BYTES: int
        Upload ceiling enforced through ``MAX_CONTENT_LENGTH``.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_ACCESS_KEY = os.getenv("JWT_ACCESS_KEY", "CHANGE_ME_ACCESS")
    JWT_REFRESH_KEY = os.getenv("JWT_REFRESH_KEY", "CHANGE_ME_REFRESH")
    CRYPTO_TOKEN_KEY = os.getenv("CRYPTO_TOKEN_KEY", "CHANGE_ME_HMAC")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_TTL_SECONDS = env_int("ACCESS_TOKEN_TTL_SECONDS", 3 * 24 * 3600)
    REFRESH_TOKEN_TTL_SECONDS = env_int("REFRESH_TOKEN_TTL_SECONDS", 10 * 24 * 3600)
    BLACKLIST_TTL_SECONDS = env_int("BLACKLIST_TTL_SECONDS", 600)

    # Rate limiting
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "10 per minute")
    # Admins are otherwise created through ``flask users create-admin``
    ALLOW_ADMIN_SELF_REGISTRATION = env_bool("ALLOW_ADMIN_SELF_REGISTRATION", False)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Redis / object storage
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    S3_BUCKET = os.getenv("S3_BUCKET", "")
    AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
    MAX_IMAGE_BYTES = env_int("MAX_IMAGE_BYTES", 5 * 1024 * 1024)
    # Leaves room for multipart framing around the image itself
    MAX_CONTENT_LENGTH = MAX_IMAGE_BYTES + 64 * 1024

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

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

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves ``REDIS_URL`` empty; tests inject a fakeredis client instead.
    - Disables rate limiting so repeated logins do not trip it.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = ""
    S3_BUCKET = ""
    RATELIMIT_ENABLED = False
    JWT_ACCESS_KEY = "test-access-secret"
    JWT_REFRESH_KEY = "test-refresh-secret"
    CRYPTO_TOKEN_KEY = "test-hmac-secret"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

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


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """Immutable token configuration shared by the signer and the token index.

    Built once per application from the Flask config and handed to the
    collaborators that need it, so protocol code never reads the environment.
    """

    access_secret: str
    refresh_secret: str
    hash_secret: str
    access_ttl: timedelta = timedelta(days=3)
    refresh_ttl: timedelta = timedelta(days=10)
    blacklist_ttl: timedelta = timedelta(minutes=10)
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret or not self.hash_secret:
            raise ValueError("Token secrets must be non-empty")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh token secrets must differ")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "TokenSettings":
        """Build settings from a Flask config (or any mapping with the same keys)."""
        return cls(
            access_secret=config["JWT_ACCESS_KEY"],
            refresh_secret=config["JWT_REFRESH_KEY"],
            hash_secret=config["CRYPTO_TOKEN_KEY"],
            access_ttl=timedelta(seconds=int(config.get("ACCESS_TOKEN_TTL_SECONDS", 3 * 24 * 3600))),
            refresh_ttl=timedelta(seconds=int(config.get("REFRESH_TOKEN_TTL_SECONDS", 10 * 24 * 3600))),
            blacklist_ttl=timedelta(seconds=int(config.get("BLACKLIST_TTL_SECONDS", 600))),
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
        )
