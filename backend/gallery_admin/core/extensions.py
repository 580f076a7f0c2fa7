"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import boto3
import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from gallery_admin.core.config import TokenSettings

if TYPE_CHECKING:
    from gallery_admin.services._shared.ports.blob_storage import BlobStorage

# Global naming convention for all constraints
#   %(table_name)s, %(column_0_name)s, %(referred_table_name)s, etc.
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address)

TOKEN_SETTINGS_KEY = "token_settings"
REDIS_KEY = "redis_client"
BLOB_STORAGE_KEY = "blob_storage"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, rate limiting and external clients.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`gallery_admin.models` package to ensure SQLAlchemy metadata is
        ready for migrations.

    Notes
    -----
    - Token settings are validated here so a misconfigured deployment fails
      at startup rather than on the first login.
    - Redis and S3 clients are only created when ``REDIS_URL`` and
      ``S3_BUCKET`` are set. Tests place their own doubles in
      ``app.extensions`` under the same keys.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from gallery_admin import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)

    app.extensions[TOKEN_SETTINGS_KEY] = TokenSettings.from_mapping(app.config)

    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        client = redis.Redis.from_url(redis_url, decode_responses=True)
        try:
            client.ping()
        except RedisError as exc:
            raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
        app.extensions[REDIS_KEY] = client
    else:
        app.extensions.pop(REDIS_KEY, None)

    bucket = app.config.get("S3_BUCKET")
    if bucket:
        from gallery_admin.infra.s3.s3_blob_storage import S3BlobStorage

        region = app.config.get("AWS_REGION", "us-east-1")
        app.extensions[BLOB_STORAGE_KEY] = S3BlobStorage(
            boto3.client("s3", region_name=region), bucket=bucket, region=region
        )
    else:
        app.extensions.pop(BLOB_STORAGE_KEY, None)


def get_token_settings() -> TokenSettings:
    """Return the token settings built for the current application."""
    return current_app.extensions[TOKEN_SETTINGS_KEY]


def get_redis() -> redis.Redis:
    """Return the Redis client bound to the current application."""
    client = current_app.extensions.get(REDIS_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized. Set REDIS_URL.")
    return client


def get_blob_storage() -> "BlobStorage":
    """Return the blob storage bound to the current application."""
    storage = current_app.extensions.get(BLOB_STORAGE_KEY)
    if storage is None:
        raise RuntimeError("Blob storage is not initialized. Set S3_BUCKET.")
    return storage
