"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from gallery_admin.api.deps import json_response, timing
from gallery_admin.core.extensions import REDIS_KEY, db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and token store health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    redis_status = "absent"
    client = current_app.extensions.get(REDIS_KEY)
    if client is not None:
        try:
            client.ping()
            redis_status = "ok"
        except RedisError:  # pragma: no cover - depends on Redis availability
            current_app.logger.exception("healthcheck.redis_error")
            redis_status = "fail"

    version = current_app.config.get("APP_VERSION", "dev")
    payload = {"status": "ok", "db": db_status, "redis": redis_status, "version": version}
    return json_response(payload)
