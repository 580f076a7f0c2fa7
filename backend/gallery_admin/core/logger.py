"""JSON logging to stdout with per-request correlation ids."""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
# Accepted from clients, first match wins
INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")
# ``extra=`` keys copied into the JSON line when present
EXTRA_FIELDS = ("method", "path", "status", "endpoint", "elapsed_ms", "user_id", "revoked")
QUIET_PATHS = frozenset({"/api/v1/health"})


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        line.update({k: getattr(record, k) for k in EXTRA_FIELDS if hasattr(record, k)})
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on every record (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """Return the id of the current request, adopting the client's or minting one."""

    if not has_request_context():
        return str(uuid4())
    rid = g.get("request_id")
    if rid is None:
        rid = next((request.headers[h] for h in INBOUND_ID_HEADERS if request.headers.get(h)), None)
        rid = rid or str(uuid4())
        g.request_id = rid
    return rid


def configure_logging(level: str | int = "INFO") -> None:
    """Replace root handlers with a single JSON stdout handler at ``level``."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers[:] = [handler]
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)


def init_app(app: Flask) -> None:
    """Log one start and one end line per request and echo ``X-Request-ID``."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _start_request() -> None:
        # An app context can outlive a request; never reuse its id or user
        g.pop("request_id", None)
        g.pop("current_user", None)
        g.request_started = time.perf_counter()
        ensure_request_id()
        if request.path not in QUIET_PATHS:
            app.logger.info("request.start", extra={"method": request.method, "path": request.path})

    @app.after_request
    def _end_request(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        if request.path in QUIET_PATHS:
            return response
        extra: dict[str, Any] = {
            "method": request.method,
            "path": request.path,
            "status": response.status_code,
        }
        started = g.pop("request_started", None)
        if started is not None:
            extra["elapsed_ms"] = round((time.perf_counter() - started) * 1000, 2)
        user = g.get("current_user")
        if user is not None:
            extra["user_id"] = user.id
        app.logger.info("request.end", extra=extra)
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id"]
