"""Shared API helpers for request parsing, responses and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from gallery_admin.core.constants import (
    ACCESS_TOKEN_HEADER,
    BEARER_PREFIX,
    REFRESH_TOKEN_HEADER,
)
from gallery_admin.core.errors import envelope
from gallery_admin.core.extensions import get_blob_storage, get_redis, get_token_settings
from gallery_admin.infra.crypto.hmac_token_hasher import HmacTokenHasher
from gallery_admin.infra.jwt.pyjwt_token_signer import PyJWTTokenSigner
from gallery_admin.infra.redis.redis_token_index import RedisHashedTokenIndex
from gallery_admin.repositories.base import Pagination
from gallery_admin.schemas.common import PaginationQuerySchema
from gallery_admin.services.auth.dto import TokenPairOut
from gallery_admin.services.auth.service import SessionService
from gallery_admin.services.images.service import ImageService
from gallery_admin.services.users.service import UserService

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------- #
# Request parsing
# --------------------------------------------------------------------------- #


def parse_pagination(default_limit: int = 20, max_limit: int = 100) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"])


def json_body() -> dict[str, Any]:
    """Return the JSON body as a dict, treating a missing or non-object body as empty."""

    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def bearer_token(header: str) -> str | None:
    """
    Extract the token from a ``Bearer <token>`` header.

    A bare token without the prefix is accepted as well. Absent headers give
    ``None``; placeholder values are left for the session service to judge.
    """

    raw = request.headers.get(header)
    if raw is None:
        return None
    raw = raw.strip()
    if raw[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
        return raw[len(BEARER_PREFIX) :].strip()
    return raw


def access_token() -> str | None:
    return bearer_token(ACCESS_TOKEN_HEADER)


def refresh_token() -> str | None:
    return bearer_token(REFRESH_TOKEN_HEADER)


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def ok(message: str, payload: Any = None, *, status: int = 200) -> Response:
    """Success envelope."""

    return json_response(envelope(True, message, payload), status=status)


def set_token_headers(response: Response, tokens: TokenPairOut) -> Response:
    """Attach a freshly issued pair as ``Bearer`` headers."""

    response.headers[ACCESS_TOKEN_HEADER] = f"{BEARER_PREFIX}{tokens.access_token}"
    response.headers[REFRESH_TOKEN_HEADER] = f"{BEARER_PREFIX}{tokens.refresh_token}"
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def token_index() -> RedisHashedTokenIndex:
    settings = get_token_settings()
    return RedisHashedTokenIndex(get_redis(), refresh_ttl=settings.refresh_ttl)


def session_service() -> SessionService:
    """Build a :class:`SessionService` from the application's token settings."""

    settings = get_token_settings()
    return SessionService(
        signer=PyJWTTokenSigner(settings),
        index=token_index(),
        hasher=HmacTokenHasher(settings.hash_secret),
        blacklist_ttl=settings.blacklist_ttl,
        allow_role_on_register=bool(current_app.config.get("ALLOW_ADMIN_SELF_REGISTRATION")),
    )


def user_service() -> UserService:
    return UserService(token_index=token_index())


def image_service(*, with_storage: bool = True) -> ImageService:
    return ImageService(
        storage=get_blob_storage() if with_storage else None,
        max_bytes=int(current_app.config.get("MAX_IMAGE_BYTES", 5 * 1024 * 1024)),
    )
