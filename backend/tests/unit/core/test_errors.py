"""Unit tests for the error-to-status registry and envelope rendering."""

from __future__ import annotations

from http import HTTPStatus

import pytest

from gallery_admin.core.errors import envelope, status_for
from gallery_admin.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ConflictError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
    SessionUserNotFoundError,
    TokenExpiredError,
    TokenMissingError,
    TokenRevokedError,
)


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (TokenMissingError(), HTTPStatus.UNAUTHORIZED),
        (TokenExpiredError(), HTTPStatus.UNAUTHORIZED),
        (InvalidTokenError(), HTTPStatus.UNAUTHORIZED),
        (TokenRevokedError(), HTTPStatus.FORBIDDEN),
        (InvalidRefreshTokenError(), HTTPStatus.FORBIDDEN),
        (SessionUserNotFoundError(), HTTPStatus.NOT_FOUND),
        (AuthenticationError(), HTTPStatus.UNAUTHORIZED),
        (AuthorizationError(), HTTPStatus.FORBIDDEN),
        (NotFoundError("Image", 1), HTTPStatus.NOT_FOUND),
        (ConflictError("User", "taken"), HTTPStatus.CONFLICT),
        (BadRequestError("nope"), HTTPStatus.BAD_REQUEST),
    ],
)
def test_status_for_each_error_kind(error, status):
    assert status_for(error) == status


def test_unregistered_subclass_uses_nearest_ancestor():
    class CustomRevoked(TokenRevokedError):
        pass

    assert status_for(CustomRevoked()) == HTTPStatus.FORBIDDEN


def test_messages():
    assert TokenExpiredError().message == "Token Expired Please Login Again"
    assert NotFoundError("User", 3).message == "User Not Found"
    assert ConflictError("User", "User Already Exists").message == "User Already Exists"
    assert ServiceError().message == "Bad Request"


def test_envelope_shape():
    assert envelope(False, "x") == {"success": False, "message": "x", "payload": None}


class TestHandlers:
    def test_unknown_route_is_enveloped_404(self, client):
        resp = client.get("/api/v1/nope")

        body = resp.get_json()
        assert resp.status_code == 404
        assert body == {"success": False, "message": "Route '/api/v1/nope' not found", "payload": None}

    def test_security_and_request_id_headers(self, client):
        resp = client.get("/api/v1/health")

        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Request-ID"]

    def test_request_id_is_echoed(self, client):
        resp = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})

        assert resp.headers["X-Request-ID"] == "abc-123"
