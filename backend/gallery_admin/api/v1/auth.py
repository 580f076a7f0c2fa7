"""Authentication endpoints: register, login, status, refresh and logout.

Tokens travel only in the ``x-access-token`` / ``x-refresh-token`` headers.
"""

from __future__ import annotations

from flask import Blueprint, current_app

from gallery_admin.api.deps import (
    access_token,
    json_body,
    ok,
    refresh_token,
    session_service,
    set_token_headers,
    timing,
)
from gallery_admin.api.guards import authenticate, current_user
from gallery_admin.core.constants import Messages
from gallery_admin.core.errors import clear_token_headers
from gallery_admin.core.extensions import limiter
from gallery_admin.schemas import LoginSchema, RegisterSchema, UserSchema
from gallery_admin.services.auth.dto import LogoutIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "10 per minute"))


@bp.post("/register")
@timing
def register():
    """Create a pending account and return it with a fresh token pair."""

    dto = register_schema.load(json_body())
    session = session_service().register(dto)
    response = ok(Messages.REGISTER_SUCCESS, user_schema.dump(session.user), status=201)
    return set_token_headers(response, session.tokens)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Verify credentials and issue a new pair."""

    dto = login_schema.load(json_body())
    session = session_service().login(dto)
    response = ok(Messages.LOGIN_SUCCESS, user_schema.dump(session.user))
    return set_token_headers(response, session.tokens)


@bp.get("/status")
@authenticate
@timing
def status():
    """Return the user behind the presented access token."""

    return ok(Messages.AUTH, user_schema.dump(current_user()))


@bp.post("/refresh")
@bp.get("/token-refresh")
@timing
def refresh():
    """Redeem the refresh token for a brand-new pair."""

    tokens = session_service().refresh(refresh_token())
    return set_token_headers(ok(Messages.TOKEN_REFRESH), tokens)


@bp.post("/logout")
@bp.get("/logout")
@timing
def logout():
    """End the session; succeeds without a refresh token."""

    session_service().logout(LogoutIn(access_token=access_token(), refresh_token=refresh_token()))
    return clear_token_headers(ok(Messages.LOGOUT_SUCCESS))
