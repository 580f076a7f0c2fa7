"""Request and role gates for protected endpoints.

The resolved user is stored on ``flask.g.current_user`` for the view.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from flask import g

from gallery_admin.api.deps import access_token, session_service
from gallery_admin.core.errors import Forbidden, Unauthorized
from gallery_admin.models.user import User

F = TypeVar("F", bound=Callable[..., Any])


def current_user() -> User:
    """Return the user resolved by :func:`authenticate`."""

    user = getattr(g, "current_user", None)
    if user is None:
        raise Unauthorized()
    return user


def authenticate(func: F) -> F:
    """Require a valid, non-revoked access token in ``x-access-token``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_user = session_service().authenticate(access_token())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def is_admin(func: F) -> F:
    """Require an authenticated admin. Apply beneath :func:`authenticate`."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if not current_user().is_admin:
            raise Forbidden()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_user(func: F) -> F:
    """Resolve the user when a usable token is present; otherwise continue as a guest."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_user = session_service().try_authenticate(access_token())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
