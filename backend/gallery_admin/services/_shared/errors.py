"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, token adapters and application services.

The translation to HTTP responses is handled by ``gallery_admin/core/errors.py``,
which keeps the single mapping from error kind to status code.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from gallery_admin.core.constants import Messages


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    # Some dialects (PostgreSQL) include constraint name in the error message
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    - ``message`` is the user-facing text placed in the response envelope.
    """

    default_message = Messages.BAD_REQUEST

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class BadRequestError(ServiceError):
    """Missing or invalid input that the schema layer cannot express."""


class AuthenticationError(ServiceError):
    """Bad credentials or a role filter that does not match."""

    default_message = Messages.UNAUTH


class AuthorizationError(ServiceError):
    """Authenticated but not allowed to perform the operation."""

    default_message = Messages.ADMIN_REQUIRED


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} Not Found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation, used as the message.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


# --------------------------------------------------------------------------- #
# Session / token errors
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """
    Base class for failures of the session protocol.

    Responses produced for these errors never carry token headers, so a
    client cannot keep half of a pair.
    """

    default_message = Messages.INVALID_TOKEN


class TokenMissingError(TokenError):
    default_message = Messages.ACCESS_TOKEN_MISSING


class TokenExpiredError(TokenError):
    default_message = Messages.TOKEN_EXPIRE


class InvalidTokenError(TokenError):
    default_message = Messages.INVALID_TOKEN


class TokenRevokedError(TokenError):
    default_message = Messages.TOKEN_REVOKE


class InvalidRefreshTokenError(TokenError):
    default_message = Messages.INVALID_REFRESH_TOKEN


class SessionUserNotFoundError(TokenError):
    """The token is sound but the account it names no longer exists."""

    default_message = Messages.USER_NOT_FOUND
