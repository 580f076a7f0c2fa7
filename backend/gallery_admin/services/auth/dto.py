# gallery_admin/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from gallery_admin.models.user import Role, User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for self-registration.

    :param name: Display name.
    :param email: Login email (normalized by the model).
    :param whatsapp: Contact handle.
    :param watermark: Watermark text preference.
    :param password: Raw password (hashed by the model).
    :param role: Optional requested role.
    """

    name: str
    email: str
    whatsapp: str
    watermark: str
    password: str
    role: Role | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :param password: Raw password (to be verified).
    :param role: When given, the stored role must match.
    """

    email: str
    password: str
    role: Role | None = None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout. Either token may be absent.
    """

    access_token: str | None = None
    refresh_token: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class SessionOut:
    """Authenticated user together with a freshly issued pair."""

    user: User
    tokens: TokenPairOut
