"""User-facing message taxonomy and wire-level constants."""

from __future__ import annotations

from typing import Final

ACCESS_TOKEN_HEADER: Final[str] = "x-access-token"
REFRESH_TOKEN_HEADER: Final[str] = "x-refresh-token"
BEARER_PREFIX: Final[str] = "Bearer "

# Values some clients send when they have nothing stored
ABSENT_TOKEN_MARKERS: Final[frozenset[str]] = frozenset({"", "undefined", "null"})


class Messages:
    """Fixed messages returned in the ``message`` field of the envelope."""

    BAD_REQUEST = "Bad Request"
    USER_NOT_FOUND = "User Not Found"
    LOGIN_SUCCESS = "Login Success"
    REGISTER_SUCCESS = "Register Success"
    LOGOUT_SUCCESS = "Logout Success"
    USER_EXISTS = "User Already Exists"
    UNAUTH = "Unauthorized"
    AUTH = "Authorized"
    INVALID_EMAIL_PASSWORD = "Invalid Email or Password"
    INVALID_ROLE = "Invalid Role"
    INTERNAL_SERVER_ERROR = "Internal Server Error"
    TOKEN_REFRESH = "Tokens Refreshed Successfully"
    ACCESS_TOKEN_MISSING = "Access Token Missing"
    REFRESH_TOKEN_MISSING = "Refresh Token Missing"
    INVALID_REFRESH_TOKEN = "Invalid Refresh Token"
    SESSION_EXPIRE = "Session Expired, Please Login Again"
    TOKEN_REVOKE = "Token Has Been Revoked"
    INVALID_TOKEN = "Invalid Token"
    TOKEN_EXPIRE = "Token Expired Please Login Again"
    ADMIN_REQUIRED = "Access denied. Admin privileges required."
    RESOURCE_CONFLICT = "Resource Conflict"
    SERVICE_UNAVAILABLE = "Service Temporarily Unavailable"
    VALIDATION_FAILED = "Validation Failed"
