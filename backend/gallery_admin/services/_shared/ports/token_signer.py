from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified content of a signed token.

    :ivar user_id: Subject the token was issued to.
    :ivar expires_at: Absolute expiry (UTC).
    :ivar token_type: Access or refresh.
    :ivar jti: Random identifier making every issued token unique.
    """

    user_id: int
    expires_at: datetime
    token_type: TokenType
    jti: str


class TokenSigner(Protocol):
    """
    Port for issuing and verifying time-bound signed tokens.

    Each token class is signed with its own secret, so an access token never
    verifies as a refresh token and vice versa. Verification raises
    ``TokenExpiredError`` or ``InvalidTokenError`` from
    :mod:`gallery_admin.services._shared.errors`.
    """

    def issue_access_token(self, user_id: int) -> str: ...

    def issue_refresh_token(self, user_id: int) -> str: ...

    def verify_access_token(self, token: str) -> TokenClaims: ...

    def verify_refresh_token(self, token: str) -> TokenClaims: ...
