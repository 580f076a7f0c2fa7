# comments in English; reST docstrings
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from gallery_admin.core.config import TokenSettings
from gallery_admin.services._shared.errors import InvalidTokenError, TokenExpiredError
from gallery_admin.services._shared.ports.token_signer import TokenClaims, TokenSigner, TokenType

REQUIRED_CLAIMS = ["sub", "exp", "iat", "jti", "type"]


class PyJWTTokenSigner(TokenSigner):
    """
    HS256 JWT signer with one secret per token class.

    :param settings: Secrets, lifetimes and algorithm.
    :param clock: Time source; defaults to ``datetime.now(UTC)``.

    Claims: ``sub`` (user id as string), ``type``, ``jti``, ``iat``, ``exp``.
    """

    def __init__(
        self, settings: TokenSettings, *, clock: Callable[[], datetime] | None = None
    ) -> None:
        self.settings = settings
        self._clock = clock or (lambda: datetime.now(UTC))

    # -------------------- helpers --------------------

    def _secret(self, token_type: TokenType) -> str:
        if token_type is TokenType.ACCESS:
            return self.settings.access_secret
        return self.settings.refresh_secret

    def _ttl(self, token_type: TokenType) -> timedelta:
        if token_type is TokenType.ACCESS:
            return self.settings.access_ttl
        return self.settings.refresh_ttl

    def _issue(self, user_id: int, token_type: TokenType) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "type": token_type.value,
            "jti": uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl(token_type)).timestamp()),
        }
        return jwt.encode(payload, self._secret(token_type), algorithm=self.settings.algorithm)

    def _verify(self, token: str, token_type: TokenType) -> TokenClaims:
        try:
            decoded = jwt.decode(
                token,
                self._secret(token_type),
                algorithms=[self.settings.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        if decoded.get("type") != token_type.value:
            raise InvalidTokenError()
        subject = str(decoded["sub"])
        if not subject.isdigit():
            raise InvalidTokenError()

        return TokenClaims(
            user_id=int(subject),
            expires_at=datetime.fromtimestamp(int(decoded["exp"]), tz=UTC),
            token_type=token_type,
            jti=str(decoded["jti"]),
        )

    # -------------------- API ------------------------

    def issue_access_token(self, user_id: int) -> str:
        return self._issue(user_id, TokenType.ACCESS)

    def issue_refresh_token(self, user_id: int) -> str:
        return self._issue(user_id, TokenType.REFRESH)

    def verify_access_token(self, token: str) -> TokenClaims:
        return self._verify(token, TokenType.ACCESS)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        return self._verify(token, TokenType.REFRESH)
