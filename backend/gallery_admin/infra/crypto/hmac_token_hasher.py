from __future__ import annotations

import hashlib
import hmac

from gallery_admin.services._shared.ports.token_index import TokenHasher


class HmacTokenHasher(TokenHasher):
    """
    HMAC-SHA256 of a token, hex encoded.

    Deterministic so the hash works as a lookup key, keyed so a leaked
    index cannot be matched against guessed tokens without the secret.
    """

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("HMAC secret must be non-empty")
        self._key = secret.encode("utf-8")

    def hash(self, token: str) -> str:
        return hmac.new(self._key, token.encode("utf-8"), hashlib.sha256).hexdigest()
