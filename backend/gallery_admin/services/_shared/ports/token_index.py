from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Stored trace of an issued refresh token.

    :ivar token_hash: Keyed hash of the token; the token itself is never stored.
    :ivar user_id: Owner user id.
    :ivar created_at: Issuance time (UTC).
    """

    token_hash: str
    user_id: int
    created_at: datetime


class TokenHasher(Protocol):
    """Deterministic, secret-keyed one-way hash applied to raw tokens."""

    def hash(self, token: str) -> str: ...


class HashedTokenIndex(Protocol):
    """
    Store of hashed refresh tokens and blacklisted access tokens.

    Inputs are always hashes. ``consume_refresh_token`` MUST be atomic so
    that two concurrent redemptions of one token have at most one winner.
    """

    def record_refresh_token(self, token_hash: str, user_id: int) -> None:
        """
        Insert a refresh record. Must run *before* the token reaches the client.

        :raises ValueError: If the hash is already present.
        """

    def find_refresh_token(self, token_hash: str) -> RefreshTokenRecord | None: ...

    def consume_refresh_token(self, token_hash: str) -> RefreshTokenRecord | None:
        """Find and delete in one step. :returns: The record, or ``None`` if absent."""

    def delete_refresh_token(self, token_hash: str) -> bool:
        """:returns: True if a record existed."""

    def revoke_all_for_user(self, user_id: int) -> int:
        """Delete every refresh record of ``user_id``. :returns: Number removed."""

    def blacklist_access_token(self, token_hash: str, ttl: timedelta) -> None: ...

    def is_blacklisted(self, token_hash: str) -> bool: ...


class InMemoryHashedTokenIndex(HashedTokenIndex):
    """
    Process-local index used by unit tests.

    .. note::
       A lock stands in for the store-level atomicity of the Redis adapter.
       Expiry is evaluated lazily against ``clock``.
    """

    def __init__(
        self,
        *,
        refresh_ttl: timedelta = timedelta(days=10),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._refresh: dict[str, tuple[RefreshTokenRecord, datetime]] = {}
        self._blacklist: dict[str, datetime] = {}
        self._refresh_ttl = refresh_ttl
        self._clock = clock or (lambda: datetime.now(UTC))
        self._lock = threading.Lock()

    def _live(self, token_hash: str) -> RefreshTokenRecord | None:
        entry = self._refresh.get(token_hash)
        if entry is None:
            return None
        record, expires_at = entry
        if expires_at <= self._clock():
            del self._refresh[token_hash]
            return None
        return record

    def record_refresh_token(self, token_hash: str, user_id: int) -> None:
        with self._lock:
            if self._live(token_hash) is not None:
                raise ValueError("Refresh token hash already recorded")
            now = self._clock()
            record = RefreshTokenRecord(token_hash=token_hash, user_id=user_id, created_at=now)
            self._refresh[token_hash] = (record, now + self._refresh_ttl)

    def find_refresh_token(self, token_hash: str) -> RefreshTokenRecord | None:
        with self._lock:
            return self._live(token_hash)

    def consume_refresh_token(self, token_hash: str) -> RefreshTokenRecord | None:
        with self._lock:
            record = self._live(token_hash)
            if record is not None:
                del self._refresh[token_hash]
            return record

    def delete_refresh_token(self, token_hash: str) -> bool:
        with self._lock:
            return self._refresh.pop(token_hash, None) is not None

    def revoke_all_for_user(self, user_id: int) -> int:
        with self._lock:
            owned = [h for h, (rec, _) in self._refresh.items() if rec.user_id == user_id]
            for h in owned:
                del self._refresh[h]
            return len(owned)

    def blacklist_access_token(self, token_hash: str, ttl: timedelta) -> None:
        with self._lock:
            self._blacklist[token_hash] = self._clock() + ttl

    def is_blacklisted(self, token_hash: str) -> bool:
        with self._lock:
            expires_at = self._blacklist.get(token_hash)
            if expires_at is None:
                return False
            if expires_at <= self._clock():
                del self._blacklist[token_hash]
                return False
            return True
