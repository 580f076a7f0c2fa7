# comments in English; reST docstrings
from __future__ import annotations

import json
import math
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import redis  # type: ignore[import-untyped]

from gallery_admin.services._shared.ports.token_index import HashedTokenIndex, RefreshTokenRecord


class RedisHashedTokenIndex(HashedTokenIndex):
    """
    Redis-backed hashed token index.

    Keys
    ----
    ``rt:<hash>``
        JSON ``{"user_id", "created_at"}``, written with ``SET NX EX`` so the
        insert is unique and expires with the refresh token itself.
    ``rt:u:<user_id>``
        Set of the user's refresh hashes, for bulk revocation.
    ``bl:at:<hash>``
        Blacklist marker for a revoked access token, with a TTL.

    :param r: A Redis client (already connected).
    :param refresh_ttl: Lifetime of refresh records.
    """

    def __init__(self, r: redis.Redis, *, refresh_ttl: timedelta = timedelta(days=10)) -> None:
        self.r = r
        self.refresh_ttl = refresh_ttl

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token_hash: str) -> str:
        return f"rt:{token_hash}"

    @staticmethod
    def _ku(user_id: int) -> str:
        return f"rt:u:{user_id}"

    @staticmethod
    def _kb(token_hash: str) -> str:
        return f"bl:at:{token_hash}"

    @staticmethod
    def _seconds(delta: timedelta) -> int:
        return max(1, math.ceil(delta.total_seconds()))

    @staticmethod
    def _text(raw: Any) -> str:
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def _record(self, token_hash: str, raw: Any) -> RefreshTokenRecord:
        data = json.loads(self._text(raw))
        return RefreshTokenRecord(
            token_hash=token_hash,
            user_id=int(data["user_id"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )

    # -------------------- refresh records ------------------------

    def record_refresh_token(self, token_hash: str, user_id: int) -> None:
        """
        Insert the refresh record *before* the token is handed to the client.

        :raises ValueError: If the hash is already recorded.
        """
        value = json.dumps(
            {"user_id": user_id, "created_at": datetime.now(UTC).isoformat()}
        )
        ttl = self._seconds(self.refresh_ttl)
        created = self.r.set(self._k(token_hash), value, nx=True, ex=ttl)
        if not created:
            raise ValueError("Refresh token hash already recorded")
        pipe = self.r.pipeline(transaction=True)
        pipe.sadd(self._ku(user_id), token_hash)
        pipe.expire(self._ku(user_id), ttl)
        pipe.execute()

    def find_refresh_token(self, token_hash: str) -> RefreshTokenRecord | None:
        raw = self.r.get(self._k(token_hash))
        return None if raw is None else self._record(token_hash, raw)

    def consume_refresh_token(self, token_hash: str) -> RefreshTokenRecord | None:
        # GETDEL is a single command, so only one caller can observe the value.
        raw = self.r.getdel(self._k(token_hash))
        if raw is None:
            return None
        record = self._record(token_hash, raw)
        self.r.srem(self._ku(record.user_id), token_hash)
        return record

    def delete_refresh_token(self, token_hash: str) -> bool:
        return self.consume_refresh_token(token_hash) is not None

    def revoke_all_for_user(self, user_id: int) -> int:
        members = cast(set[Any], self.r.smembers(self._ku(user_id)))
        hashes = [self._text(m) for m in members]
        pipe = self.r.pipeline(transaction=True)
        for token_hash in hashes:
            pipe.delete(self._k(token_hash))
        pipe.delete(self._ku(user_id))
        results = pipe.execute()
        # last result is the set deletion
        return int(sum(int(n) for n in results[:-1]))

    # -------------------- blacklist ------------------------

    def blacklist_access_token(self, token_hash: str, ttl: timedelta) -> None:
        # idempotent; a repeated revoke only extends the marker
        self.r.set(self._kb(token_hash), "1", ex=self._seconds(ttl))

    def is_blacklisted(self, token_hash: str) -> bool:
        return cast(int, self.r.exists(self._kb(token_hash))) == 1
