from __future__ import annotations

from datetime import UTC, datetime

import redis  # type: ignore[import-untyped]

from homecooking.services._shared.ports import RefreshTokenRegistry


class RedisRefreshTokenRegistry(RefreshTokenRegistry):
    """
    Redis-backed single-use marker for refresh tokens.

    ``SET key 1 NX EX ttl`` is atomic, so concurrent exchanges of one token
    race on a single key and exactly one wins. Markers expire together with
    the token they describe.
    """

    def __init__(self, r: redis.Redis, *, prefix: str = "rt:used:") -> None:
        self.r = r
        self.prefix = prefix

    def _k(self, jti: str) -> str:
        return f"{self.prefix}{jti}"

    def consume(self, jti: str, *, expires_at: datetime) -> bool:
        ttl = max(1, int(expires_at.timestamp() - datetime.now(UTC).timestamp()))
        return bool(self.r.set(self._k(jti), "1", nx=True, ex=ttl))
