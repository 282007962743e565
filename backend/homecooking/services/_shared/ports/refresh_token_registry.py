from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Protocol


class RefreshTokenRegistry(Protocol):
    """
    Records refresh tokens that have already been exchanged.

    Only consulted when single-use refresh tokens are enabled.
    ``consume`` MUST be atomic: of two concurrent calls with the same
    ``jti`` exactly one returns ``True``.
    """

    def consume(self, jti: str, *, expires_at: datetime) -> bool:
        """
        Mark ``jti`` as used.

        :param jti: Refresh token identifier.
        :param expires_at: Token expiry; the marker may be forgotten afterwards.
        :returns: ``True`` on first use, ``False`` if it was already consumed.
        """
        ...


class InMemoryRefreshTokenRegistry(RefreshTokenRegistry):
    """Process-local registry guarded by a lock (tests, single worker)."""

    def __init__(self) -> None:
        self._used: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def consume(self, jti: str, *, expires_at: datetime) -> bool:
        with self._lock:
            self._purge(datetime.now(UTC))
            if jti in self._used:
                return False
            self._used[jti] = expires_at
            return True

    def _purge(self, now: datetime) -> None:
        stale = [k for k, exp in self._used.items() if exp <= now]
        for k in stale:
            del self._used[k]
