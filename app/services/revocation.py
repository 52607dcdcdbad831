"""In-memory denylist of revoked token ids (jti), owned by the application context."""

import threading
from datetime import UTC, datetime


class TokenDenylist:
    """
    Thread-safe set of revoked token ids with their expiry instants.

    Expired entries are pruned on each revoke, so the denylist stays bounded
    by the tokens revoked within one token lifetime.
    Nothing is persisted: a restart forgets all revocations.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, datetime] = {}

    def revoke(self, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._prune(datetime.now(UTC))
            self._entries[jti] = expires_at

    def is_revoked(self, jti: str) -> bool:
        """Read-only lookup; expired entries are left for the next revoke to prune."""
        now = datetime.now(UTC)
        with self._lock:
            expires_at = self._entries.get(jti)
        return expires_at is not None and expires_at > now

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _prune(self, now: datetime) -> None:
        expired = [jti for jti, exp in self._entries.items() if exp <= now]
        for jti in expired:
            del self._entries[jti]
