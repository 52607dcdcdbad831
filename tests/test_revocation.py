"""Unit tests for app.services.revocation.TokenDenylist."""

import unittest
from datetime import UTC, datetime, timedelta

from app.services.revocation import TokenDenylist


class TestTokenDenylist(unittest.TestCase):
    def test_revoked_until_expiry(self) -> None:
        denylist = TokenDenylist()
        denylist.revoke("abc", datetime.now(UTC) + timedelta(minutes=5))
        self.assertTrue(denylist.is_revoked("abc"))
        self.assertFalse(denylist.is_revoked("other"))

    def test_expired_entry_not_revoked(self) -> None:
        denylist = TokenDenylist()
        denylist.revoke("old", datetime.now(UTC) - timedelta(seconds=1))
        self.assertFalse(denylist.is_revoked("old"))

    def test_lookup_does_not_mutate(self) -> None:
        denylist = TokenDenylist()
        denylist.revoke("old", datetime.now(UTC) - timedelta(seconds=1))
        denylist.revoke("live", datetime.now(UTC) + timedelta(minutes=5))
        before = len(denylist)
        for jti in ("old", "live", "unknown"):
            denylist.is_revoked(jti)
        self.assertEqual(len(denylist), before)

    def test_revoke_prunes_expired(self) -> None:
        denylist = TokenDenylist()
        denylist.revoke("old", datetime.now(UTC) - timedelta(seconds=1))
        denylist.revoke("new", datetime.now(UTC) + timedelta(minutes=1))
        self.assertEqual(len(denylist), 1)

    def test_clear(self) -> None:
        denylist = TokenDenylist()
        denylist.revoke("abc", datetime.now(UTC) + timedelta(minutes=5))
        denylist.clear()
        self.assertFalse(denylist.is_revoked("abc"))


if __name__ == "__main__":
    unittest.main()
