"""Unit tests for app.core.security: bcrypt hashing and JWT encode/decode."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    create_access_token,
    decode_access_token,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from tests.helpers import make_settings


class TestPasswordHashing(unittest.TestCase):
    """hash_password never returns the plain text and verify_password checks it."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("s3cret-pass", rounds=4)
        self.assertNotIn("s3cret-pass", hashed)
        self.assertTrue(verify_password("s3cret-pass", hashed))
        self.assertFalse(verify_password("other-pass", hashed))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("pw", rounds=4), hash_password("pw", rounds=4))

    def test_malformed_hash_is_rejected_not_raised(self) -> None:
        self.assertFalse(verify_password("pw", "not-a-bcrypt-hash"))

    def test_dummy_hash_matches_nothing_and_is_cached(self) -> None:
        self.assertIs(dummy_password_hash(4), dummy_password_hash(4))
        self.assertFalse(verify_password("", dummy_password_hash(4)))


class TestAccessToken(unittest.TestCase):
    """create_access_token embeds identity, role, jti and expiry."""

    def setUp(self) -> None:
        self.settings = make_settings(JWT_EXPIRE_MINUTES=30)

    def test_round_trip_claims(self) -> None:
        token, claims = create_access_token("a@x.com", "employee", self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["sub"], "a@x.com")
        self.assertEqual(payload["role"], "employee")
        self.assertEqual(payload["jti"], claims["jti"])
        self.assertEqual(payload["exp"] - payload["iat"], 30 * 60)

    def test_each_token_has_unique_jti(self) -> None:
        _, first = create_access_token("a@x.com", "employee", self.settings)
        _, second = create_access_token("a@x.com", "employee", self.settings)
        self.assertNotEqual(first["jti"], second["jti"])

    def test_expired_token_raises(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=31)
        token, _ = create_access_token("a@x.com", "employee", self.settings, now=issued)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.settings)

    def test_wrong_secret_raises(self) -> None:
        token, _ = create_access_token("a@x.com", "employee", self.settings)
        other = make_settings(JWT_SECRET="another-secret-key-that-is-long-enough-000000")
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, other)


if __name__ == "__main__":
    unittest.main()
