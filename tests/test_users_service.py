"""Tests for app.services.users: credential store and admin provisioning on in-memory SQLite."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.security import verify_password
from app.models import User
from app.services.users import (
    create_user,
    find_user,
    get_user,
    provision_admin,
    set_approved,
)
from tests.helpers import make_context


class UsersServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.context = make_context()
        self.settings = self.context.settings
        self.db = self.context.session()

    def tearDown(self) -> None:
        self.db.close()
        self.context.close()


class TestCreateUser(UsersServiceTestCase):
    def test_creates_unapproved_user_with_hashed_password(self) -> None:
        user = create_user(self.db, "A@X.com ", "p1", "customer", settings=self.settings)
        self.assertEqual(user.email, "a@x.com")
        self.assertEqual(user.role, "customer")
        self.assertFalse(user.approved)
        self.assertNotEqual(user.password_hash, "p1")
        self.assertTrue(verify_password("p1", user.password_hash))

    def test_duplicate_email_conflicts_and_leaves_store_unchanged(self) -> None:
        first = create_user(self.db, "a@x.com", "p1", "customer", settings=self.settings)
        with self.assertRaises(ConflictError):
            create_user(self.db, "A@x.com", "other-pw", "manager", settings=self.settings)
        users = self.db.query(User).all()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].id, first.id)
        self.assertEqual(users[0].role, "customer")
        self.assertTrue(verify_password("p1", users[0].password_hash))

    def test_password_length_enforced(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            create_user(self.db, "a@x.com", "p", "customer", settings=self.settings)
        self.assertEqual(ctx.exception.details["field"], "password")
        self.assertEqual(self.db.query(User).count(), 0)

    def test_password_over_72_bytes_rejected(self) -> None:
        # 40 characters, 80 bytes: bcrypt would silently ignore the tail.
        password = "é" * 40
        with self.assertRaises(ValidationError) as ctx:
            create_user(self.db, "a@x.com", password, "customer", settings=self.settings)
        self.assertEqual(ctx.exception.details["field"], "password")
        self.assertEqual(self.db.query(User).count(), 0)

    def test_password_of_exactly_72_bytes_accepted(self) -> None:
        user = create_user(self.db, "a@x.com", "x" * 72, "customer", settings=self.settings)
        self.assertTrue(verify_password("x" * 72, user.password_hash))

    def test_unknown_role_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            create_user(self.db, "a@x.com", "p1", "superuser", settings=self.settings)

    def test_find_and_get(self) -> None:
        user = create_user(self.db, "a@x.com", "p1", "employee", settings=self.settings)
        self.assertEqual(find_user(self.db, " A@X.COM").id, user.id)
        self.assertIsNone(find_user(self.db, "b@x.com"))
        self.assertEqual(get_user(self.db, user.id).email, "a@x.com")
        self.assertIsNone(get_user(self.db, 999))


class TestCreateUserRace(unittest.TestCase):
    """A concurrent insert that wins the unique index surfaces as ConflictError."""

    def test_integrity_error_becomes_conflict(self) -> None:
        settings = MagicMock()
        settings.PASSWORD_MIN_LENGTH = 1
        settings.PASSWORD_MAX_LENGTH = 72
        settings.BCRYPT_ROUNDS = 4
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        with patch("app.services.users.find_user", return_value=None):
            with self.assertRaises(ConflictError):
                create_user(session, "a@x.com", "p1", "customer", settings=settings)
        session.rollback.assert_called_once()
        session.refresh.assert_not_called()


class TestSetApproved(UsersServiceTestCase):
    def test_sets_flag(self) -> None:
        user = create_user(self.db, "a@x.com", "p1", "customer", settings=self.settings)
        self.assertTrue(set_approved(self.db, user.id, True).approved)
        self.assertTrue(find_user(self.db, "a@x.com").approved)

    def test_missing_user(self) -> None:
        with self.assertRaises(NotFoundError):
            set_approved(self.db, 42, True)


class TestProvisionAdmin(UsersServiceTestCase):
    def test_creates_approved_admin_once(self) -> None:
        user, created = provision_admin(self.db, "root@x.com", "rootpw", settings=self.settings)
        self.assertTrue(created)
        self.assertEqual(user.role, "admin")
        self.assertTrue(user.approved)

        again, created_again = provision_admin(self.db, "root@x.com", "different", settings=self.settings)
        self.assertFalse(created_again)
        self.assertEqual(again.id, user.id)
        # Existing password is not overwritten.
        self.assertTrue(verify_password("rootpw", again.password_hash))
        self.assertEqual(self.db.query(User).count(), 1)

    def test_reapproves_existing_admin(self) -> None:
        user = create_user(self.db, "root@x.com", "rootpw", "admin", settings=self.settings)
        self.assertFalse(user.approved)
        again, created = provision_admin(self.db, "root@x.com", "rootpw", settings=self.settings)
        self.assertFalse(created)
        self.assertTrue(again.approved)

    def test_non_admin_with_same_email_conflicts(self) -> None:
        create_user(self.db, "root@x.com", "p1", "customer", settings=self.settings)
        with self.assertRaises(ConflictError):
            provision_admin(self.db, "root@x.com", "rootpw", settings=self.settings)


if __name__ == "__main__":
    unittest.main()
