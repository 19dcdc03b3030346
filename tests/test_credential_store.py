"""Tests for app.services.credential_store against an in-memory database."""

import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from app.core.exceptions import ConflictError
from app.core.security import hash_password
from app.models import DataRecord, User, UserAccess, UserSession
from app.services.credential_store import CredentialStore, ensure_admin
from tests.support import (
    ADMIN_PASSWORD,
    TEST_BCRYPT_ROUNDS,
    USER_PASSWORD,
    DatabaseTestCase,
    make_settings,
)


def _hash(password: str = USER_PASSWORD) -> str:
    return hash_password(password, rounds=TEST_BCRYPT_ROUNDS)


class TestCredentialStoreReads(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = CredentialStore(self.db)
        self.admin_id = self.add_user("admin", role="admin")
        self.user_id = self.add_user("ravi")

    def test_find_by_username(self) -> None:
        account = self.store.find_by_username("ravi")
        self.assertIsNotNone(account)
        self.assertEqual(account.id, self.user_id)
        self.assertEqual(account.role, "user")

    def test_find_by_username_unknown(self) -> None:
        self.assertIsNone(self.store.find_by_username("nobody"))

    def test_find_by_id(self) -> None:
        self.assertEqual(self.store.find_by_id(self.admin_id).username, "admin")
        self.assertIsNone(self.store.find_by_id(9999))

    def test_list_excludes_admins(self) -> None:
        names = [u.username for u in self.store.list_all_except_admin()]
        self.assertEqual(names, ["ravi"])

    def test_reads_never_expose_password_hash(self) -> None:
        account = self.store.find_by_username("ravi")
        self.assertNotIn("password_hash", account.model_dump())
        self.assertNotIn("password", account.model_dump())

    def test_verify_credentials(self) -> None:
        self.assertEqual(self.store.verify_credentials("ravi", USER_PASSWORD).id, self.user_id)
        self.assertIsNone(self.store.verify_credentials("ravi", "wrong-password"))
        self.assertIsNone(self.store.verify_credentials("nobody", USER_PASSWORD))


class TestCredentialStoreWrites(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = CredentialStore(self.db)

    def test_create_user_defaults_to_user_role(self) -> None:
        account = self.store.create("meera", _hash())
        self.assertEqual(account.role, "user")
        self.assertIsNotNone(account.created_at)

    def test_duplicate_username_conflicts_without_new_row(self) -> None:
        self.store.create("meera", _hash())
        with self.assertRaises(ConflictError) as ctx:
            self.store.create("meera", _hash())
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.db.query(User).filter(User.username == "meera").count(), 1)

    def test_delete_user(self) -> None:
        account = self.store.create("meera", _hash())
        self.assertTrue(self.store.delete(account.id))
        self.assertIsNone(self.store.find_by_id(account.id))

    def test_delete_unknown_returns_false(self) -> None:
        self.assertFalse(self.store.delete(12345))

    def test_admin_cannot_be_deleted(self) -> None:
        admin_id = self.add_user("admin", role="admin")
        self.assertFalse(self.store.delete(admin_id))
        self.assertIsNotNone(self.store.find_by_id(admin_id))

    def test_delete_cascades_assignments_and_sessions(self) -> None:
        user_id = self.add_user("meera")
        record = DataRecord(name="A", aadhaar_number="123456789012", srn="S1")
        self.db.add(record)
        self.db.flush()
        self.db.add(UserAccess(user_id=user_id, record_id=record.id))
        self.db.add(
            UserSession(
                token="tok",
                user_id=user_id,
                username="meera",
                role="user",
                expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
            )
        )
        self.db.commit()

        self.assertTrue(self.store.delete(user_id))
        self.db.expire_all()
        self.assertEqual(self.count_rows(UserAccess), 0)
        self.assertEqual(self.count_rows(UserSession), 0)
        self.assertEqual(self.count_rows(DataRecord), 1)


class TestEnsureAdmin(DatabaseTestCase):
    def test_seeds_admin_once(self) -> None:
        settings = make_settings(Path("receipts"))
        store = CredentialStore(self.db)
        self.assertTrue(ensure_admin(store, settings))
        self.assertFalse(ensure_admin(store, settings))
        admins = self.db.query(User).filter(User.role == "admin").all()
        self.assertEqual(len(admins), 1)
        self.assertIsNotNone(store.verify_credentials("admin", ADMIN_PASSWORD))

    def test_renamed_admin_username_does_not_seed_second_admin(self) -> None:
        store = CredentialStore(self.db)
        self.assertTrue(ensure_admin(store, make_settings(Path("receipts"))))
        renamed = make_settings(Path("receipts"), ADMIN_USERNAME="root")
        self.assertFalse(ensure_admin(store, renamed))
        admins = [u.username for u in self.db.query(User).filter(User.role == "admin")]
        self.assertEqual(admins, ["admin"])
        self.assertIsNone(store.find_by_username("root"))

    def test_existing_admin_under_other_name_blocks_seeding(self) -> None:
        self.add_user("owner", role="admin")
        store = CredentialStore(self.db)
        self.assertFalse(ensure_admin(store, make_settings(Path("receipts"))))
        self.assertIsNone(store.find_by_username("admin"))


if __name__ == "__main__":
    unittest.main()
