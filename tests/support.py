"""Shared test scaffolding: in-memory SQLite database and an API client wired to it."""

import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import build_engine, get_db, init_db
from app.core.security import hash_password
from app.main import app
from app.models import DataRecord, User
from app.services.credential_store import CredentialStore, ensure_admin

# Cheapest bcrypt cost; tests don't need slow hashes.
TEST_BCRYPT_ROUNDS = 4
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass-123"
USER_PASSWORD = "user-pass-123"


def make_settings(receipts_dir: Path, **overrides: object) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "RECEIPTS_DIR": receipts_dir,
        "BCRYPT_ROUNDS": TEST_BCRYPT_ROUNDS,
        "ADMIN_USERNAME": ADMIN_USERNAME,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database per test."""

    def setUp(self) -> None:
        self.engine = build_engine("sqlite://", poolclass=StaticPool)
        init_db(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def add_user(self, username: str, role: str = "user", password: str = USER_PASSWORD) -> int:
        user = User(
            username=username,
            password_hash=hash_password(password, rounds=TEST_BCRYPT_ROUNDS),
            role=role,
        )
        self.db.add(user)
        self.db.commit()
        return user.id

    def count_rows(self, model: type) -> int:
        return self.db.query(model).count()


class ApiTestCase(DatabaseTestCase):
    """Database plus a TestClient with get_db/get_settings overridden and the admin seeded."""

    def setUp(self) -> None:
        super().setUp()
        self.tmpdir = Path(tempfile.mkdtemp())
        self.receipts_dir = self.tmpdir / "receipts"
        self.settings = make_settings(self.receipts_dir)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        ensure_admin(CredentialStore(self.db), self.settings)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()

    def new_client(self) -> TestClient:
        return TestClient(app)

    def login(self, client: TestClient, username: str, password: str):
        return client.post(
            "/api/auth/login",
            json={"username": username, "password": password},
        )

    def admin_client(self) -> TestClient:
        client = self.new_client()
        resp = self.login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        self.assertEqual(resp.status_code, 200, resp.text)
        return client

    def user_client(self, username: str) -> TestClient:
        client = self.new_client()
        resp = self.login(client, username, USER_PASSWORD)
        self.assertEqual(resp.status_code, 200, resp.text)
        return client

    def record_payload(self, **overrides: object) -> dict:
        payload: dict = {
            "name": "Asha Verma",
            "aadhaar_number": "123456789012",
            "srn": "SRN-001",
        }
        payload.update(overrides)
        return payload

    def fetch_record(self, record_id: int) -> DataRecord | None:
        self.db.expire_all()
        return self.db.get(DataRecord, record_id)
