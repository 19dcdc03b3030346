"""Unit tests for app.core.config.Settings validators."""

import unittest
from pathlib import Path

from pydantic import ValidationError

from tests.support import make_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = make_settings(Path("receipts"))
        self.assertEqual(settings.SESSION_TTL_HOURS, 24)
        self.assertEqual(settings.MAX_RECEIPT_BYTES, 5 * 1024 * 1024)
        self.assertEqual(settings.API_PREFIX, "/api")

    def test_cookie_secure_follows_environment(self) -> None:
        self.assertFalse(make_settings(Path("r"), APP_ENV="dev").session_cookie_secure)
        self.assertTrue(make_settings(Path("r"), APP_ENV="prod").session_cookie_secure)
        self.assertFalse(
            make_settings(Path("r"), APP_ENV="prod", SESSION_COOKIE_SECURE=False).session_cookie_secure
        )

    def test_rejects_unsupported_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(Path("r"), DATABASE_URL="mysql://localhost/db")

    def test_accepts_postgres_url(self) -> None:
        settings = make_settings(Path("r"), DATABASE_URL="postgresql+psycopg2://u:p@h/db")
        self.assertTrue(settings.DATABASE_URL.startswith("postgresql"))

    def test_rejects_bad_ranges(self) -> None:
        for field, value in (
            ("SESSION_TTL_HOURS", 0),
            ("BCRYPT_ROUNDS", 3),
            ("MAX_RECEIPT_BYTES", 0),
            ("LOG_LEVEL", "LOUD"),
            ("ADMIN_USERNAME", "ab"),
            ("ADMIN_PASSWORD", " "),
            ("API_PREFIX", "api"),
        ):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    make_settings(Path("r"), **{field: value})

    def test_log_level_normalized(self) -> None:
        self.assertEqual(make_settings(Path("r"), LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")


if __name__ == "__main__":
    unittest.main()
