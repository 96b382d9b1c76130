"""Tests for app.core.config: settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings
from support import make_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = make_settings()
        self.assertEqual(s.API_PREFIX, "/api/kenf/management")
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 60)

    def test_normalizes_values(self) -> None:
        s = make_settings(
            LOG_LEVEL="debug",
            API_PREFIX="/api/v2/",
            FRONTEND_URL=" https://app.example.com/ ",
        )
        self.assertEqual(s.LOG_LEVEL, "DEBUG")
        self.assertEqual(s.API_PREFIX, "/api/v2")
        self.assertEqual(s.FRONTEND_URL, "https://app.example.com")

    def test_postgres_urls_pinned_to_psycopg2(self) -> None:
        for url in (
            "postgres://u:p@db:5432/kenf",
            "postgresql://u:p@db:5432/kenf",
            " postgresql+psycopg2://u:p@db:5432/kenf ",
        ):
            with self.subTest(url=url):
                s = make_settings(DATABASE_URL=url)
                self.assertEqual(s.DATABASE_URL, "postgresql+psycopg2://u:p@db:5432/kenf")

    def test_default_database_url_uses_psycopg2(self) -> None:
        default = Settings.model_fields["DATABASE_URL"].default
        self.assertTrue(default.startswith("postgresql+psycopg2://"))

    def test_rejects_invalid_values(self) -> None:
        cases = {
            "DATABASE_URL": "mongodb://localhost/db",
            "LOG_LEVEL": "LOUD",
            "API_PREFIX": "api",
            "FRONTEND_URL": "ftp://files.example.com",
            "DB_POOL_SIZE": 0,
            "JWT_SECRET": "   ",
            "JWT_EXPIRE_MINUTES": 0,
            "SMTP_PORT": 70000,
        }
        for field, value in cases.items():
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    make_settings(**{field: value})


if __name__ == "__main__":
    unittest.main()
