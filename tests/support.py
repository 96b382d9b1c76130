"""Shared test fixtures: in-memory store, fake mailer, frozen clock and an API test base class."""

import unittest
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import build_session_factory
from app.core.errors import EmailDeliveryError
from app.core.security import TokenService
from app.main import create_app
from app.models import Base
from app.services.permissions import seed_rbac

TEST_SECRET = "test-secret-key"
PREFIX = "/api/kenf/management"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "EMAIL_ENABLED": False,
        "APP_NAME": "Kenf Test",
        "FRONTEND_URL": "https://app.kenf.test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_engine():
    """Single shared in-memory SQLite connection with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


class FrozenClock:
    """Callable clock for TokenService; advance() moves time forward."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class RecordingMailer:
    """Mailer stand-in that records (recipient, subject, html_body) tuples."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        self.sent.append((recipient, subject, html_body))


class FailingMailer:
    def __init__(self) -> None:
        self.attempts = 0

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        self.attempts += 1
        raise EmailDeliveryError("SMTP relay unreachable", recipient)


class StoreTestCase(unittest.TestCase):
    """Fresh in-memory database per test, seeded with the default roles and grants."""

    def setUp(self) -> None:
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        self.engine = make_engine()
        self.addCleanup(self.engine.dispose)
        self.session_factory = build_session_factory(self.engine)
        self.db: Session = self.session_factory()
        self.addCleanup(self.db.close)
        seed_rbac(self.db)


class ApiTestCase(StoreTestCase):
    """StoreTestCase plus an app and TestClient bound to the same database."""

    mailer_class: type = RecordingMailer

    def setUp(self) -> None:
        super().setUp()
        self.settings = make_settings()
        self.clock = FrozenClock(datetime.now(UTC))
        self.tokens = TokenService(TEST_SECRET, clock=self.clock)
        self.mailer = self.mailer_class()
        self.app = create_app(
            settings=self.settings,
            engine=self.engine,
            mailer=self.mailer,
            token_service=self.tokens,
        )
        self.client = TestClient(self.app)

    def url(self, path: str) -> str:
        return f"{PREFIX}{path}"

    def register(self, **overrides: Any):
        body = {
            "first_name": "John",
            "last_name": "Doe",
            "email": "john@x.com",
            "phone_number": "+254700000000",
            "role": "landlord",
            "password": "secret123",
        }
        body.update(overrides)
        return self.client.post(self.url("/users/register"), json=body)

    def register_confirmed(self, **overrides: Any) -> dict[str, Any]:
        """Register, confirm and log in; returns the login data (token included)."""
        resp = self.register(**overrides)
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()["data"]
        email = overrides.get("email", "john@x.com")
        confirm = self.client.post(
            self.url("/users/confirm"),
            json={"email": email, "confirmationCode": data["confirmationCode"]},
        )
        self.assertEqual(confirm.status_code, 200, confirm.text)
        login = self.client.post(
            self.url("/users/login"),
            json={"identifier": email, "password": overrides.get("password", "secret123")},
        )
        self.assertEqual(login.status_code, 200, login.text)
        return login.json()["data"]

    def auth(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
