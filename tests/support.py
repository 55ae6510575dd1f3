"""Shared fixtures: in-memory SQLite database and an authenticated API client."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from iacp.core.database import build_engine, get_db
from iacp.main import app
from iacp.models import Base


def make_engine() -> Engine:
    """Fresh in-memory database with all tables; one shared connection so every session sees it."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return engine


class DatabaseTestCase(unittest.TestCase):
    """Gives each test an empty database and a session on it."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db: Session = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose requests use the same database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def register(
        self,
        username: str = "alice",
        email: str = "alice@example.com",
        phone: str = "+15550001",
        password: str = "secret123",
    ):
        return self.client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "phone": phone, "password": password},
        )

    def auth_headers(self) -> dict[str, str]:
        """Register an admin account (once per test) and return a bearer header for it."""
        if not hasattr(self, "_auth_headers"):
            resp = self.register(username="admin", email="admin@example.com", phone="+15559999")
            self.assertEqual(resp.status_code, 200, resp.text)
            self._auth_headers = {"Authorization": f"Bearer {resp.json()['token']}"}
        return self._auth_headers
