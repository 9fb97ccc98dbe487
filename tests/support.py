"""Shared fixtures for API tests: in-memory SQLite swapped in for the PostgreSQL session."""

import unittest
from typing import Any
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tasktracker.core.database import get_db
from tasktracker.core.security import create_access_token, hash_password
from tasktracker.main import app
from tasktracker.models import Base, User

API = "/api/v1"
DEFAULT_PASSWORD = "Secret123"


def make_test_engine():
    """Single shared in-memory connection with foreign keys enforced (for ON DELETE CASCADE)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test; cheap bcrypt rounds."""

    def setUp(self) -> None:
        self.engine = make_test_engine()
        Base.metadata.create_all(self.engine)
        # Cleanups run LIFO: sessions opened by tests close before the schema is dropped.
        self.addCleanup(self.engine.dispose)
        self.addCleanup(Base.metadata.drop_all, self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        rounds = patch("tasktracker.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def db(self) -> Session:
        session = self.SessionLocal()
        self.addCleanup(session.close)
        return session

    def make_user(
        self,
        email: str,
        role: str = "user",
        is_active: bool = True,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> tuple[int, str]:
        """Insert a user directly; return (id, bearer token)."""
        with self.SessionLocal() as db:
            user = User(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=role,
                is_active=is_active,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return user.id, create_access_token(sub=user.id, role=user.role)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db yields sessions on the test engine."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
        super().tearDown()

    def register(
        self,
        email: str,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> tuple[str, dict[str, Any]]:
        """Register through the API; return (token, user)."""
        resp = self.client.post(
            f"{API}/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()["data"]
        return data["token"], data["user"]

    def create_task(self, token: str, **fields: Any) -> dict[str, Any]:
        body = {"title": "Task"}
        body.update(fields)
        resp = self.client.post(f"{API}/tasks", json=body, headers=bearer(token))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["data"]
