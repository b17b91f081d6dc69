"""Shared pytest fixtures for all test suites."""

import asyncio
import json
import os
from collections.abc import AsyncGenerator, Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.config import Settings
from backend.app.db.engine import create_async_engine_from_settings, create_session_factory
from backend.app.db.inmemory import InMemoryEntityStore
from backend.app.db.models import Base
from backend.app.db.repositories import EntityKind, Row
from backend.app.db.sql_repositories import SqlEntityStore
from backend.app.main import create_app
from backend.app.notifications.mailer import MailMessage
from backend.app.security import passwords
from backend.app.security.passwords import hash_password
from backend.app.security.tokens import TokenService, TokenSubject
from backend.app.utils.logging import AuditLogger

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"
COLLECTOR_URL = "http://collector.test/logs"
DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PBKDF2 cheap in tests."""
    monkeypatch.setattr(passwords, "PBKDF2_ITERATIONS", 1_000)


class FakeMailer:
    """Mailer that keeps sent messages in memory."""

    def __init__(self) -> None:
        self.sent: list[MailMessage] = []

    async def send(self, message: MailMessage) -> None:
        self.sent.append(message)

    def password_for(self, email: str) -> str:
        """Extract the password from the last account-details message to `email`."""
        for message in reversed(self.sent):
            if message.to == email:
                return message.html.split("Password: ")[1].split("<")[0]
        raise AssertionError(f"no mail sent to {email}")


class Collector:
    """Fake remote audit collector behind an httpx MockTransport."""

    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []
        self.status_code = 201
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.error is not None:
            raise self.error
        self.entries.append(json.loads(request.content))
        return httpx.Response(self.status_code, json={"ok": True})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class Seeder:
    """Writes fixtures straight into the store and mints tokens."""

    def __init__(self, store: InMemoryEntityStore, tokens: TokenService) -> None:
        self.store = store
        self.tokens = tokens

    def organization(self, name: str = "Acme Staffing", email: str | None = None) -> Row:
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        return asyncio.run(
            self.store.create(
                EntityKind.organization,
                {
                    "name": name,
                    "business_email": email,
                    "password_hash": hash_password(DEFAULT_PASSWORD),
                },
            )
        )

    def profile(self, organization_id: int, first_name: str = "Jane", last_name: str = "Doe") -> Row:
        return asyncio.run(
            self.store.create(
                EntityKind.profile,
                {"organization_id": organization_id, "first_name": first_name, "last_name": last_name},
            )
        )

    def credential(self, profile_id: int, email: str = "jane@example.com") -> Row:
        return asyncio.run(
            self.store.create(
                EntityKind.user_credential,
                {
                    "profile_id": profile_id,
                    "email": email,
                    "password_hash": hash_password(DEFAULT_PASSWORD),
                },
            )
        )

    def create(self, kind: EntityKind, values: Row) -> Row:
        return asyncio.run(self.store.create(kind, values))

    def get(self, kind: EntityKind, entity_id: int) -> Row | None:
        return asyncio.run(self.store.get(kind, entity_id))

    def organization_token(self, organization_id: int) -> str:
        return self.tokens.issue(TokenSubject.organization(organization_id)).token

    def user_token(self, user_id: int) -> str:
        return self.tokens.issue(TokenSubject.user(user_id)).token


HeadersFactory = Callable[[int], dict[str, str]]


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    """Settings for an app wired to the fake collector."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        logger_url=COLLECTOR_URL,
    )


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def collector() -> Collector:
    return Collector()


@pytest.fixture
def app(
    settings: Settings, store: InMemoryEntityStore, mailer: FakeMailer, collector: Collector
) -> FastAPI:
    """Application over the in-memory store, fake mailer and fake collector."""
    audit_logger = AuditLogger(settings.logger_url, client=collector.client())
    return create_app(settings=settings, store=store, audit_logger=audit_logger, mailer=mailer)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client that answers unhandled faults with their 500 envelope."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def seed(store: InMemoryEntityStore, app: FastAPI) -> Seeder:
    return Seeder(store, app.state.token_service)


@pytest.fixture
def org_headers(seed: Seeder) -> HeadersFactory:
    """Factory for organization Authorization headers."""

    def _headers(organization_id: int) -> dict[str, str]:
        return bearer(seed.organization_token(organization_id))

    return _headers


@pytest.fixture
def user_headers(seed: Seeder) -> HeadersFactory:
    """Factory for user Authorization headers."""

    def _headers(user_id: int) -> dict[str, str]:
        return bearer(seed.user_token(user_id))

    return _headers


@pytest_asyncio.fixture
async def sqlite_store(tmp_path: Path) -> AsyncGenerator[SqlEntityStore, None]:
    """SQL store over a throwaway SQLite file with foreign keys enforced."""
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'workforce.db'}",
        jwt_secret_key=TEST_SECRET,
    )
    engine = create_async_engine_from_settings(settings)
    store = SqlEntityStore(engine, create_session_factory(engine))
    await store.create_all()

    yield store

    await store.dispose()


@pytest_asyncio.fixture
async def postgres_store() -> AsyncGenerator[SqlEntityStore, None]:
    """SQL store for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url or not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip("DATABASE_URL is not PostgreSQL - skipping postgres test")

    settings = Settings(database_url=database_url, jwt_secret_key=TEST_SECRET)
    engine = create_async_engine_from_settings(settings)
    store = SqlEntityStore(engine, create_session_factory(engine))
    await store.create_all()

    yield store

    # Cleanup: drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await store.dispose()
