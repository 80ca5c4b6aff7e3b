"""Pytest fixtures: Mongo en memoria (mongomock) y clientes de la API."""
from collections.abc import Callable, Iterator
from typing import Any

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.infrastructure.db import mongo
from app.infrastructure.db.bootstrap import ensure_indexes
from app.main import app
from app.services import token_service

PASSWORD = "s3cret-pass"


@pytest.fixture
def db(monkeypatch: pytest.MonkeyPatch) -> Iterator[Any]:
    """
    Base en memoria inyectada en `app.infrastructure.db.mongo`.

    Cada test obtiene una base vacía con los mismos índices que producción.
    """
    client = mongomock.MongoClient(tz_aware=True)
    database = client["notepad_test"]
    monkeypatch.setattr(mongo, "_db", database)
    ensure_indexes()
    yield database
    client.close()


@pytest.fixture
def cookie_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "session_transport", "cookie")
    monkeypatch.setattr(settings, "cookie_secure", False)
    monkeypatch.setattr(settings, "cross_site", False)


@pytest.fixture
def header_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "session_transport", "header")


@pytest.fixture
def make_client(db: Any) -> Iterator[Callable[[], TestClient]]:
    """Fábrica de clientes; cada uno con su propio cookie jar."""
    clients: list[TestClient] = []

    def _make() -> TestClient:
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def client(make_client: Callable[[], TestClient], cookie_mode: None) -> TestClient:
    return make_client()


def register(client: TestClient, email: str, full_name: str = "Test User", password: str = PASSWORD) -> dict:
    response = client.post(
        "/create-account",
        json={"fullName": full_name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def bearer(user_id: str) -> dict[str, str]:
    """Header Authorization con un access token recién emitido."""
    return {"Authorization": f"Bearer {token_service.issue_access_token(user_id)}"}
