"""Shared fixtures: a throwaway SQLite database per test."""

import sqlite3
from pathlib import Path
from typing import Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from command_api.app.core.config import settings
from command_api.app.core.db import get_connection, init_db
from command_api.app.core.security import create_access_token

STATIC_TOKEN = "static-test-token"


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Point the application at a fresh database file and migrate it."""
    path = str(tmp_path / "commands.db")
    monkeypatch.setattr(settings, "database_url", path)
    monkeypatch.setattr(settings, "api_tokens", STATIC_TOKEN)
    monkeypatch.setattr(settings, "secret_key", "test-secret")
    init_db()
    return path


@pytest.fixture
def conn(db_path: str) -> Iterator[sqlite3.Connection]:
    connection = get_connection()
    try:
        yield connection
    finally:
        connection.close()


@pytest.fixture
def client(db_path: str) -> Iterator[TestClient]:
    from command_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(db_path: str) -> Dict[str, str]:
    token = create_access_token({"sub": "tester@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def static_token(db_path: str) -> str:
    return STATIC_TOKEN
