"""Tests for the health endpoint."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import faculty_portfolio.data.db as app_db
from faculty_portfolio.api.main import app


@pytest.fixture
def unreachable_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point the app at a SQLite file whose directory does not exist."""
    monkeypatch.setenv("DB_URL", f"sqlite:///{tmp_path / 'missing' / 'fpms.db'}")
    app_db.reset_engine()
    yield
    app_db.reset_engine()


def test_healthy_with_database(tmp_db: None) -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_unhealthy_when_database_is_unreachable(unreachable_db: None) -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy"}
