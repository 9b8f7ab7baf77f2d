from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import faculty_portfolio.data.db as app_db
from faculty_portfolio.api.main import app
from faculty_portfolio.constants import FacultyRole
from faculty_portfolio.data.db import get_session, init_db
from faculty_portfolio.data.models import Department
from faculty_portfolio.services.auth import register_faculty

DEFAULT_PASSWORD = "secret123"

@pytest.fixture
def upload_root(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point file storage at a temporary directory."""
    root = tmp_path / "uploads"
    monkeypatch.setenv("FPMS_UPLOAD_DIR", root.as_posix())
    return root

@pytest.fixture
def tmp_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, upload_root: Path) -> Iterator[None]:
    """Use a temporary SQLite DB and upload root."""
    db_path = tmp_path / "test.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    app_db.reset_engine()
    init_db()
    yield
    # Dispose engine to release connections
    app_db.reset_engine()

@pytest.fixture
def make_department(tmp_db: None) -> Callable[..., str]:
    """Factory that inserts a department and returns its code."""

    def _make(code: str = "CS", name: str = "Computer Science") -> str:
        with get_session() as session:
            session.add(Department(dept_code=code, dept_name=name))
        return code

    return _make

@pytest.fixture
def make_faculty(tmp_db: None) -> Callable[..., int]:
    """Factory that registers a faculty account and returns its id.

    Usernames default to ``user<n>`` and emails to ``user<n>@example.edu``.
    """
    counter = itertools.count(1)

    def _make(
        role: FacultyRole | str = FacultyRole.FACULTY,
        dept_code: str | None = None,
        username: str | None = None,
        first_name: str = "Test",
        last_name: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> int:
        n = next(counter)
        username = username or f"user{n}"
        account = register_faculty(
            {
                "username": username,
                "password": password,
                "first_name": first_name,
                "last_name": last_name or f"User{n}",
                "email": f"{username}@example.edu",
                "role": str(role),
                "dept_code": dept_code,
            }
        )
        return account["id"]

    return _make

@pytest.fixture
def login(tmp_db: None) -> Callable[..., TestClient]:
    """Factory returning a TestClient logged in as the given account."""

    def _login(username: str, password: str = DEFAULT_PASSWORD) -> TestClient:
        client = TestClient(app)
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        return client

    return _login
