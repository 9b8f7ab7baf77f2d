"""Tests for registration, login, session and profile endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from faculty_portfolio.api.main import app
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Faculty


@pytest.fixture
def client(tmp_db: None) -> TestClient:
    """Create a test client backed by a temporary database."""
    return TestClient(app)


def _register(client: TestClient, username: str = "ghopper", **overrides) -> dict:
    payload = {
        "username": username,
        "password": "cobol1959",
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": f"{username}@example.edu",
    }
    payload.update(overrides)
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestRegisterAndLogin:
    def test_register_defaults_to_faculty_role(self, client: TestClient) -> None:
        data = _register(client)

        assert data["username"] == "ghopper"
        assert data["role"] == "FACULTY"
        assert data["full_name"] == "Grace Hopper"
        assert data["dept_code"] is None

    def test_register_duplicate_username(self, client: TestClient) -> None:
        _register(client)

        response = client.post(
            "/api/auth/register",
            json={
                "username": "ghopper",
                "password": "pw123456",
                "first_name": "G",
                "last_name": "H",
                "email": "other@example.edu",
            },
        )

        assert response.status_code == 409

    def test_register_unknown_department(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/register",
            json={
                "username": "x",
                "password": "pw123456",
                "first_name": "X",
                "last_name": "Y",
                "email": "x@example.edu",
                "dept_code": "NOPE",
            },
        )

        assert response.status_code == 404

    def test_login_by_username_and_email(self, client: TestClient) -> None:
        _register(client)

        by_name = client.post(
            "/api/auth/login", json={"username": "ghopper", "password": "cobol1959"}
        )
        by_email = TestClient(app).post(
            "/api/auth/login",
            json={"username": "ghopper@example.edu", "password": "cobol1959"},
        )

        assert by_name.status_code == 200
        assert by_name.json()["authenticated"] is True
        assert by_name.json()["username"] == "ghopper"
        assert by_email.status_code == 200

    def test_login_wrong_password(self, client: TestClient) -> None:
        _register(client)

        response = client.post("/api/auth/login", json={"username": "ghopper", "password": "x"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"


class TestSession:
    def test_session_lifecycle(self, client: TestClient) -> None:
        assert client.get("/api/auth/session").json() == {
            "authenticated": False,
            "faculty_id": None,
            "username": None,
            "role": None,
            "full_name": None,
            "dept_code": None,
        }

        account = _register(client)
        client.post("/api/auth/login", json={"username": "ghopper", "password": "cobol1959"})
        session = client.get("/api/auth/session").json()
        assert session["authenticated"] is True
        assert session["faculty_id"] == account["id"]

        assert client.post("/api/auth/logout").status_code == 200
        assert client.get("/api/auth/session").json()["authenticated"] is False
        assert client.get("/api/profile").status_code == 401

    def test_protected_route_requires_login(self, client: TestClient) -> None:
        response = client.get("/api/portfolios/mine")

        assert response.status_code == 401

    def test_session_of_deleted_faculty_is_rejected(self, client: TestClient) -> None:
        account = _register(client)
        client.post("/api/auth/login", json={"username": "ghopper", "password": "cobol1959"})
        with get_session() as session:
            session.delete(session.get(Faculty, account["id"]))

        assert client.get("/api/profile").status_code == 401
        assert client.get("/api/auth/session").json()["authenticated"] is False


class TestProfile:
    @pytest.fixture
    def logged_in(self, client: TestClient) -> TestClient:
        _register(client)
        client.post("/api/auth/login", json={"username": "ghopper", "password": "cobol1959"})
        return client

    def test_get_and_update_profile(self, logged_in: TestClient) -> None:
        profile = logged_in.get("/api/profile").json()
        assert profile["username"] == "ghopper"

        response = logged_in.patch(
            "/api/profile", json={"middle_name": "Brewster", "tel_no": "555-0100"}
        )

        assert response.status_code == 200
        assert response.json()["middle_name"] == "Brewster"
        assert response.json()["first_name"] == "Grace"

    def test_change_password(self, logged_in: TestClient) -> None:
        wrong = logged_in.post(
            "/api/profile/password",
            json={"current_password": "nope", "new_password": "newpass1"},
        )
        short = logged_in.post(
            "/api/profile/password",
            json={"current_password": "cobol1959", "new_password": "abc"},
        )
        ok = logged_in.post(
            "/api/profile/password",
            json={"current_password": "cobol1959", "new_password": "newpass1"},
        )

        assert wrong.status_code == 401
        assert short.status_code == 400
        assert ok.status_code == 200
        relogin = TestClient(app).post(
            "/api/auth/login", json={"username": "ghopper", "password": "newpass1"}
        )
        assert relogin.status_code == 200

    def test_update_email(self, client: TestClient, logged_in: TestClient) -> None:
        _register(TestClient(app), "other")

        taken = logged_in.post(
            "/api/profile/email",
            json={"new_email": "other@example.edu", "password": "cobol1959"},
        )
        ok = logged_in.post(
            "/api/profile/email",
            json={"new_email": "grace@navy.mil", "password": "cobol1959"},
        )

        assert taken.status_code == 409
        assert ok.status_code == 200
        assert ok.json()["email"] == "grace@navy.mil"
