"""Tests for portfolio and sharing endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from faculty_portfolio.constants import FacultyRole


@pytest.fixture
def accounts(make_department, make_faculty) -> dict[str, int]:
    make_department("CS")
    return {
        "alice": make_faculty(FacultyRole.FACULTY, "CS", username="alice"),
        "bob": make_faculty(FacultyRole.FACULTY, "CS", username="bob"),
        "head": make_faculty(FacultyRole.DEPT_HEAD, "CS", username="head"),
        "dean": make_faculty(FacultyRole.DEAN, "CS", username="dean"),
    }


@pytest.fixture
def alice(accounts, login) -> TestClient:
    return login("alice")


def _create(client: TestClient, name: str, **extra) -> dict:
    response = client.post("/api/portfolios", json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()


class TestPortfolioCrud:
    def test_create_and_list(self, alice: TestClient, accounts) -> None:
        created = _create(alice, "Teaching", description="Courses")

        assert created["type"] == "PERSONAL"
        assert created["owner_id"] == accounts["alice"]
        assert created["can_manage"] is True
        assert created["item_count"] == 0

        mine = alice.get("/api/portfolios/mine").json()
        assert [p["name"] for p in mine] == ["Teaching"]

    def test_create_errors(self, alice: TestClient) -> None:
        _create(alice, "Teaching")

        assert alice.post("/api/portfolios", json={"name": "Teaching"}).status_code == 409
        assert alice.post("/api/portfolios", json={"name": "  "}).status_code == 400
        forbidden = alice.post("/api/portfolios", json={"name": "D", "type": "DEPARTMENT"})
        assert forbidden.status_code == 403

    def test_update_and_delete(self, alice: TestClient) -> None:
        created = _create(alice, "Teaching")

        patched = alice.patch(
            f"/api/portfolios/{created['id']}", json={"name": "Teaching 2025", "is_active": False}
        )
        assert patched.status_code == 200
        assert patched.json()["name"] == "Teaching 2025"
        assert patched.json()["is_active"] is False

        deleted = alice.delete(f"/api/portfolios/{created['id']}")
        assert deleted.status_code == 200
        assert deleted.json()["deleted"] == 0
        assert alice.get(f"/api/portfolios/{created['id']}").status_code == 404

    def test_department_and_college_listings(self, accounts, login) -> None:
        head = login("head")
        dean = login("dean")
        _create(head, "Dept", type="DEPARTMENT")
        _create(dean, "College", type="COLLEGE")

        assert [p["name"] for p in head.get("/api/portfolios/department").json()] == ["Dept"]
        assert [p["name"] for p in dean.get("/api/portfolios/college").json()] == ["College"]
        assert head.get("/api/portfolios/college").status_code == 403
        assert login("alice").get("/api/portfolios/department").json() == []


class TestSharing:
    def test_share_flow(self, alice: TestClient, accounts, login) -> None:
        portfolio = _create(alice, "Research")
        pid = portfolio["id"]
        bob = login("bob")
        assert bob.get(f"/api/portfolios/{pid}").status_code == 403

        shared = alice.post(
            f"/api/portfolios/{pid}/shares", json={"faculty_id": accounts["bob"]}
        )
        assert shared.status_code == 201
        share = shared.json()
        assert share["permission"] == "VIEW"
        assert share["shared_with_id"] == accounts["bob"]

        view = bob.get(f"/api/portfolios/{pid}").json()
        assert view["can_edit"] is False
        listed = bob.get("/api/portfolios/shared").json()
        assert [s["portfolio"]["id"] for s in listed] == [pid]
        assert listed[0]["owner"]["id"] == accounts["alice"]

        upgraded = alice.patch(
            f"/api/portfolios/{pid}/shares/{share['id']}", json={"permission": "EDIT"}
        )
        assert upgraded.json()["permission"] == "EDIT"
        assert bob.get(f"/api/portfolios/{pid}").json()["can_edit"] is True

        assert alice.delete(f"/api/portfolios/{pid}/shares/{share['id']}").status_code == 200
        assert alice.get(f"/api/portfolios/{pid}/shares").json() == []
        assert bob.get(f"/api/portfolios/{pid}").status_code == 403

    def test_share_errors(self, alice: TestClient, accounts, login) -> None:
        pid = _create(alice, "Research")["id"]
        url = f"/api/portfolios/{pid}/shares"

        assert alice.post(url, json={"faculty_id": accounts["alice"]}).status_code == 400
        assert alice.post(url, json={"faculty_id": 9999}).status_code == 404
        assert alice.post(url, json={"faculty_id": accounts["bob"]}).status_code == 201
        assert alice.post(url, json={"faculty_id": accounts["bob"]}).status_code == 409
        bob = login("bob")
        assert bob.post(url, json={"faculty_id": accounts["head"]}).status_code == 403
