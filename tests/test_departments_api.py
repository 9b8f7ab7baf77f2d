"""Tests for department endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from faculty_portfolio.constants import FacultyRole


@pytest.fixture
def dean(make_department, make_faculty, login) -> TestClient:
    make_department("ADM", "Administration")
    make_faculty(FacultyRole.DEAN, "ADM", username="dean", first_name="Ada", last_name="King")
    return login("dean")


def test_department_lifecycle(dean: TestClient) -> None:
    created = dean.post(
        "/api/departments", json={"dept_code": "CS", "dept_name": "Computer Science"}
    )
    assert created.status_code == 201

    patched = dean.patch("/api/departments/CS", json={"office_location": "Room 101"})
    assert patched.json()["office_location"] == "Room 101"
    assert patched.json()["dept_name"] == "Computer Science"

    codes = [d["dept_code"] for d in dean.get("/api/departments").json()]
    assert codes == ["ADM", "CS"]

    assert dean.delete("/api/departments/CS").status_code == 200
    assert dean.get("/api/departments/CS").status_code == 404
    assert dean.delete("/api/departments/ADM").status_code == 409


def test_only_deans_manage_departments(dean: TestClient, make_faculty, login) -> None:
    make_faculty(FacultyRole.DEPT_HEAD, "ADM", username="head")
    head = login("head")

    response = head.post("/api/departments", json={"dept_code": "EE", "dept_name": "EE"})

    assert response.status_code == 403
    assert dean.post(
        "/api/departments", json={"dept_code": "ADM", "dept_name": "Again"}
    ).status_code == 409


def test_members_chairperson_and_overview(dean: TestClient, make_faculty, login) -> None:
    newcomer = make_faculty(FacultyRole.FACULTY, None, username="newcomer")
    outsider = make_faculty(FacultyRole.FACULTY, None, username="outsider")

    added = dean.post("/api/departments/ADM/faculty", json={"faculty_id": newcomer})
    assert added.status_code == 200
    assert added.json()["dept_code"] == "ADM"
    assert dean.post(
        "/api/departments/ADM/faculty", json={"faculty_id": newcomer}
    ).status_code == 409

    assert dean.post(
        "/api/departments/ADM/chairperson", json={"faculty_id": outsider}
    ).status_code == 400
    chaired = dean.post("/api/departments/ADM/chairperson", json={"faculty_id": newcomer})
    assert chaired.json()["chairperson_id"] == newcomer

    members = dean.get("/api/departments/ADM/faculty").json()
    assert len(members) == 2
    assert newcomer in {m["id"] for m in members}
    assert all(m["avatar_color"].startswith("#") for m in members)

    stats = dean.get("/api/departments/ADM/stats").json()
    assert stats["total_faculty"] == 2
    assert stats["has_chairperson"] is True

    overview = dean.get("/api/departments/ADM/overview").json()
    assert overview["leadership"]["dean"]["full_name"] == "Dr. Ada King"
    assert overview["leadership"]["dept_head"] is None
    assert overview["leadership"]["chairperson"]["id"] == newcomer

    newcomer_client = login("newcomer")
    assert newcomer_client.get("/api/departments/mine").json()["dept_code"] == "ADM"
    assert login("outsider").get("/api/departments/mine").json() is None
