"""Tests for approval queue and review endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from faculty_portfolio.constants import FacultyRole


@pytest.fixture
def clients(make_department, make_faculty, login) -> dict[str, TestClient]:
    make_department("CS")
    make_faculty(FacultyRole.FACULTY, "CS", username="author")
    make_faculty(FacultyRole.DEPT_HEAD, "CS", username="head")
    make_faculty(FacultyRole.DEAN, "CS", username="dean")
    return {name: login(name) for name in ("author", "head", "dean")}


@pytest.fixture
def request_id(clients: dict[str, TestClient]) -> int:
    author = clients["author"]
    portfolio = author.post("/api/portfolios", json={"name": "Research"}).json()
    response = author.post(
        f"/api/portfolios/{portfolio['id']}/files",
        files=[("files", ("paper.pdf", b"%PDF", "application/pdf"))],
    )
    return response.json()["uploaded"][0]["approval_request_id"]


def test_queues(clients: dict[str, TestClient], request_id: int) -> None:
    assert [r["id"] for r in clients["head"].get("/api/approvals/reviewable").json()] == [
        request_id
    ]
    assert clients["author"].get("/api/approvals/reviewable").json() == []
    mine = clients["author"].get("/api/approvals/mine").json()
    assert mine[0]["item_name"] == "paper.pdf"
    assert mine[0]["submitted_by"]["email"] == "author@example.edu"


def test_forward_and_approve(clients: dict[str, TestClient], request_id: int) -> None:
    url = f"/api/approvals/{request_id}/review"

    forwarded = clients["head"].post(url, json={"action": "FORWARD", "feedback": "For the dean"})
    assert forwarded.status_code == 200
    assert forwarded.json()["status"] == "FORWARDED"

    assert clients["dean"].post(url, json={"action": "FORWARD"}).status_code == 403
    approved = clients["dean"].post(url, json={"action": "approve"})
    assert approved.json()["status"] == "APPROVED"
    assert approved.json()["item_status"] == "APPROVED"

    assert clients["dean"].post(url, json={"action": "REJECT"}).status_code == 409


def test_reject_and_resubmit(clients: dict[str, TestClient], request_id: int) -> None:
    rejected = clients["head"].post(
        f"/api/approvals/{request_id}/review", json={"action": "REJECT", "feedback": "Too short"}
    )
    assert rejected.json()["feedback"] == "Too short"

    detail = clients["author"].get(f"/api/approvals/{request_id}").json()
    assert detail["status"] == "REJECTED"

    assert clients["head"].post(f"/api/approvals/{request_id}/resubmit").status_code == 403
    resubmitted = clients["author"].post(
        f"/api/approvals/{request_id}/resubmit", json={"comments": "Expanded"}
    )
    assert resubmitted.status_code == 200
    assert resubmitted.json()["status"] == "PENDING"
    assert resubmitted.json()["comments"] == "Expanded"


def test_invalid_action_and_self_review(clients: dict[str, TestClient], request_id: int) -> None:
    url = f"/api/approvals/{request_id}/review"

    assert clients["head"].post(url, json={"action": "SHRUG"}).status_code == 400
    assert clients["author"].post(url, json={"action": "APPROVE"}).status_code == 403
    assert clients["head"].get("/api/approvals/9999").status_code == 404
