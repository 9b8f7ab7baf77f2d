"""Tests for the review workflow of faculty uploads."""

from __future__ import annotations

import pytest

from faculty_portfolio.constants import ApprovalStatus, FacultyRole, ItemStatus
from faculty_portfolio.services import approvals as approval_service
from faculty_portfolio.services import items as item_service
from faculty_portfolio.services import portfolios as portfolio_service
from faculty_portfolio.services.errors import (
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)


@pytest.fixture
def people(make_department, make_faculty) -> dict[str, int]:
    make_department("CS", "Computer Science")
    make_department("EE", "Electrical Engineering")
    return {
        "faculty": make_faculty(FacultyRole.FACULTY, "CS"),
        "head": make_faculty(FacultyRole.DEPT_HEAD, "CS"),
        "other_head": make_faculty(FacultyRole.DEPT_HEAD, "EE"),
        "dean": make_faculty(FacultyRole.DEAN, "EE"),
    }


@pytest.fixture
def request_id(people) -> int:
    portfolio = portfolio_service.create_portfolio(people["faculty"], "Research")
    uploaded = item_service.upload_file(
        people["faculty"], portfolio["id"], None, "paper.pdf", "application/pdf", b"%PDF", "v1"
    )
    return uploaded["approval_request_id"]


def _ids(requests: list[dict]) -> list[int]:
    return [r["id"] for r in requests]


class TestVisibility:
    def test_reviewable_by_role_and_department(self, people, request_id) -> None:
        assert _ids(approval_service.list_reviewable(people["head"])) == [request_id]
        assert _ids(approval_service.list_reviewable(people["dean"])) == [request_id]
        assert approval_service.list_reviewable(people["other_head"]) == []
        assert approval_service.list_reviewable(people["faculty"]) == []

    def test_request_dictionary(self, people, request_id) -> None:
        request = approval_service.get_request(people["head"], request_id)

        assert request["status"] == ApprovalStatus.PENDING
        assert request["item_name"] == "paper.pdf"
        assert request["portfolio_name"] == "Research"
        assert request["dept_code"] == "CS"
        assert request["comments"] == "v1"
        assert request["submitted_by"]["id"] == people["faculty"]
        assert request["reviewed_by"] is None

    def test_my_submissions(self, people, request_id) -> None:
        assert _ids(approval_service.list_my_submissions(people["faculty"])) == [request_id]
        assert approval_service.list_my_submissions(people["head"]) == []

    def test_get_request_hidden_from_unrelated_faculty(self, people, request_id) -> None:
        with pytest.raises(PermissionDeniedError):
            approval_service.get_request(people["other_head"], request_id)


class TestReview:
    def test_head_approves(self, people, request_id) -> None:
        result = approval_service.review(people["head"], request_id, "approve", " Looks good ")

        assert result["status"] == ApprovalStatus.APPROVED
        assert result["item_status"] == ItemStatus.APPROVED
        assert result["feedback"] == "Looks good"
        assert result["reviewed_by"]["id"] == people["head"]
        assert result["reviewed_at"] is not None
        assert approval_service.list_reviewable(people["head"]) == []

    def test_forward_then_dean_approves(self, people, request_id) -> None:
        forwarded = approval_service.review(people["head"], request_id, "FORWARD")
        assert forwarded["status"] == ApprovalStatus.FORWARDED
        assert forwarded["item_status"] == ItemStatus.PENDING

        # Forwarded requests leave the head's queue and stay in the dean's.
        assert approval_service.list_reviewable(people["head"]) == []
        assert _ids(approval_service.list_reviewable(people["dean"])) == [request_id]
        with pytest.raises(PermissionDeniedError):
            approval_service.review(people["head"], request_id, "APPROVE")

        approved = approval_service.review(people["dean"], request_id, "APPROVE")
        assert approved["status"] == ApprovalStatus.APPROVED
        assert approved["item_status"] == ItemStatus.APPROVED

    def test_dean_cannot_forward(self, people, request_id) -> None:
        with pytest.raises(PermissionDeniedError):
            approval_service.review(people["dean"], request_id, "FORWARD")

    def test_other_department_head_cannot_review(self, people, request_id) -> None:
        with pytest.raises(PermissionDeniedError):
            approval_service.review(people["other_head"], request_id, "APPROVE")

    def test_submitter_cannot_review(self, people, request_id) -> None:
        with pytest.raises(PermissionDeniedError):
            approval_service.review(people["faculty"], request_id, "APPROVE")

    def test_terminal_requests_are_conflicts(self, people, request_id) -> None:
        approval_service.review(people["head"], request_id, "APPROVE")

        with pytest.raises(ConflictError):
            approval_service.review(people["dean"], request_id, "REJECT")

    def test_unknown_action(self, people, request_id) -> None:
        with pytest.raises(ValidationError):
            approval_service.review(people["head"], request_id, "ESCALATE")


class TestResubmit:
    def test_reject_then_resubmit(self, people, request_id) -> None:
        rejected = approval_service.review(people["head"], request_id, "REJECT", "Missing pages")
        assert rejected["item_status"] == ItemStatus.REJECTED

        resubmitted = approval_service.resubmit(people["faculty"], request_id, "v2")

        assert resubmitted["status"] == ApprovalStatus.PENDING
        assert resubmitted["item_status"] == ItemStatus.PENDING
        assert resubmitted["comments"] == "v2"
        assert resubmitted["feedback"] is None
        assert resubmitted["reviewed_by"] is None
        assert _ids(approval_service.list_reviewable(people["head"])) == [request_id]

    def test_resubmit_rules(self, people, request_id) -> None:
        with pytest.raises(ConflictError):
            approval_service.resubmit(people["faculty"], request_id)

        approval_service.review(people["head"], request_id, "REJECT")
        with pytest.raises(PermissionDeniedError):
            approval_service.resubmit(people["head"], request_id)
