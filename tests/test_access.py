"""Tests for the access predicates over unsaved ORM objects."""

from __future__ import annotations

import pytest

from faculty_portfolio.constants import (
    ApprovalStatus,
    FacultyRole,
    PortfolioType,
    SharePermission,
)
from faculty_portfolio.data.models import (
    ApprovalRequest,
    Faculty,
    Portfolio,
    PortfolioItem,
    PortfolioShare,
)
from faculty_portfolio.services import access
from faculty_portfolio.services.errors import PermissionDeniedError


def _faculty(faculty_id: int, role: FacultyRole = FacultyRole.FACULTY, dept: str | None = "CS"):
    return Faculty(
        id=faculty_id,
        first_name="F",
        last_name=str(faculty_id),
        email=f"{faculty_id}@example.edu",
        role=role,
        dept_code=dept,
    )


def _portfolio(owner_id: int, kind: PortfolioType, dept: str | None = "CS") -> Portfolio:
    return Portfolio(id=100, name="P", type=kind, owner_id=owner_id, dept_code=dept)


def _share(portfolio: Portfolio, faculty_id: int, permission: SharePermission) -> None:
    portfolio.shares.append(PortfolioShare(shared_with_id=faculty_id, permission=permission))


def _item(portfolio: Portfolio | None, uploader_id: int) -> PortfolioItem:
    item = PortfolioItem(id=500, name="a.pdf", is_folder=False, uploaded_by_id=uploader_id)
    if portfolio is not None:
        item.portfolio = portfolio
        item.portfolio_id = portfolio.id
    return item


class TestPortfolioAccess:
    def test_owner_can_view_edit_and_manage(self) -> None:
        owner = _faculty(1)
        portfolio = _portfolio(1, PortfolioType.PERSONAL, dept=None)

        assert access.can_view_portfolio(owner, portfolio)
        assert access.can_edit_portfolio(owner, portfolio)
        assert access.can_manage_portfolio(owner, portfolio)

    def test_personal_portfolio_hidden_from_others(self) -> None:
        other = _faculty(2)
        portfolio = _portfolio(1, PortfolioType.PERSONAL, dept=None)

        assert not access.can_view_portfolio(other, portfolio)
        with pytest.raises(PermissionDeniedError):
            access.require_view_portfolio(other, portfolio)

    def test_view_share_grants_view_only(self) -> None:
        viewer = _faculty(2)
        portfolio = _portfolio(1, PortfolioType.PERSONAL, dept=None)
        _share(portfolio, 2, SharePermission.VIEW)

        assert access.share_for(viewer, portfolio) is not None
        assert access.can_view_portfolio(viewer, portfolio)
        assert not access.can_edit_portfolio(viewer, portfolio)
        assert not access.can_manage_portfolio(viewer, portfolio)

    def test_edit_share_grants_edit(self) -> None:
        editor = _faculty(2)
        portfolio = _portfolio(1, PortfolioType.PERSONAL, dept=None)
        _share(portfolio, 2, SharePermission.EDIT)

        assert access.can_edit_portfolio(editor, portfolio)
        assert not access.can_manage_portfolio(editor, portfolio)

    def test_department_portfolio_visible_to_members(self) -> None:
        portfolio = _portfolio(1, PortfolioType.DEPARTMENT, dept="CS")
        member = _faculty(2, dept="CS")
        outsider = _faculty(3, dept="MATH")
        unassigned = _faculty(4, dept=None)

        assert access.can_view_portfolio(member, portfolio)
        assert not access.can_edit_portfolio(member, portfolio)
        assert not access.can_view_portfolio(outsider, portfolio)
        assert not access.can_view_portfolio(unassigned, portfolio)

    def test_department_head_can_edit_department_portfolio(self) -> None:
        portfolio = _portfolio(1, PortfolioType.DEPARTMENT, dept="CS")
        head = _faculty(2, FacultyRole.DEPT_HEAD, dept="CS")
        other_head = _faculty(3, FacultyRole.DEPT_HEAD, dept="MATH")

        assert access.can_edit_portfolio(head, portfolio)
        assert not access.can_edit_portfolio(other_head, portfolio)

    def test_college_portfolio_is_for_deans(self) -> None:
        portfolio = _portfolio(1, PortfolioType.COLLEGE, dept="CS")
        dean = _faculty(2, FacultyRole.DEAN, dept="MATH")
        member = _faculty(3, dept="CS")

        assert access.can_view_portfolio(dean, portfolio)
        assert access.can_edit_portfolio(dean, portfolio)
        assert not access.can_view_portfolio(member, portfolio)


class TestItemAccess:
    def test_personal_document_only_for_uploader(self) -> None:
        item = _item(None, uploader_id=1)

        assert access.can_view_item(_faculty(1), item)
        assert access.can_delete_item(_faculty(1), item)
        assert not access.can_view_item(_faculty(2), item)
        assert not access.can_delete_item(_faculty(2), item)

    def test_portfolio_item_follows_portfolio_view(self) -> None:
        portfolio = _portfolio(1, PortfolioType.PERSONAL, dept=None)
        _share(portfolio, 2, SharePermission.VIEW)
        item = _item(portfolio, uploader_id=1)

        assert access.can_view_item(_faculty(2), item)
        assert not access.can_view_item(_faculty(3), item)

    def test_delete_allowed_for_uploader_or_owner(self) -> None:
        portfolio = _portfolio(1, PortfolioType.PERSONAL, dept=None)
        _share(portfolio, 2, SharePermission.EDIT)
        _share(portfolio, 3, SharePermission.EDIT)
        item = _item(portfolio, uploader_id=2)

        assert access.can_delete_item(_faculty(1), item)
        assert access.can_delete_item(_faculty(2), item)
        assert not access.can_delete_item(_faculty(3), item)
        with pytest.raises(PermissionDeniedError):
            access.require_delete_item(_faculty(3), item)


class TestReviewAccess:
    def _request(self, submitter: Faculty, status: ApprovalStatus, portfolio_dept: str | None):
        portfolio = _portfolio(submitter.id, PortfolioType.PERSONAL, dept=portfolio_dept)
        item = _item(portfolio, uploader_id=submitter.id)
        return ApprovalRequest(
            id=9,
            item=item,
            submitted_by=submitter,
            submitted_by_id=submitter.id,
            status=status,
        )

    def test_dean_reviews_pending_and_forwarded(self) -> None:
        submitter = _faculty(1, dept="CS")
        dean = _faculty(2, FacultyRole.DEAN, dept=None)

        assert access.can_review(dean, self._request(submitter, ApprovalStatus.PENDING, None))
        assert access.can_review(dean, self._request(submitter, ApprovalStatus.FORWARDED, None))
        assert not access.can_review(dean, self._request(submitter, ApprovalStatus.APPROVED, None))

    def test_dept_head_reviews_pending_in_own_department(self) -> None:
        submitter = _faculty(1, dept="CS")
        head = _faculty(2, FacultyRole.DEPT_HEAD, dept="CS")
        other_head = _faculty(3, FacultyRole.DEPT_HEAD, dept="MATH")
        pending = self._request(submitter, ApprovalStatus.PENDING, None)

        assert access.request_department(pending) == "CS"
        assert access.can_review(head, pending)
        assert not access.can_review(other_head, pending)
        assert not access.can_review(
            head, self._request(submitter, ApprovalStatus.FORWARDED, None)
        )

    def test_portfolio_department_takes_precedence(self) -> None:
        submitter = _faculty(1, dept="CS")
        math_head = _faculty(3, FacultyRole.DEPT_HEAD, dept="MATH")
        request = self._request(submitter, ApprovalStatus.PENDING, "MATH")

        assert access.request_department(request) == "MATH"
        assert access.can_review(math_head, request)

    def test_nobody_reviews_own_submission(self) -> None:
        dean = _faculty(2, FacultyRole.DEAN, dept="CS")
        request = self._request(dean, ApprovalStatus.PENDING, None)

        assert not access.can_review(dean, request)

    def test_regular_faculty_never_reviews(self) -> None:
        submitter = _faculty(1, dept="CS")
        colleague = _faculty(2, dept="CS")

        assert not access.can_review(
            colleague, self._request(submitter, ApprovalStatus.PENDING, None)
        )
