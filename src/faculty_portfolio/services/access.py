"""Access rules for portfolios, items and approval requests.

The ``can_*`` predicates are pure functions over loaded ORM objects and
only touch the database through lazy relationship loads. The ``require_*``
variants raise ``PermissionDeniedError`` and log the refusal.
"""

from __future__ import annotations

import logging

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
from faculty_portfolio.services.errors import PermissionDeniedError

logger = logging.getLogger(__name__)

_REVIEWABLE_BY_DEAN = (ApprovalStatus.PENDING, ApprovalStatus.FORWARDED)


def is_owner(faculty: Faculty, portfolio: Portfolio) -> bool:
    return portfolio.owner_id == faculty.id


def share_for(faculty: Faculty, portfolio: Portfolio) -> PortfolioShare | None:
    """Return the share granting ``faculty`` access to ``portfolio``, if any."""
    for share in portfolio.shares:
        if share.shared_with_id == faculty.id:
            return share
    return None


def _same_department(faculty: Faculty, portfolio: Portfolio) -> bool:
    return faculty.dept_code is not None and faculty.dept_code == portfolio.dept_code


def can_view_portfolio(faculty: Faculty, portfolio: Portfolio) -> bool:
    if is_owner(faculty, portfolio):
        return True
    if share_for(faculty, portfolio) is not None:
        return True
    if portfolio.type == PortfolioType.DEPARTMENT and _same_department(faculty, portfolio):
        return True
    return portfolio.type == PortfolioType.COLLEGE and faculty.role == FacultyRole.DEAN


def can_edit_portfolio(faculty: Faculty, portfolio: Portfolio) -> bool:
    if is_owner(faculty, portfolio):
        return True
    share = share_for(faculty, portfolio)
    if share is not None and share.permission == SharePermission.EDIT:
        return True
    if (
        portfolio.type == PortfolioType.DEPARTMENT
        and _same_department(faculty, portfolio)
        and faculty.role in (FacultyRole.DEPT_HEAD, FacultyRole.DEAN)
    ):
        return True
    return portfolio.type == PortfolioType.COLLEGE and faculty.role == FacultyRole.DEAN


def can_manage_portfolio(faculty: Faculty, portfolio: Portfolio) -> bool:
    """Delete, share, unshare and update are reserved for the owner."""
    return is_owner(faculty, portfolio)


def _is_personal(item: PortfolioItem) -> bool:
    return item.portfolio_id is None


def can_view_item(faculty: Faculty, item: PortfolioItem) -> bool:
    if _is_personal(item):
        return item.uploaded_by_id == faculty.id
    return can_view_portfolio(faculty, item.portfolio)


def can_edit_item(faculty: Faculty, item: PortfolioItem) -> bool:
    if _is_personal(item):
        return item.uploaded_by_id == faculty.id
    return can_edit_portfolio(faculty, item.portfolio)


def can_delete_item(faculty: Faculty, item: PortfolioItem) -> bool:
    if item.uploaded_by_id == faculty.id:
        return True
    if _is_personal(item):
        return False
    return is_owner(faculty, item.portfolio)


def request_department(request: ApprovalRequest) -> str | None:
    """Department a request belongs to: the portfolio's, else the submitter's."""
    portfolio = request.item.portfolio
    if portfolio is not None and portfolio.dept_code:
        return portfolio.dept_code
    return request.submitted_by.dept_code


def can_review(reviewer: Faculty, request: ApprovalRequest) -> bool:
    if request.submitted_by_id == reviewer.id:
        return False
    if reviewer.role == FacultyRole.DEAN:
        return request.status in _REVIEWABLE_BY_DEAN
    if reviewer.role == FacultyRole.DEPT_HEAD:
        return (
            request.status == ApprovalStatus.PENDING
            and reviewer.dept_code is not None
            and reviewer.dept_code == request_department(request)
        )
    return False


def _deny(faculty: Faculty, message: str) -> PermissionDeniedError:
    logger.warning("Access denied for faculty %s: %s", faculty.id, message)
    return PermissionDeniedError(message)


def require_view_portfolio(faculty: Faculty, portfolio: Portfolio) -> None:
    if not can_view_portfolio(faculty, portfolio):
        raise _deny(faculty, f"No access to portfolio {portfolio.id}")


def require_edit_portfolio(faculty: Faculty, portfolio: Portfolio) -> None:
    if not can_edit_portfolio(faculty, portfolio):
        raise _deny(faculty, f"No edit access to portfolio {portfolio.id}")


def require_manage_portfolio(faculty: Faculty, portfolio: Portfolio) -> None:
    if not can_manage_portfolio(faculty, portfolio):
        raise _deny(faculty, f"Only the owner can manage portfolio {portfolio.id}")


def require_view_item(faculty: Faculty, item: PortfolioItem) -> None:
    if not can_view_item(faculty, item):
        raise _deny(faculty, f"No access to item {item.id}")


def require_edit_item(faculty: Faculty, item: PortfolioItem) -> None:
    if not can_edit_item(faculty, item):
        raise _deny(faculty, f"No edit access to item {item.id}")


def require_delete_item(faculty: Faculty, item: PortfolioItem) -> None:
    if not can_delete_item(faculty, item):
        raise _deny(faculty, f"Cannot delete item {item.id}")


def require_review(reviewer: Faculty, request: ApprovalRequest) -> None:
    if not can_review(reviewer, request):
        raise _deny(reviewer, f"Cannot review request {request.id}")
