"""Role, portfolio and workflow enumerations shared by models and services."""

from __future__ import annotations

from enum import StrEnum


class FacultyRole(StrEnum):
    """Account roles, in increasing order of authority."""

    FACULTY = "FACULTY"
    DEPT_HEAD = "DEPT_HEAD"
    DEAN = "DEAN"


class PortfolioType(StrEnum):
    """Visibility scope of a portfolio."""

    PERSONAL = "PERSONAL"
    DEPARTMENT = "DEPARTMENT"
    COLLEGE = "COLLEGE"


class SharePermission(StrEnum):
    VIEW = "VIEW"
    EDIT = "EDIT"


class ApprovalStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FORWARDED = "FORWARDED"


class ItemStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReviewAction(StrEnum):
    """Actions a reviewer can take on an approval request."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"
    FORWARD = "FORWARD"


# Roles allowed to create each portfolio type.
PORTFOLIO_CREATOR_ROLE: dict[PortfolioType, FacultyRole | None] = {
    PortfolioType.PERSONAL: None,
    PortfolioType.DEPARTMENT: FacultyRole.DEPT_HEAD,
    PortfolioType.COLLEGE: FacultyRole.DEAN,
}


def parse_role(value: str) -> FacultyRole:
    """Parse a role name case-insensitively.

    Raises:
        ValueError: If the value is not a known role.
    """
    return FacultyRole(value.strip().upper())


def parse_portfolio_type(value: str) -> PortfolioType:
    """Parse a portfolio type name case-insensitively.

    Raises:
        ValueError: If the value is not a known portfolio type.
    """
    return PortfolioType(value.strip().upper())
