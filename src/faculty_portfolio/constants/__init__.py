from __future__ import annotations

from faculty_portfolio.constants.roles import (
    PORTFOLIO_CREATOR_ROLE,
    ApprovalStatus,
    FacultyRole,
    ItemStatus,
    PortfolioType,
    ReviewAction,
    SharePermission,
    parse_portfolio_type,
    parse_role,
)

__all__ = [
    "ApprovalStatus",
    "FacultyRole",
    "ItemStatus",
    "PORTFOLIO_CREATOR_ROLE",
    "PortfolioType",
    "ReviewAction",
    "SharePermission",
    "parse_portfolio_type",
    "parse_role",
]
