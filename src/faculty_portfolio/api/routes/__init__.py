"""Route handlers for the API."""

from faculty_portfolio.api.routes import (
    approvals,
    auth,
    departments,
    documents,
    health,
    items,
    portfolios,
    profile,
)

__all__ = [
    "health",
    "auth",
    "portfolios",
    "items",
    "documents",
    "approvals",
    "departments",
    "profile",
]
