"""Services"""

from faculty_portfolio.services.auth import authenticate, register_faculty
from faculty_portfolio.services.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    PortfolioSystemError,
    ValidationError,
)
from faculty_portfolio.services.storage import ensure_base_directories

__all__ = [
    "authenticate",
    "register_faculty",
    "ensure_base_directories",
    "AuthenticationError",
    "ConflictError",
    "NotFoundError",
    "PermissionDeniedError",
    "PortfolioSystemError",
    "ValidationError",
]
