"""Domain exceptions raised by the service layer.

Routes do not catch these individually; ``api.main`` maps each class to an
HTTP status code through a single exception handler.
"""

from __future__ import annotations


class PortfolioSystemError(RuntimeError):
    """Base class for service-level failures."""

    status_code = 500


class NotFoundError(PortfolioSystemError):
    """Raised when a referenced record does not exist."""

    status_code = 404


class PermissionDeniedError(PortfolioSystemError):
    """Raised when the acting faculty member lacks access."""

    status_code = 403


class ValidationError(PortfolioSystemError):
    """Raised when input is malformed or violates a business rule."""

    status_code = 400


class ConflictError(PortfolioSystemError):
    """Raised on uniqueness violations and invalid state transitions."""

    status_code = 409


class AuthenticationError(PortfolioSystemError):
    """Raised when credentials do not verify."""

    status_code = 401
