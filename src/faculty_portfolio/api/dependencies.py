"""Shared dependencies for API routes."""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status

from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Faculty

logger = logging.getLogger(__name__)

SESSION_FACULTY_KEY = "faculty_id"


def get_current_faculty_id(request: Request) -> int:
    """Get the logged-in faculty id from the signed session cookie.

    Args:
        request: Incoming request carrying the session.

    Returns:
        int: Id of the authenticated faculty member.

    Raises:
        HTTPException: If there is no session or its faculty member no
            longer exists (401).
    """
    faculty_id = request.session.get(SESSION_FACULTY_KEY)
    if faculty_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Please log in.",
        )

    with get_session() as session:
        exists = session.get(Faculty, faculty_id) is not None
    if not exists:
        logger.warning("Session refers to missing faculty %s; clearing it", faculty_id)
        request.session.clear()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session is no longer valid. Please log in again.",
        )
    return faculty_id
