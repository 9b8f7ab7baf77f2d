"""Shared row lookups and summaries used across services.

Each ``load_*`` helper raises ``NotFoundError`` instead of returning None,
so callers can rely on the result inside an open session.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from faculty_portfolio.data.models import Department, Faculty, Portfolio, PortfolioItem
from faculty_portfolio.services.errors import NotFoundError


def load_faculty(session: Session, faculty_id: int) -> Faculty:
    faculty = session.get(Faculty, faculty_id)
    if faculty is None:
        raise NotFoundError(f"Faculty {faculty_id} not found")
    return faculty


def load_department(session: Session, dept_code: str) -> Department:
    department = session.get(Department, dept_code)
    if department is None:
        raise NotFoundError(f"Department '{dept_code}' not found")
    return department


def load_portfolio(session: Session, portfolio_id: int) -> Portfolio:
    portfolio = session.get(Portfolio, portfolio_id)
    if portfolio is None:
        raise NotFoundError(f"Portfolio {portfolio_id} not found")
    return portfolio


def load_item(session: Session, item_id: int) -> PortfolioItem:
    item = session.get(PortfolioItem, item_id)
    if item is None:
        raise NotFoundError(f"Item {item_id} not found")
    return item


def faculty_summary(faculty: Faculty | None) -> dict | None:
    """Return the public fields of a faculty member, or None."""
    if faculty is None:
        return None
    return {
        "id": faculty.id,
        "first_name": faculty.first_name,
        "last_name": faculty.last_name,
        "full_name": faculty.full_name,
        "email": faculty.email,
        "role": faculty.role,
        "dept_code": faculty.dept_code,
    }
