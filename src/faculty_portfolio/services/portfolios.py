"""Portfolio service: creation, listing, updates, deletion and sharing.

Every operation takes the acting faculty id first and enforces the access
rules from ``services.access`` before touching data.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from faculty_portfolio.constants import (
    PORTFOLIO_CREATOR_ROLE,
    FacultyRole,
    PortfolioType,
    SharePermission,
    parse_portfolio_type,
)
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Faculty, Portfolio, PortfolioShare
from faculty_portfolio.services import access
from faculty_portfolio.services.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from faculty_portfolio.services.lookup import faculty_summary, load_faculty, load_portfolio
from faculty_portfolio.services.storage import remove_stored_files

logger = logging.getLogger(__name__)

__all__ = [
    "create_portfolio",
    "delete_portfolio",
    "get_portfolio",
    "list_college_portfolios",
    "list_department_portfolios",
    "list_my_portfolios",
    "list_shared_with_me",
    "list_shares",
    "parse_permission",
    "revoke_share",
    "share_portfolio",
    "update_portfolio",
    "update_share_permission",
]


def _portfolio_to_dict(portfolio: Portfolio, viewer: Faculty | None = None) -> dict:
    """Convert a Portfolio model to a dictionary.

    When ``viewer`` is given, the result also carries what that faculty
    member may do with the portfolio.
    """
    data = {
        "id": portfolio.id,
        "name": portfolio.name,
        "description": portfolio.description,
        "type": portfolio.type,
        "owner_id": portfolio.owner_id,
        "owner_name": portfolio.owner.full_name if portfolio.owner else None,
        "dept_code": portfolio.dept_code,
        "created_at": portfolio.created_at,
        "is_active": portfolio.is_active,
        "item_count": len(portfolio.items),
    }
    if viewer is not None:
        data["can_edit"] = access.can_edit_portfolio(viewer, portfolio)
        data["can_manage"] = access.can_manage_portfolio(viewer, portfolio)
    return data


def _share_to_dict(share: PortfolioShare) -> dict:
    return {
        "id": share.id,
        "portfolio_id": share.portfolio_id,
        "shared_with_id": share.shared_with_id,
        "shared_with": faculty_summary(share.shared_with),
        "permission": share.permission,
        "shared_at": share.shared_at,
    }


def parse_permission(value: str) -> SharePermission:
    try:
        return SharePermission(str(value).strip().upper())
    except ValueError as exc:
        raise ValidationError(f"Invalid share permission: {value}") from exc


def _name_taken(
    session: Session, owner_id: int, name: str, exclude_id: int | None = None
) -> bool:
    query = session.query(Portfolio).filter(Portfolio.owner_id == owner_id, Portfolio.name == name)
    if exclude_id is not None:
        query = query.filter(Portfolio.id != exclude_id)
    return query.first() is not None


def _load_share(session: Session, portfolio: Portfolio, share_id: int) -> PortfolioShare:
    share = session.get(PortfolioShare, share_id)
    if share is None or share.portfolio_id != portfolio.id:
        raise NotFoundError(f"Share {share_id} not found on portfolio {portfolio.id}")
    return share


def create_portfolio(
    faculty_id: int,
    name: str,
    description: str | None = None,
    portfolio_type: str | PortfolioType = PortfolioType.PERSONAL,
) -> dict:
    """Create a portfolio owned by ``faculty_id``.

    Args:
        faculty_id: Owner of the new portfolio.
        name: Portfolio name, unique per owner.
        description: Optional description.
        portfolio_type: PERSONAL, DEPARTMENT or COLLEGE.

    Returns:
        Dictionary with the created portfolio.

    Raises:
        ValidationError: Blank name, unknown type, or missing department.
        PermissionDeniedError: The owner's role may not create this type.
        ConflictError: The owner already has a portfolio with this name.
    """
    try:
        parsed_type = parse_portfolio_type(str(portfolio_type))
    except ValueError as exc:
        raise ValidationError(f"Invalid portfolio type: {portfolio_type}") from exc

    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError("Portfolio name cannot be empty.")

    with get_session() as session:
        owner = load_faculty(session, faculty_id)

        required_role = PORTFOLIO_CREATOR_ROLE[parsed_type]
        if required_role is not None and owner.role != required_role:
            logger.warning(
                "Faculty %s (%s) may not create a %s portfolio", owner.id, owner.role, parsed_type
            )
            raise PermissionDeniedError(
                f"Only {required_role} can create {parsed_type} portfolios"
            )

        if _name_taken(session, owner.id, clean_name):
            raise ConflictError(f"A portfolio named '{clean_name}' already exists")

        dept_code = None
        if parsed_type != PortfolioType.PERSONAL:
            if owner.dept_code is None:
                raise ValidationError(
                    f"A department is required to create a {parsed_type} portfolio"
                )
            dept_code = owner.dept_code

        portfolio = Portfolio(
            name=clean_name,
            description=(description or "").strip() or None,
            type=parsed_type,
            owner=owner,
            dept_code=dept_code,
        )
        session.add(portfolio)
        session.flush()
        result = _portfolio_to_dict(portfolio, owner)

    logger.info("Faculty %s created %s portfolio %s", faculty_id, parsed_type, result["id"])
    return result


def list_my_portfolios(faculty_id: int) -> list[dict]:
    """Return the portfolios owned by the faculty member, newest first."""
    with get_session() as session:
        owner = load_faculty(session, faculty_id)
        portfolios = (
            session.query(Portfolio)
            .filter(Portfolio.owner_id == owner.id)
            .order_by(Portfolio.created_at.desc(), Portfolio.id.desc())
            .all()
        )
        return [_portfolio_to_dict(p, owner) for p in portfolios]


def list_department_portfolios(faculty_id: int) -> list[dict]:
    """Return DEPARTMENT portfolios of the caller's department.

    Only department heads and deans receive results.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        if faculty.role not in (FacultyRole.DEPT_HEAD, FacultyRole.DEAN):
            return []
        if faculty.dept_code is None:
            return []
        portfolios = (
            session.query(Portfolio)
            .filter(
                Portfolio.type == PortfolioType.DEPARTMENT,
                Portfolio.dept_code == faculty.dept_code,
            )
            .order_by(Portfolio.created_at.desc(), Portfolio.id.desc())
            .all()
        )
        return [_portfolio_to_dict(p, faculty) for p in portfolios]


def list_college_portfolios(faculty_id: int) -> list[dict]:
    """Return every COLLEGE portfolio. Deans only."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        if faculty.role != FacultyRole.DEAN:
            logger.warning("Faculty %s denied college portfolio listing", faculty.id)
            raise PermissionDeniedError("Only deans can list college portfolios")
        portfolios = (
            session.query(Portfolio)
            .filter(Portfolio.type == PortfolioType.COLLEGE)
            .order_by(Portfolio.created_at.desc(), Portfolio.id.desc())
            .all()
        )
        return [_portfolio_to_dict(p, faculty) for p in portfolios]


def list_shared_with_me(faculty_id: int) -> list[dict]:
    """Return the shares granted to the caller with their portfolio and owner."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        shares = (
            session.query(PortfolioShare)
            .filter(PortfolioShare.shared_with_id == faculty.id)
            .order_by(PortfolioShare.shared_at.desc(), PortfolioShare.id.desc())
            .all()
        )
        return [
            {
                "share_id": share.id,
                "permission": share.permission,
                "shared_at": share.shared_at,
                "portfolio": _portfolio_to_dict(share.portfolio, faculty),
                "owner": faculty_summary(share.portfolio.owner),
            }
            for share in shares
        ]


def get_portfolio(faculty_id: int, portfolio_id: int) -> dict:
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_view_portfolio(faculty, portfolio)
        return _portfolio_to_dict(portfolio, faculty)


def update_portfolio(
    faculty_id: int,
    portfolio_id: int,
    name: str | None = None,
    description: str | None = None,
    is_active: bool | None = None,
) -> dict:
    """Update the given fields of a portfolio. Owner only.

    Raises:
        ValidationError: If ``name`` is blank.
        ConflictError: If the new name collides with another owned portfolio.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_manage_portfolio(faculty, portfolio)

        if name is not None:
            clean_name = name.strip()
            if not clean_name:
                raise ValidationError("Portfolio name cannot be empty.")
            if _name_taken(session, portfolio.owner_id, clean_name, exclude_id=portfolio.id):
                raise ConflictError(f"A portfolio named '{clean_name}' already exists")
            portfolio.name = clean_name
        if description is not None:
            portfolio.description = description.strip() or None
        if is_active is not None:
            portfolio.is_active = is_active

        session.flush()
        result = _portfolio_to_dict(portfolio, faculty)

    logger.info("Faculty %s updated portfolio %s", faculty_id, portfolio_id)
    return result


def delete_portfolio(faculty_id: int, portfolio_id: int) -> int:
    """Delete a portfolio with its items, approval requests, shares and files.

    Returns:
        Number of item rows removed.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_manage_portfolio(faculty, portfolio)

        items = list(portfolio.items)
        paths = [item.file_path for item in items if not item.is_folder and item.file_path]
        session.delete(portfolio)

    removed = remove_stored_files(paths)
    logger.info(
        "Faculty %s deleted portfolio %s (%d items, %d files)",
        faculty_id,
        portfolio_id,
        len(items),
        removed,
    )
    return len(items)


def share_portfolio(
    faculty_id: int,
    portfolio_id: int,
    target_faculty_id: int,
    permission: str | SharePermission = SharePermission.VIEW,
) -> dict:
    """Grant another faculty member VIEW or EDIT access.

    Raises:
        NotFoundError: The target faculty member does not exist.
        ValidationError: The target is the owner or the permission is unknown.
        ConflictError: The portfolio is already shared with the target.
    """
    parsed = parse_permission(permission)

    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_manage_portfolio(faculty, portfolio)

        target = load_faculty(session, target_faculty_id)
        if target.id == portfolio.owner_id:
            raise ValidationError("Cannot share a portfolio with its owner")
        if access.share_for(target, portfolio) is not None:
            raise ConflictError(f"Portfolio {portfolio.id} is already shared with {target.id}")

        share = PortfolioShare(permission=parsed, shared_with=target)
        portfolio.shares.append(share)
        session.flush()
        result = _share_to_dict(share)

    logger.info(
        "Faculty %s shared portfolio %s with %s (%s)",
        faculty_id,
        portfolio_id,
        target_faculty_id,
        parsed,
    )
    return result


def update_share_permission(
    faculty_id: int, portfolio_id: int, share_id: int, permission: str | SharePermission
) -> dict:
    parsed = parse_permission(permission)
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_manage_portfolio(faculty, portfolio)

        share = _load_share(session, portfolio, share_id)
        share.permission = parsed
        session.flush()
        result = _share_to_dict(share)

    logger.info("Share %s on portfolio %s changed to %s", share_id, portfolio_id, parsed)
    return result


def revoke_share(faculty_id: int, portfolio_id: int, share_id: int) -> None:
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_manage_portfolio(faculty, portfolio)

        share = _load_share(session, portfolio, share_id)
        portfolio.shares.remove(share)

    logger.info("Faculty %s revoked share %s on portfolio %s", faculty_id, share_id, portfolio_id)


def list_shares(faculty_id: int, portfolio_id: int) -> list[dict]:
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_manage_portfolio(faculty, portfolio)
        return [_share_to_dict(share) for share in portfolio.shares]
