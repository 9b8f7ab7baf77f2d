"""Department service for managing departments and their members.

Structural changes (create, update, delete, chairperson) are reserved for
deans. Department heads may additionally add unassigned faculty to their
own department.
"""

from __future__ import annotations

import logging
from typing import TypedDict

from sqlalchemy.orm import Session

from faculty_portfolio.constants import FacultyRole
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Department, Faculty
from faculty_portfolio.services.errors import (
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from faculty_portfolio.services.lookup import load_department, load_faculty

logger = logging.getLogger(__name__)

__all__ = [
    "DepartmentData",
    "add_faculty",
    "assign_chairperson",
    "avatar_color",
    "avatar_initial",
    "create_department",
    "delete_department",
    "department_overview",
    "department_stats",
    "display_name",
    "get_department",
    "list_departments",
    "list_members",
    "my_department",
    "update_department",
]

_AVATAR_COLORS = (
    "#4f46e5",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#06b6d4",
    "#84cc16",
    "#f97316",
)

# Fields that can be updated on Department
_DEPARTMENT_FIELDS = ("dept_name", "office_location", "description")


class DepartmentData(TypedDict, total=False):
    """TypedDict for department data."""

    dept_code: str
    dept_name: str
    office_location: str | None
    description: str | None


def display_name(faculty: Faculty) -> str:
    """Return the titled full name, e.g. ``"Dr. Ada B. Lovelace Jr."``."""
    title = "Dr." if faculty.role in (FacultyRole.DEAN, FacultyRole.DEPT_HEAD) else "Prof."
    parts = [title, faculty.first_name, faculty.middle_name, faculty.last_name, faculty.suffix]
    return " ".join(part for part in parts if part)


def avatar_initial(faculty: Faculty) -> str:
    if faculty.first_name:
        return faculty.first_name[0].upper()
    return "U"


def avatar_color(name: str | None) -> str:
    """Pick a stable palette color for a name.

    Uses a 32-bit ``h * 31 + c`` string hash so a name always maps to the
    same color across processes.
    """
    if not name:
        return _AVATAR_COLORS[0]
    value = 0
    for char in name:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return _AVATAR_COLORS[abs(value) % len(_AVATAR_COLORS)]


def _member_to_dict(faculty: Faculty) -> dict:
    return {
        "id": faculty.id,
        "first_name": faculty.first_name,
        "middle_name": faculty.middle_name,
        "last_name": faculty.last_name,
        "suffix": faculty.suffix,
        "full_name": display_name(faculty),
        "email": faculty.email,
        "tel_no": faculty.tel_no,
        "address": faculty.address,
        "role": faculty.role,
        "avatar_initial": avatar_initial(faculty),
        "avatar_color": avatar_color(f"{faculty.first_name or ''}{faculty.last_name or ''}"),
    }


def _department_to_dict(department: Department) -> dict:
    """Convert a Department model to a dictionary."""
    chairperson = department.chairperson
    return {
        "dept_code": department.dept_code,
        "dept_name": department.dept_name,
        "office_location": department.office_location,
        "description": department.description,
        "chairperson_id": department.chairperson_id,
        "chairperson_name": display_name(chairperson) if chairperson else None,
        "member_count": len(department.members),
        "created_at": department.created_at,
    }


def _sorted_members(department: Department) -> list[Faculty]:
    return sorted(department.members, key=lambda f: (f.last_name.lower(), f.first_name.lower()))


def _require_dean(session: Session, actor_id: int) -> Faculty:
    actor = load_faculty(session, actor_id)
    if actor.role != FacultyRole.DEAN:
        logger.warning("Faculty %s (%s) attempted a dean-only action", actor.id, actor.role)
        raise PermissionDeniedError("Only deans can manage departments")
    return actor


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def list_departments() -> list[dict]:
    with get_session() as session:
        departments = session.query(Department).order_by(Department.dept_code).all()
        return [_department_to_dict(d) for d in departments]


def get_department(dept_code: str) -> dict:
    with get_session() as session:
        return _department_to_dict(load_department(session, dept_code))


def create_department(actor_id: int, data: DepartmentData) -> dict:
    """Create a department. Deans only.

    Raises:
        ValidationError: Code or name is blank.
        ConflictError: The code is already in use.
    """
    dept_code = _clean(data.get("dept_code"))
    dept_name = _clean(data.get("dept_name"))
    if not dept_code or not dept_name:
        raise ValidationError("Department code and name are required.")
    if len(dept_code) > 10:
        raise ValidationError("Department code must be at most 10 characters.")

    with get_session() as session:
        _require_dean(session, actor_id)
        if session.get(Department, dept_code) is not None:
            raise ConflictError(f"Department '{dept_code}' already exists")

        department = Department(
            dept_code=dept_code,
            dept_name=dept_name,
            office_location=_clean(data.get("office_location")),
            description=_clean(data.get("description")),
        )
        session.add(department)
        session.flush()
        result = _department_to_dict(department)

    logger.info("Faculty %s created department %s", actor_id, dept_code)
    return result


def update_department(actor_id: int, dept_code: str, data: DepartmentData) -> dict:
    """Update the provided fields of a department. Deans only."""
    with get_session() as session:
        _require_dean(session, actor_id)
        department = load_department(session, dept_code)

        for field in _DEPARTMENT_FIELDS:
            if field not in data or data[field] is None:
                continue
            value = _clean(data[field])
            if field == "dept_name" and not value:
                raise ValidationError("Department name cannot be empty.")
            setattr(department, field, value)

        session.flush()
        result = _department_to_dict(department)

    logger.info("Faculty %s updated department %s", actor_id, dept_code)
    return result


def delete_department(actor_id: int, dept_code: str) -> None:
    """Delete an empty department. Deans only.

    Raises:
        ConflictError: The department still has faculty members.
    """
    with get_session() as session:
        _require_dean(session, actor_id)
        department = load_department(session, dept_code)
        if department.members:
            raise ConflictError(
                f"Department '{dept_code}' still has {len(department.members)} faculty members"
            )
        session.delete(department)

    logger.info("Faculty %s deleted department %s", actor_id, dept_code)


def list_members(dept_code: str) -> list[dict]:
    with get_session() as session:
        department = load_department(session, dept_code)
        return [_member_to_dict(f) for f in _sorted_members(department)]


def assign_chairperson(actor_id: int, dept_code: str, faculty_id: int) -> dict:
    """Make a department member its chairperson. Deans only.

    Raises:
        ValidationError: The faculty member does not belong to the department.
    """
    with get_session() as session:
        _require_dean(session, actor_id)
        department = load_department(session, dept_code)
        faculty = load_faculty(session, faculty_id)
        if faculty.dept_code != department.dept_code:
            raise ValidationError(
                f"Faculty {faculty_id} is not a member of department '{dept_code}'"
            )

        department.chairperson = faculty
        session.flush()
        result = _department_to_dict(department)

    logger.info("Faculty %s is now chairperson of %s", faculty_id, dept_code)
    return result


def add_faculty(actor_id: int, dept_code: str, faculty_id: int) -> dict:
    """Assign an unassigned faculty member to a department.

    Allowed for deans and for the department head of ``dept_code``.

    Raises:
        ConflictError: The faculty member already belongs to a department.
    """
    with get_session() as session:
        actor = load_faculty(session, actor_id)
        department = load_department(session, dept_code)
        allowed = actor.role == FacultyRole.DEAN or (
            actor.role == FacultyRole.DEPT_HEAD and actor.dept_code == department.dept_code
        )
        if not allowed:
            logger.warning("Faculty %s may not add members to %s", actor.id, dept_code)
            raise PermissionDeniedError("Only deans or this department's head can add faculty")

        faculty = load_faculty(session, faculty_id)
        if faculty.dept_code is not None:
            raise ConflictError(
                f"Faculty is already assigned to department: {faculty.dept_code}"
            )

        faculty.department = department
        session.flush()
        result = _member_to_dict(faculty)
        result["dept_code"] = department.dept_code

    logger.info("Faculty %s added %s to department %s", actor_id, faculty_id, dept_code)
    return result


def my_department(faculty_id: int) -> dict | None:
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        if faculty.department is None:
            return None
        return _department_to_dict(faculty.department)


def _stats(department: Department) -> dict:
    members = department.members
    chairperson = department.chairperson
    return {
        "total_faculty": len(members),
        "regular_faculty": sum(1 for f in members if f.role == FacultyRole.FACULTY),
        "dept_heads": sum(1 for f in members if f.role == FacultyRole.DEPT_HEAD),
        "deans": sum(1 for f in members if f.role == FacultyRole.DEAN),
        "has_chairperson": chairperson is not None,
        "chairperson_name": display_name(chairperson) if chairperson else None,
    }


def department_stats(dept_code: str) -> dict:
    with get_session() as session:
        return _stats(load_department(session, dept_code))


def department_overview(dept_code: str) -> dict:
    """Return a department with its leadership, members and stats.

    The dean and department head are the first members holding those roles.
    """
    with get_session() as session:
        department = load_department(session, dept_code)
        members = _sorted_members(department)

        dean = next((f for f in members if f.role == FacultyRole.DEAN), None)
        head = next((f for f in members if f.role == FacultyRole.DEPT_HEAD), None)
        chairperson = department.chairperson

        return {
            "department": _department_to_dict(department),
            "leadership": {
                "dean": _member_to_dict(dean) if dean else None,
                "dept_head": _member_to_dict(head) if head else None,
                "chairperson": _member_to_dict(chairperson) if chairperson else None,
            },
            "members": [_member_to_dict(f) for f in members],
            "stats": _stats(department),
        }
