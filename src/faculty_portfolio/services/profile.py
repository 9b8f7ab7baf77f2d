"""Profile service for the logged-in faculty member.

Covers reading and editing personal details, changing the password and
changing the login email.
"""

from __future__ import annotations

import logging
from typing import TypedDict

from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Faculty
from faculty_portfolio.services.auth import hash_password, verify_password
from faculty_portfolio.services.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from faculty_portfolio.services.lookup import load_faculty

logger = logging.getLogger(__name__)

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "ProfileData",
    "change_password",
    "get_profile",
    "update_email",
    "update_profile",
]

MIN_PASSWORD_LENGTH = 6

# Blank values are ignored for these fields.
_REQUIRED_NAME_FIELDS = ("first_name", "last_name")

# Blank values clear these fields.
_CLEARABLE_FIELDS = ("middle_name", "tel_no", "address")


class ProfileData(TypedDict, total=False):
    """TypedDict for editable profile fields."""

    first_name: str
    middle_name: str | None
    last_name: str
    suffix: str | None
    tel_no: str | None
    address: str | None


def _profile_to_dict(faculty: Faculty) -> dict:
    """Convert a Faculty model to the profile dictionary.

    Args:
        faculty: Faculty model instance

    Returns:
        Dictionary with profile data, username and department name
    """
    return {
        "id": faculty.id,
        "first_name": faculty.first_name,
        "middle_name": faculty.middle_name,
        "last_name": faculty.last_name,
        "suffix": faculty.suffix,
        "email": faculty.email,
        "tel_no": faculty.tel_no,
        "address": faculty.address,
        "role": faculty.role,
        "username": faculty.credentials.username if faculty.credentials else None,
        "dept_code": faculty.dept_code,
        "department_name": faculty.department.dept_name if faculty.department else None,
        "created_at": faculty.created_at,
        "updated_at": faculty.updated_at,
    }


def _apply_profile_updates(faculty: Faculty, changes: ProfileData) -> None:
    """Apply updates from changes to a Faculty model."""
    for field in _REQUIRED_NAME_FIELDS:
        value = changes.get(field)
        if value is not None and value.strip():
            setattr(faculty, field, value.strip())

    for field in _CLEARABLE_FIELDS:
        if field in changes and changes[field] is not None:
            setattr(faculty, field, changes[field].strip() or None)

    # Suffix is always replaced; an omitted or blank suffix clears it.
    faculty.suffix = (changes.get("suffix") or "").strip() or None


def get_profile(faculty_id: int) -> dict:
    with get_session() as session:
        return _profile_to_dict(load_faculty(session, faculty_id))


def update_profile(faculty_id: int, changes: ProfileData) -> dict:
    """Update the caller's personal details.

    Args:
        faculty_id: Faculty member being edited.
        changes: Fields to change. Blank first or last names are ignored,
            blank middle name, telephone and address clear the field.

    Returns:
        Updated profile dictionary.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        _apply_profile_updates(faculty, changes)
        session.flush()
        result = _profile_to_dict(faculty)

    logger.info("Faculty %s updated their profile", faculty_id)
    return result


def change_password(faculty_id: int, current_password: str, new_password: str) -> None:
    """Replace the caller's password after verifying the current one.

    Raises:
        AuthenticationError: The current password is wrong.
        ValidationError: The new password is too short.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        credentials = faculty.credentials
        if credentials is None:
            raise NotFoundError("User credentials not found")
        if not verify_password(current_password or "", credentials.password_hash):
            logger.warning("Faculty %s supplied a wrong current password", faculty_id)
            raise AuthenticationError("Current password is incorrect")
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        credentials.password_hash = hash_password(new_password)

    logger.info("Faculty %s changed their password", faculty_id)


def update_email(faculty_id: int, new_email: str, password: str) -> dict:
    """Change the caller's email after verifying their password.

    Raises:
        AuthenticationError: The password is wrong.
        ValidationError: The new email is blank.
        ConflictError: The email is already registered.
    """
    email = (new_email or "").strip()
    if not email:
        raise ValidationError("Email cannot be empty.")

    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        credentials = faculty.credentials
        if credentials is None:
            raise NotFoundError("User credentials not found")
        if not verify_password(password or "", credentials.password_hash):
            logger.warning("Faculty %s supplied a wrong password for email change", faculty_id)
            raise AuthenticationError("Password is incorrect")
        existing = session.query(Faculty).filter(Faculty.email == email).first()
        if existing is not None:
            raise ConflictError("Email is already registered")

        faculty.email = email
        session.flush()
        result = _profile_to_dict(faculty)

    logger.info("Faculty %s changed their email", faculty_id)
    return result
