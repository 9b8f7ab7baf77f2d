"""Registration and login for faculty accounts.

This module provides a minimal username/password authentication layer
backed by the system_credentials table. Passwords are stored as salted
PBKDF2 hashes. A faculty member may log in with either their username or
their email address.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import os
from typing import TypedDict

from sqlalchemy.orm import Session

from faculty_portfolio.constants import FacultyRole, parse_role
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Department, Faculty, SystemCredentials
from faculty_portfolio.services.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from faculty_portfolio.services.lookup import faculty_summary
from faculty_portfolio.services.storage import create_user_directories

logger = logging.getLogger(__name__)

__all__ = [
    "RegistrationData",
    "authenticate",
    "describe_session",
    "hash_password",
    "register_faculty",
    "resolve_faculty",
    "verify_password",
]

_PBKDF2_ITERATIONS = 100_000
_SALT_BYTES = 16
_INVALID_LOGIN = "Invalid username or password"


class RegistrationData(TypedDict, total=False):
    """TypedDict for a new faculty account."""

    username: str
    password: str
    first_name: str
    middle_name: str | None
    last_name: str
    suffix: str | None
    email: str
    tel_no: str | None
    address: str | None
    role: str
    dept_code: str | None


def hash_password(password: str) -> str:
    """Return a salted PBKDF2 hash for the given password.

    The result is stored as ``<salt_hex>:<hash_hex>``.
    """
    salt = os.urandom(_SALT_BYTES)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"{salt.hex()}:{derived.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against a stored ``salt:hash`` string."""
    try:
        salt_hex, hash_hex = stored_hash.split(":", 1)
    except ValueError:
        return False

    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    candidate = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        _PBKDF2_ITERATIONS,
    )
    return hmac.compare_digest(candidate, expected)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def resolve_faculty(session: Session, principal: str) -> Faculty | None:
    """Find a faculty member by username, falling back to email."""
    principal = principal.strip()
    if not principal:
        return None

    credentials = (
        session.query(SystemCredentials).filter(SystemCredentials.username == principal).first()
    )
    if credentials is not None:
        return credentials.faculty

    return session.query(Faculty).filter(Faculty.email == principal).first()


def register_faculty(data: RegistrationData) -> dict:
    """Create a faculty member together with their login credentials.

    Args:
        data: Account fields. ``role`` defaults to FACULTY.

    Returns:
        Summary of the created faculty member including ``username``.

    Raises:
        ValidationError: If a required field is blank or the role is unknown.
        ConflictError: If the username or email is already taken.
        NotFoundError: If ``dept_code`` names no department.
    """
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    first_name = _clean(data.get("first_name"))
    last_name = _clean(data.get("last_name"))
    email = _clean(data.get("email"))

    if not username:
        raise ValidationError("Username cannot be empty.")
    if not password:
        raise ValidationError("Password cannot be empty.")
    if not first_name or not last_name:
        raise ValidationError("First and last name are required.")
    if not email:
        raise ValidationError("Email cannot be empty.")

    raw_role = data.get("role") or FacultyRole.FACULTY
    try:
        role = parse_role(raw_role)
    except ValueError as exc:
        raise ValidationError(f"Invalid role: {raw_role}") from exc

    dept_code = _clean(data.get("dept_code"))

    with get_session() as session:
        taken = (
            session.query(SystemCredentials).filter(SystemCredentials.username == username).first()
        )
        if taken is not None:
            raise ConflictError("Username already exists.")
        if session.query(Faculty).filter(Faculty.email == email).first() is not None:
            raise ConflictError("Email already registered.")
        if dept_code is not None and session.get(Department, dept_code) is None:
            raise NotFoundError(f"Department '{dept_code}' not found")

        faculty = Faculty(
            first_name=first_name,
            middle_name=_clean(data.get("middle_name")),
            last_name=last_name,
            suffix=_clean(data.get("suffix")),
            email=email,
            tel_no=_clean(data.get("tel_no")),
            address=_clean(data.get("address")),
            role=role,
            dept_code=dept_code,
        )
        faculty.credentials = SystemCredentials(
            username=username,
            password_hash=hash_password(password),
            account_type=role.value,
        )
        session.add(faculty)
        session.flush()

        result = faculty_summary(faculty)
        result["username"] = username

    logger.info("Registered faculty %s (%s) as %s", result["id"], username, role)

    try:
        create_user_directories(result["id"])
    except OSError:
        logger.exception("Failed to create upload directories for faculty %s", result["id"])

    return result


def authenticate(username: str, password: str) -> int:
    """Verify a login and return the faculty id.

    Raises:
        AuthenticationError: For an unknown principal or a wrong password.
    """
    if not username or not username.strip() or not password:
        raise AuthenticationError(_INVALID_LOGIN)

    with get_session() as session:
        faculty = resolve_faculty(session, username)
        if faculty is None or faculty.credentials is None:
            logger.warning("Login failed for unknown principal %r", username)
            raise AuthenticationError(_INVALID_LOGIN)
        if not verify_password(password, faculty.credentials.password_hash):
            logger.warning("Login failed for %r: wrong password", username)
            raise AuthenticationError(_INVALID_LOGIN)
        faculty_id = faculty.id

    logger.info("Faculty %s logged in", faculty_id)
    return faculty_id


def describe_session(faculty_id: int) -> dict | None:
    """Return username and role for a logged-in faculty member, or None."""
    with get_session() as session:
        faculty = session.get(Faculty, faculty_id)
        if faculty is None:
            return None
        return {
            "faculty_id": faculty.id,
            "username": faculty.credentials.username if faculty.credentials else None,
            "role": faculty.role,
            "full_name": faculty.full_name,
            "dept_code": faculty.dept_code,
        }
