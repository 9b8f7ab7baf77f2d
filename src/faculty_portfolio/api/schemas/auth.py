"""Pydantic schemas for registration, login and session endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from faculty_portfolio.constants import FacultyRole


class RegisterRequest(BaseModel):
    """Request schema for creating a faculty account."""

    username: str = Field(..., description="Login username")
    password: str = Field(..., description="Plaintext password, stored hashed")
    first_name: str = Field(..., description="Given name")
    middle_name: str | None = Field(None, description="Middle name")
    last_name: str = Field(..., description="Family name")
    suffix: str | None = Field(None, description="Name suffix (e.g. Jr.)")
    email: str = Field(..., description="Unique contact email")
    tel_no: str | None = Field(None, description="Telephone number")
    address: str | None = Field(None, description="Postal address")
    role: str = Field("FACULTY", description="FACULTY, DEPT_HEAD or DEAN")
    dept_code: str | None = Field(None, description="Department code")


class LoginRequest(BaseModel):
    """Request schema for logging in with a username or email."""

    username: str = Field(..., description="Username or email address")
    password: str


class AccountResponse(BaseModel):
    """Response schema for a newly registered account."""

    id: int
    username: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: FacultyRole
    dept_code: str | None = None


class SessionResponse(BaseModel):
    """Current authentication state of the caller."""

    authenticated: bool
    faculty_id: int | None = None
    username: str | None = None
    role: FacultyRole | None = None
    full_name: str | None = None
    dept_code: str | None = None
