"""Shared Pydantic schemas for API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from faculty_portfolio.constants import FacultyRole


class MessageResponse(BaseModel):
    """Plain acknowledgement for actions without a resource body."""

    message: str


class DeletedResponse(BaseModel):
    """Acknowledgement for deletions that remove several rows."""

    message: str
    deleted: int = Field(description="Number of rows removed")


class UploadFailure(BaseModel):
    """A file that could not be stored during a multi-file upload."""

    filename: str
    error: str


class FacultySummary(BaseModel):
    """Public fields of a faculty member embedded in other responses."""

    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: FacultyRole
    dept_code: str | None = None
