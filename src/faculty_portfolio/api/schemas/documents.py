"""Pydantic schemas for personal document endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from faculty_portfolio.api.schemas.common import UploadFailure
from faculty_portfolio.constants import ItemStatus


class DocumentResponse(BaseModel):
    """Response schema for a personal document."""

    id: int
    name: str
    file_type: str | None = None
    file_size: int | None = None
    formatted_size: str
    file_id: str
    uploaded_at: datetime
    status: ItemStatus
    comments: str = ""
    category: str
    icon: str


class DocumentUploadResponse(BaseModel):
    uploaded: list[DocumentResponse]
    failed: list[UploadFailure]


class DocumentStatsResponse(BaseModel):
    """Totals over the caller's personal documents."""

    total_files: int
    total_size: int
    formatted_size: str
    categories: dict[str, int]
