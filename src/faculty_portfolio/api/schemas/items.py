"""Pydantic schemas for portfolio items, folders and uploads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from faculty_portfolio.api.schemas.common import UploadFailure
from faculty_portfolio.constants import ItemStatus


class ItemResponse(BaseModel):
    """Response schema for a file or folder."""

    id: int
    name: str
    is_folder: bool
    file_type: str | None = None
    file_size: int | None = None
    formatted_size: str = ""
    file_extension: str = ""
    file_id: str
    comments: str = ""
    status: ItemStatus
    badge_color: str
    icon_class: str
    portfolio_id: int | None = None
    parent_folder_id: int | None = None
    uploaded_by_id: int
    uploaded_by_name: str | None = None
    uploaded_at: datetime
    updated_at: datetime
    approval_request_id: int | None = None


class BreadcrumbEntry(BaseModel):
    id: int
    name: str


class FolderSummary(BaseModel):
    id: int
    name: str
    parent_id: int | None = None


class ItemListResponse(BaseModel):
    """Items of one folder level plus the path leading to it."""

    portfolio_id: int
    folder_id: int | None = None
    items: list[ItemResponse]
    breadcrumb: list[BreadcrumbEntry]


class FolderContentsResponse(BaseModel):
    folder: ItemResponse
    items: list[ItemResponse]
    breadcrumb: list[BreadcrumbEntry]


class FolderCreateRequest(BaseModel):
    """Request schema for creating a folder."""

    name: str = Field(..., description="Folder name")
    parent_folder_id: int | None = Field(None, description="Parent folder, omitted for root")


class ItemUpdateRequest(BaseModel):
    """Request schema for renaming or moving an item.

    Sending ``parent_folder_id`` (including null) moves the item.
    """

    name: str | None = Field(None, description="New display name")
    parent_folder_id: int | None = Field(None, description="Target folder, null for root")


class UploadResultResponse(BaseModel):
    """Per-file outcome of a multi-file upload."""

    uploaded: list[ItemResponse]
    failed: list[UploadFailure]
