"""ORM model for files and folders stored inside portfolios.

Folders and files share one table. Folders are flagged with ``is_folder``
and any item may point at a parent folder, so the hierarchy is a
parent-pointer tree. Items without a portfolio are personal documents
that only their uploader can see.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faculty_portfolio.constants import ItemStatus
from faculty_portfolio.constants.uploads import (
    DEFAULT_FILE_ICON,
    EXTENSION_ICONS,
    FILE_ID_LENGTH,
    FOLDER_ICON,
    STATUS_BADGE_COLORS,
)
from faculty_portfolio.data.db import Base

if TYPE_CHECKING:
    from faculty_portfolio.data.models.approval_request import ApprovalRequest
    from faculty_portfolio.data.models.faculty import Faculty
    from faculty_portfolio.data.models.portfolio import Portfolio


def new_file_id() -> str:
    """Return a short unique identifier for a stored file."""
    return str(uuid.uuid4())[:FILE_ID_LENGTH]


class PortfolioItem(Base):
    """A file or folder row.

    Attributes:
        id: Auto-incrementing primary key.
        name: Display name (original filename for files).
        is_folder: True for folders.
        file_path: Absolute path of the stored file, None for folders.
        file_type: Content type reported at upload.
        file_size: Size in bytes.
        file_id: Short unique identifier derived from a UUID.
        comments: Uploader comments.
        status: PENDING, APPROVED or REJECTED.
        portfolio_id: Owning portfolio, None for personal documents.
        uploaded_by_id: Faculty member who created the row.
        parent_folder_id: Parent folder, None at the root.
    """

    __tablename__ = "portfolio_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_folder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    file_path: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    file_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    file_id: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, default=new_file_id
    )
    comments: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    status: Mapped[ItemStatus] = mapped_column(
        Enum(ItemStatus, native_enum=False, length=20),
        nullable=False,
        default=ItemStatus.PENDING,
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
    portfolio_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=True, index=True
    )
    uploaded_by_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("faculty.id"), nullable=False, index=True
    )
    parent_folder_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("portfolio_items.id", ondelete="CASCADE"), nullable=True, index=True
    )

    portfolio: Mapped[Portfolio | None] = relationship("Portfolio", back_populates="items")
    uploaded_by: Mapped[Faculty] = relationship("Faculty")
    parent_folder: Mapped[PortfolioItem | None] = relationship(
        "PortfolioItem", remote_side=[id], back_populates="children"
    )
    children: Mapped[list[PortfolioItem]] = relationship(
        "PortfolioItem", back_populates="parent_folder", cascade="all"
    )
    approval_requests: Mapped[list[ApprovalRequest]] = relationship(
        "ApprovalRequest", back_populates="item", cascade="all, delete-orphan"
    )

    @property
    def file_extension(self) -> str:
        """Lowercase extension without the dot, empty for folders."""
        if self.is_folder or not self.name or "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()

    @property
    def formatted_size(self) -> str:
        if self.is_folder or self.file_size is None:
            return ""
        if self.file_size < 1024:
            return f"{self.file_size} B"
        if self.file_size < 1024 * 1024:
            return f"{self.file_size / 1024:.1f} KB"
        return f"{self.file_size / (1024 * 1024):.1f} MB"

    @property
    def icon_class(self) -> str:
        if self.is_folder:
            return FOLDER_ICON
        return EXTENSION_ICONS.get(self.file_extension, DEFAULT_FILE_ICON)

    @property
    def badge_color(self) -> str:
        if not self.status:
            return "secondary"
        return STATUS_BADGE_COLORS.get(str(self.status).upper(), "secondary")
