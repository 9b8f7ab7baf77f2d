"""ORM model recording the review of a submitted portfolio item."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faculty_portfolio.constants import ApprovalStatus
from faculty_portfolio.data.db import Base

if TYPE_CHECKING:
    from faculty_portfolio.data.models.faculty import Faculty
    from faculty_portfolio.data.models.portfolio_item import PortfolioItem


class ApprovalRequest(Base):
    """Review record for an item uploaded by a regular faculty member.

    Attributes:
        item_id: Item under review.
        submitted_by_id: Uploader who submitted the item.
        reviewed_by_id: Last reviewer to act, if any.
        comments: Submitter comments.
        feedback: Reviewer feedback.
        status: PENDING, APPROVED, REJECTED or FORWARDED.
        submitted_at: UTC timestamp of submission.
        reviewed_at: UTC timestamp of the last review action.
    """

    __tablename__ = "approval_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("portfolio_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    submitted_by_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("faculty.id"), nullable=False, index=True
    )
    reviewed_by_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("faculty.id"), nullable=True
    )
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus, native_enum=False, length=20),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    item: Mapped[PortfolioItem] = relationship("PortfolioItem", back_populates="approval_requests")
    submitted_by: Mapped[Faculty] = relationship("Faculty", foreign_keys=[submitted_by_id])
    reviewed_by: Mapped[Faculty | None] = relationship("Faculty", foreign_keys=[reviewed_by_id])
