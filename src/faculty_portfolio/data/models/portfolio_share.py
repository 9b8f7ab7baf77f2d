"""ORM model for granting another faculty member access to a portfolio."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faculty_portfolio.constants import SharePermission
from faculty_portfolio.data.db import Base

if TYPE_CHECKING:
    from faculty_portfolio.data.models.faculty import Faculty
    from faculty_portfolio.data.models.portfolio import Portfolio


class PortfolioShare(Base):
    """VIEW or EDIT grant on a portfolio for one recipient."""

    __tablename__ = "portfolio_shares"
    __table_args__ = (
        UniqueConstraint("portfolio_id", "shared_with_id", name="uq_share_portfolio_recipient"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    portfolio_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False
    )
    shared_with_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("faculty.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission: Mapped[SharePermission] = mapped_column(
        Enum(SharePermission, native_enum=False, length=10), nullable=False
    )
    shared_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    portfolio: Mapped[Portfolio] = relationship("Portfolio", back_populates="shares")
    shared_with: Mapped[Faculty] = relationship("Faculty")
