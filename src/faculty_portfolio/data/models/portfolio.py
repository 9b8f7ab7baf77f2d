"""ORM model representing a named portfolio of documents.

A portfolio is owned by one faculty member. DEPARTMENT and COLLEGE
portfolios also carry the owner's department at creation time.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faculty_portfolio.constants import PortfolioType
from faculty_portfolio.data.db import Base

if TYPE_CHECKING:
    from faculty_portfolio.data.models.department import Department
    from faculty_portfolio.data.models.faculty import Faculty
    from faculty_portfolio.data.models.portfolio_item import PortfolioItem
    from faculty_portfolio.data.models.portfolio_share import PortfolioShare


class Portfolio(Base):
    """Named collection of portfolio items."""

    __tablename__ = "portfolios"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_portfolio_owner_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    type: Mapped[PortfolioType] = mapped_column(
        Enum(PortfolioType, native_enum=False, length=20), nullable=False
    )
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("faculty.id", ondelete="CASCADE"), nullable=False, index=True
    )
    dept_code: Mapped[str | None] = mapped_column(
        String(10), ForeignKey("departments.dept_code"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[Faculty] = relationship("Faculty")
    department: Mapped[Department | None] = relationship("Department")
    items: Mapped[list[PortfolioItem]] = relationship(
        "PortfolioItem",
        back_populates="portfolio",
        cascade="all, delete-orphan",
    )
    shares: Mapped[list[PortfolioShare]] = relationship(
        "PortfolioShare",
        back_populates="portfolio",
        cascade="all, delete-orphan",
    )
