"""ORM model for academic departments."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faculty_portfolio.data.db import Base

if TYPE_CHECKING:
    from faculty_portfolio.data.models.faculty import Faculty


class Department(Base):
    """Academic department keyed by its short code (e.g. ``CS``).

    Attributes:
        dept_code: Primary key, up to 10 characters.
        dept_name: Human-readable department name.
        office_location: Optional office location.
        description: Optional free-text description.
        chairperson_id: Faculty member serving as chairperson, if assigned.
        created_at: UTC timestamp of creation.
    """

    __tablename__ = "departments"

    dept_code: Mapped[str] = mapped_column(String(10), primary_key=True)
    dept_name: Mapped[str] = mapped_column(String(100), nullable=False)
    office_location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    chairperson_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("faculty.id", ondelete="SET NULL", use_alter=True, name="fk_dept_chair"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    chairperson: Mapped[Faculty | None] = relationship(
        "Faculty", foreign_keys=[chairperson_id], post_update=True
    )
    members: Mapped[list[Faculty]] = relationship(
        "Faculty",
        back_populates="department",
        foreign_keys="Faculty.dept_code",
    )
