"""ORM model for faculty members (the application's users)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faculty_portfolio.constants import FacultyRole
from faculty_portfolio.data.db import Base

if TYPE_CHECKING:
    from faculty_portfolio.data.models.department import Department
    from faculty_portfolio.data.models.system_credentials import SystemCredentials


class Faculty(Base):
    """Faculty member with a role and an optional department.

    Attributes:
        id: Auto-incrementing primary key.
        first_name: Given name.
        middle_name: Optional middle name.
        last_name: Family name.
        suffix: Optional suffix (e.g. ``Jr.``).
        email: Unique contact email, also accepted as a login principal.
        tel_no: Optional telephone number.
        address: Optional postal address.
        role: FACULTY, DEPT_HEAD or DEAN.
        dept_code: Department membership (nullable).
        created_at: UTC timestamp of creation.
        updated_at: UTC timestamp of the last update.
    """

    __tablename__ = "faculty"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    suffix: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    tel_no: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[FacultyRole] = mapped_column(
        Enum(FacultyRole, native_enum=False, length=20), nullable=False
    )
    dept_code: Mapped[str | None] = mapped_column(
        String(10), ForeignKey("departments.dept_code"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    department: Mapped[Department | None] = relationship(
        "Department", back_populates="members", foreign_keys=[dept_code]
    )
    credentials: Mapped[SystemCredentials | None] = relationship(
        "SystemCredentials",
        back_populates="faculty",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
