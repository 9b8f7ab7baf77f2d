"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- Department: Academic departments keyed by code
- Faculty: Users with a role and optional department
- SystemCredentials: Login username and password hash for a faculty member
- Portfolio: Named document collections (personal, department, college)
- PortfolioItem: Files and folders forming a parent-pointer tree
- PortfolioShare: VIEW/EDIT grants on a portfolio
- ApprovalRequest: Review records for submitted items

All models inherit from the shared Base declarative class defined in data.db.
"""

from faculty_portfolio.data.db import Base
from faculty_portfolio.data.models.approval_request import ApprovalRequest
from faculty_portfolio.data.models.department import Department
from faculty_portfolio.data.models.faculty import Faculty
from faculty_portfolio.data.models.portfolio import Portfolio
from faculty_portfolio.data.models.portfolio_item import PortfolioItem
from faculty_portfolio.data.models.portfolio_share import PortfolioShare
from faculty_portfolio.data.models.system_credentials import SystemCredentials

__all__ = [
    "ApprovalRequest",
    "Base",
    "Department",
    "Faculty",
    "Portfolio",
    "PortfolioItem",
    "PortfolioShare",
    "SystemCredentials",
]
