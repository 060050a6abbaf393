"""Cospend data models."""

from .bill import Bill, NewBill, Ower
from .project import (
    Category,
    Currency,
    Member,
    PaymentMode,
    Project,
    ProjectSummary,
    UserInfo,
)

__all__ = [
    "Bill",
    "Category",
    "Currency",
    "Member",
    "NewBill",
    "Ower",
    "PaymentMode",
    "Project",
    "ProjectSummary",
    "UserInfo",
]
