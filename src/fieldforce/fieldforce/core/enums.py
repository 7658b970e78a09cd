from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the caller, used for authorization checks."""

    ADMIN = "admin"
    USER = "user"


class RecordStatus(str, Enum):
    """Lifecycle status shared by all submitted record kinds.

    DRAFT only ever applies to expense claims.
    """

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (RecordStatus.APPROVED, RecordStatus.REJECTED)


class RecordKind(str, Enum):
    """The four persisted record kinds; the value is the collection name."""

    VISIT_REPORT = "reports"
    LEAVE_REQUEST = "leaves"
    EXPENSE_CLAIM = "expenses"
    SALES_ORDER = "orders"


class TravelType(str, Enum):
    HQ = "HQ"
    INT = "INT"


class HospitalType(str, Enum):
    DOCTOR = "Doctor"
    CHEMIST = "Chemist"
    STOCKIEST = "Stockiest"
