from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional

from ..common.datetime_utils import as_date, as_datetime
from ..common.validators import lenient_decimal
from ..core.constants import DEFAULT_EXPENSE_TYPE
from ..core.enums import HospitalType, RecordStatus, TravelType


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _hospital_type(doc: Mapping) -> Optional[HospitalType]:
    raw = str(doc.get("hospitalType") or doc.get("hospital") or "").strip().lower()
    for member in HospitalType:
        if member.value.lower() == raw:
            return member
    return None


def _travel_type(raw) -> Optional[TravelType]:
    raw = str(raw or "").strip().upper()
    return TravelType(raw) if raw in TravelType.__members__ else None


def _count(raw) -> int:
    try:
        return int(str(raw).strip() or 0)
    except ValueError:
        return 0


@dataclass(frozen=True)
class VisitReport:
    """A worker's submitted visit (Daily Call Report)."""

    id: str
    user_id: str
    date: date
    travel_type: Optional[TravelType]
    hospital_type: Optional[HospitalType]
    location: str
    status: RecordStatus
    selfie_ref: Optional[str] = None
    report_type: str = "Daily Call Report"
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping) -> "VisitReport":
        return cls(
            id=str(doc["id"]),
            user_id=str(doc["userId"]),
            date=as_date(doc["date"]),
            travel_type=_travel_type(doc.get("travelType")),
            hospital_type=_hospital_type(doc),
            location=str(doc.get("location") or ""),
            status=RecordStatus(doc.get("status", RecordStatus.PENDING.value)),
            selfie_ref=doc.get("selfieRef") or doc.get("selfieUrl") or None,
            report_type=str(doc.get("reportType") or "Daily Call Report"),
            created_at=as_datetime(doc.get("createdAt")),
        )

    def to_document(self) -> dict:
        return {
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "travelType": self.travel_type.value if self.travel_type else None,
            "hospitalType": self.hospital_type.value if self.hospital_type else None,
            "location": self.location,
            "status": self.status.value,
            "selfieRef": self.selfie_ref,
            "reportType": self.report_type,
            "itemType": "report",
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    user_id: str
    type: str
    start_date: date
    end_date: date
    reason: str
    status: RecordStatus
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping) -> "LeaveRequest":
        return cls(
            id=str(doc["id"]),
            user_id=str(doc["userId"]),
            type=str(doc.get("type") or ""),
            start_date=as_date(doc["startDate"]),
            end_date=as_date(doc["endDate"]),
            reason=str(doc.get("reason") or ""),
            status=RecordStatus(doc.get("status", RecordStatus.PENDING.value)),
            created_at=as_datetime(doc.get("createdAt")),
        )

    def to_document(self) -> dict:
        return {
            "userId": self.user_id,
            "type": self.type,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "itemType": "leave",
            "createdAt": _iso(self.created_at),
        }

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class OtherExpense:
    type: str
    date: str
    remark: str
    amount: Decimal

    @classmethod
    def from_document(cls, doc: Mapping) -> "OtherExpense":
        return cls(
            type=str(doc.get("type") or ""),
            date=str(doc.get("date") or ""),
            remark=str(doc.get("remark") or ""),
            amount=lenient_decimal(doc.get("amount")),
        )

    def to_document(self) -> dict:
        return {"type": self.type, "date": self.date, "remark": self.remark, "amount": _money(self.amount)}


@dataclass(frozen=True)
class ExpenseClaim:
    """One user's claim for one day.

    At most one DRAFT exists per (user_id, report_date_key); APPROVED and
    REJECTED claims are never written again.
    """

    id: Optional[str]
    user_id: str
    report_date_key: str
    expense_type: str = DEFAULT_EXPENSE_TYPE
    doctor_visits: int = 0
    chemist_visits: int = 0
    travel_type: Optional[TravelType] = None
    location: str = ""
    distance_km: Decimal = Decimal("0")
    fare_amount: Decimal = Decimal("0.00")
    allowance_amount: Decimal = Decimal("0.00")
    other_expenses: tuple[OtherExpense, ...] = field(default_factory=tuple)
    status: RecordStatus = RecordStatus.DRAFT
    requires_approval: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping) -> "ExpenseClaim":
        return cls(
            id=str(doc["id"]),
            user_id=str(doc["userId"]),
            report_date_key=str(doc.get("reportDateKey") or doc.get("reportDate") or ""),
            expense_type=str(doc.get("expenseType") or DEFAULT_EXPENSE_TYPE),
            doctor_visits=_count(doc.get("doctorVisits", 0)),
            chemist_visits=_count(doc.get("chemistVisits", 0)),
            travel_type=_travel_type(doc.get("travelType")),
            location=str(doc.get("location") or ""),
            distance_km=lenient_decimal(doc.get("distanceKm", doc.get("distance"))),
            fare_amount=lenient_decimal(doc.get("fareAmount", doc.get("fare"))),
            allowance_amount=lenient_decimal(doc.get("allowanceAmount")),
            other_expenses=tuple(OtherExpense.from_document(e) for e in (doc.get("otherExpenses") or [])),
            status=RecordStatus(doc.get("status", RecordStatus.DRAFT.value)),
            requires_approval=bool(doc.get("requiresApproval", False)),
            created_at=as_datetime(doc.get("createdAt")),
            updated_at=as_datetime(doc.get("updatedAt")),
        )

    def to_document(self) -> dict:
        return {
            "userId": self.user_id,
            "reportDateKey": self.report_date_key,
            "expenseType": self.expense_type,
            "doctorVisits": self.doctor_visits,
            "chemistVisits": self.chemist_visits,
            "travelType": self.travel_type.value if self.travel_type else None,
            "location": self.location,
            "distanceKm": str(self.distance_km),
            "fareAmount": _money(self.fare_amount),
            "allowanceAmount": _money(self.allowance_amount),
            "otherExpenses": [e.to_document() for e in self.other_expenses],
            "status": self.status.value,
            "requiresApproval": self.requires_approval,
            "itemType": "expense",
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    @property
    def other_expense_total(self) -> Decimal:
        return sum((e.amount for e in self.other_expenses), Decimal("0"))


@dataclass(frozen=True)
class SalesOrder:
    id: str
    user_id: str
    product_id: str
    quantity: Optional[int]
    status: RecordStatus
    created_at: Optional[datetime]
    unit_price: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    amount: Optional[Decimal] = None

    @classmethod
    def from_document(cls, doc: Mapping) -> "SalesOrder":
        def opt(key: str) -> Optional[Decimal]:
            value = doc.get(key)
            return None if value in (None, "") else lenient_decimal(value)

        quantity = doc.get("quantity")
        return cls(
            id=str(doc["id"]),
            user_id=str(doc["userId"]),
            product_id=str(doc.get("productId") or ""),
            quantity=None if quantity in (None, "") else _count(quantity),
            status=RecordStatus(doc.get("status", RecordStatus.PENDING.value)),
            created_at=as_datetime(doc.get("createdAt")),
            unit_price=opt("unitPrice"),
            total_amount=opt("totalAmount"),
            amount=opt("amount"),
        )

    def to_document(self) -> dict:
        doc = {
            "userId": self.user_id,
            "productId": self.product_id,
            "quantity": self.quantity,
            "status": self.status.value,
            "itemType": "order",
            "createdAt": _iso(self.created_at),
        }
        if self.unit_price is not None:
            doc["unitPrice"] = _money(self.unit_price)
        if self.total_amount is not None:
            doc["totalAmount"] = _money(self.total_amount)
        return doc
