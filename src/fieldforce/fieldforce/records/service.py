from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_amount, require_non_empty, require_positive_int
from ..core.constants import LEAVE_TYPES
from ..core.enums import HospitalType, RecordStatus, TravelType
from ..core.exceptions import ValidationError
from .model import LeaveRequest, SalesOrder, VisitReport
from .repository import RecordRepository

logger = logging.getLogger(__name__)


def _enum_value(enum_cls, value: Any, field_name: str):
    raw = str(value or "").strip().lower()
    for member in enum_cls:
        if member.value.lower() == raw:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"{field_name} must be one of: {allowed}")


class SubmissionService:
    """Worker-side creation of records; everything starts out PENDING."""

    def __init__(self, records: RecordRepository):
        self._records = records

    def submit_visit_report(
        self,
        *,
        user_id: str,
        visit_date: date,
        travel_type: str,
        hospital_type: str,
        location: str,
        selfie_ref: Optional[str] = None,
        report_type: str = "Daily Call Report",
    ) -> str:
        report = VisitReport(
            id="",
            user_id=require_non_empty(user_id, "User"),
            date=visit_date,
            travel_type=_enum_value(TravelType, travel_type, "Travel type"),
            hospital_type=_enum_value(HospitalType, hospital_type, "Hospital type"),
            location=require_non_empty(location, "Location"),
            status=RecordStatus.PENDING,
            selfie_ref=(selfie_ref or "").strip() or None,
            report_type=require_non_empty(report_type, "Report type"),
            created_at=now_local(),
        )
        report_id = self._records.add_visit_report(report)
        logger.info("Visit report %s submitted by %s for %s", report_id, report.user_id, visit_date)
        return report_id

    def submit_leave(self, *, user_id: str, leave_type: str, start_date: date, end_date: date, reason: str) -> str:
        leave_type = require_non_empty(leave_type, "Leave type")
        if leave_type not in LEAVE_TYPES:
            raise ValidationError(f"Leave type must be one of: {', '.join(LEAVE_TYPES)}")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        leave = LeaveRequest(
            id="",
            user_id=require_non_empty(user_id, "User"),
            type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=require_non_empty(reason, "Reason"),
            status=RecordStatus.PENDING,
            created_at=now_local(),
        )
        return self._records.add_leave(leave)

    def place_order(
        self,
        *,
        user_id: str,
        product_id: str,
        quantity: Any,
        unit_price: Any = None,
        total_amount: Any = None,
    ) -> str:
        qty = require_positive_int(quantity, "Quantity")
        price = require_amount(unit_price, "Unit price") if unit_price not in (None, "") else None
        total = require_amount(total_amount, "Total amount") if total_amount not in (None, "") else None
        if price is None and total is None:
            raise ValidationError("Either unit price or total amount is required")
        if total is None:
            total = price * qty

        order = SalesOrder(
            id="",
            user_id=require_non_empty(user_id, "User"),
            product_id=require_non_empty(product_id, "Product"),
            quantity=qty,
            status=RecordStatus.PENDING,
            created_at=now_local(),
            unit_price=price,
            total_amount=total,
        )
        return self._records.add_order(order)
