from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from ..approvals.service import ApprovalService
from ..common.datetime_utils import now_local, parse_iso_date, report_date_key
from ..common.validators import CENTS, require_amount, require_non_empty
from ..core.constants import LEAVE_EXPENSE_TYPE, LEAVE_FROM_CLAIM_REASON, LEAVE_FROM_CLAIM_TYPE
from ..core.enums import HospitalType, RecordStatus
from ..core.exceptions import ValidationError
from ..records.model import ExpenseClaim, LeaveRequest, OtherExpense
from ..records.repository import RecordRepository
from ..settings.repository import SettingsRepository
from ..settings.service import ConfigurationService
from .fare.base import FareCalculator
from .fare.distance_fare import DistanceFareCalculator

logger = logging.getLogger(__name__)


class DailyClaimService:
    """Builds and maintains a user's expense claim draft for one day."""

    def __init__(
        self,
        records: RecordRepository,
        settings: SettingsRepository,
        config: ConfigurationService,
        approvals: ApprovalService,
        *,
        calculator: Optional[FareCalculator] = None,
    ):
        self._records = records
        self._settings = settings
        self._config = config
        self._approvals = approvals
        self._calculator = calculator or DistanceFareCalculator()

    def _current_draft(self, user_id: str, day: date) -> Optional[ExpenseClaim]:
        drafts = self._records.find_drafts(user_id=user_id, day=day)
        if not drafts:
            return None
        # Concurrent writers can leave duplicates behind; the earliest one wins.
        for extra in drafts[1:]:
            logger.warning("Removing duplicate draft %s for %s/%s", extra.id, user_id, report_date_key(day))
            self._records.delete_claim(extra.id)
        return drafts[0]

    def derive_daily_claim(self, *, user_id: str, day: date) -> ExpenseClaim:
        user_id = require_non_empty(user_id, "User")
        reports = self._records.visit_reports_for_day(user_id=user_id, day=day)
        snapshot = self._config.snapshot(user_id)
        profile = self._settings.get_profile(user_id)

        fields: dict[str, Any] = {
            "doctor_visits": sum(1 for r in reports if r.hospital_type == HospitalType.DOCTOR),
            "chemist_visits": sum(1 for r in reports if r.hospital_type == HospitalType.CHEMIST),
            "travel_type": None,
            "location": "",
            "distance_km": Decimal("0"),
            "fare_amount": Decimal("0.00"),
            "allowance_amount": profile.allowance_amount.quantize(CENTS, rounding=ROUND_HALF_UP),
        }
        if reports:
            first = reports[0]
            distance, fare = self._calculator.fare_for_location(first.location, snapshot)
            fields.update(
                travel_type=first.travel_type,
                location=first.location,
                distance_km=distance,
                fare_amount=fare,
            )
        logger.debug("Derived %s/%s from %d report(s): %s", user_id, day, len(reports), fields)

        now = now_local()
        existing = self._current_draft(user_id, day)
        if existing is not None:
            claim = replace(existing, updated_at=now, **fields)
        else:
            claim = ExpenseClaim(
                id=None,
                user_id=user_id,
                report_date_key=report_date_key(day),
                status=RecordStatus.DRAFT,
                created_at=now,
                updated_at=now,
                **fields,
            )
        claim_id = self._records.save_claim(claim)
        logger.info("Draft %s written for %s/%s", claim_id, user_id, claim.report_date_key)
        return replace(claim, id=claim_id)

    def add_other_expense(
        self,
        *,
        user_id: str,
        day: date,
        expense_type: str,
        expense_date: Optional[date] = None,
        remark: str = "",
        amount: Any,
    ) -> ExpenseClaim:
        entry = OtherExpense(
            type=require_non_empty(expense_type, "Expense type"),
            date=(expense_date or day).isoformat(),
            remark=(remark or "").strip(),
            amount=require_amount(amount, "Amount"),
        )
        claim = self._current_draft(user_id, day) or self.derive_daily_claim(user_id=user_id, day=day)
        claim = replace(claim, other_expenses=claim.other_expenses + (entry,), updated_at=now_local())
        self._records.save_claim(claim)
        return claim

    def clear_draft(self, *, user_id: str, day: date) -> bool:
        drafts = self._records.find_drafts(user_id=user_id, day=day)
        for draft in drafts:
            self._records.delete_claim(draft.id)
        return bool(drafts)

    def submit_claim(self, *, user_id: str, day: date) -> str:
        claim = self.derive_daily_claim(user_id=user_id, day=day)
        self._approvals.submit(user_id=user_id, claim_id=claim.id)
        return claim.id

    def mark_leave_day(self, *, user_id: str, day: date) -> tuple[str, str]:
        """Record the day as leave: a single-day leave request plus its
        zero-amount "Leave" claim. Returns (leave_id, claim_id)."""
        user_id = require_non_empty(user_id, "User")
        for claim in self._records.leave_claims(user_id=user_id, day=day):
            if claim.status != RecordStatus.REJECTED:
                raise ValidationError(f"{report_date_key(day)} is already marked as leave")

        now = now_local()
        leave_id = self._records.add_leave(
            LeaveRequest(
                id="",
                user_id=user_id,
                type=LEAVE_FROM_CLAIM_TYPE,
                start_date=day,
                end_date=day,
                reason=LEAVE_FROM_CLAIM_REASON,
                status=RecordStatus.PENDING,
                created_at=now,
            )
        )

        base = self._current_draft(user_id, day)
        claim = ExpenseClaim(
            id=base.id if base else None,
            user_id=user_id,
            report_date_key=report_date_key(day),
            expense_type=LEAVE_EXPENSE_TYPE,
            status=RecordStatus.PENDING,
            requires_approval=False,
            created_at=base.created_at if base else now,
            updated_at=now,
        )
        claim_id = self._records.save_claim(claim)
        logger.info("Leave day %s marked for %s (leave=%s, claim=%s)", claim.report_date_key, user_id, leave_id, claim_id)
        return leave_id, claim_id


def parse_claim_day(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}, expected YYYY-MM-DD")
