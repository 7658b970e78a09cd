from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import shift_month
from ..core.constants import DEFAULT_REPORT_MONTHS
from ..records.repository import RecordRepository
from ..settings.repository import SettingsRepository
from .calculator.base import CompensationCalculator
from .calculator.standard_calculator import COUNTED_STATUSES, StandardCompensationCalculator
from .model import MonthlyTotals


class MonthlyCompensationService:
    """Derived read model; totals are recomputed on every call and never stored."""

    def __init__(
        self,
        records: RecordRepository,
        settings: SettingsRepository,
        *,
        calculator: Optional[CompensationCalculator] = None,
    ):
        self._records = records
        self._settings = settings
        self._calculator = calculator or StandardCompensationCalculator()

    def monthly_totals(self, *, user_id: str, year: int, month: int, include_draft_for: Optional[date] = None) -> MonthlyTotals:
        return self.series(user_id=user_id, year=year, month=month, months=1, include_draft_for=include_draft_for)[0]

    def series(
        self,
        *,
        user_id: str,
        year: int,
        month: int,
        months: int = DEFAULT_REPORT_MONTHS,
        include_draft_for: Optional[date] = None,
    ) -> list[MonthlyTotals]:
        """Totals of ``months`` consecutive months ending at year/month, oldest first."""
        claims = self._records.claims_for_user(user_id=user_id, statuses=COUNTED_STATUSES)
        leaves = self._records.leaves_for_user(user_id=user_id, statuses=COUNTED_STATUSES)
        daily_salary = self._settings.get_profile(user_id).daily_salary

        preview = None
        if include_draft_for is not None:
            drafts = self._records.find_drafts(user_id=user_id, day=include_draft_for)
            preview = drafts[0] if drafts else None

        out = []
        for offset in range(months - 1, -1, -1):
            y, m = shift_month(year, month, -offset)
            out.append(
                self._calculator.monthly_totals(
                    year=y,
                    month=m,
                    claims=claims,
                    leaves=leaves,
                    daily_salary=daily_salary,
                    preview=preview,
                )
            )
        return out
