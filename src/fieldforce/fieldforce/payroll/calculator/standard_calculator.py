from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ...common.datetime_utils import iter_dates, parse_report_date_key
from ...core.enums import RecordStatus
from ...records.model import ExpenseClaim, LeaveRequest
from ..model import MonthlyTotals
from .base import CompensationCalculator

COUNTED_STATUSES = frozenset({RecordStatus.PENDING, RecordStatus.APPROVED})


def leave_dates(leaves: Iterable[LeaveRequest], *, year: int, month: int) -> set[date]:
    """Dates of the month covered by a pending or approved leave."""
    first = date(year, month, 1)
    out: set[date] = set()
    for leave in leaves:
        if leave.status not in COUNTED_STATUSES:
            continue
        for d in iter_dates(leave.start_date, leave.end_date):
            if (d.year, d.month) == (first.year, first.month):
                out.add(d)
    return out


class StandardCompensationCalculator(CompensationCalculator):
    """Standard rule: one daily salary per distinct worked claim date, plus
    every claim's allowance, fare and other expenses."""

    def monthly_totals(
        self,
        *,
        year: int,
        month: int,
        claims: Iterable[ExpenseClaim],
        leaves: Iterable[LeaveRequest],
        daily_salary: Decimal,
        preview: Optional[ExpenseClaim] = None,
    ) -> MonthlyTotals:
        on_leave = leave_dates(leaves, year=year, month=month)

        worked: set[date] = set()
        allowance = Decimal("0")
        fare = Decimal("0")
        other = Decimal("0")

        def in_month(claim: ExpenseClaim) -> Optional[date]:
            day = parse_report_date_key(claim.report_date_key, year=year)
            if day is None or (day.year, day.month) != (year, month):
                return None
            return day

        for claim in claims:
            if claim.status not in COUNTED_STATUSES:
                continue
            day = in_month(claim)
            if day is None:
                continue
            allowance += claim.allowance_amount
            fare += claim.fare_amount
            other += claim.other_expense_total
            if day not in on_leave:
                worked.add(day)

        # An unsubmitted draft shown alongside the month; ignored on leave days.
        if preview is not None:
            day = in_month(preview)
            if day is not None and day not in on_leave:
                allowance += preview.allowance_amount
                fare += preview.fare_amount
                other += preview.other_expense_total
                worked.add(day)

        working_days = len(worked)
        return MonthlyTotals(
            year=year,
            month=month,
            working_days=working_days,
            total_base_salary=daily_salary * working_days,
            total_allowance=allowance,
            total_fare=fare,
            total_other_expense=other,
        )
