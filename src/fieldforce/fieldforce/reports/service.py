from __future__ import annotations

from ..core.constants import DEFAULT_REPORT_MONTHS
from ..payroll.service import MonthlyCompensationService
from ..sales.service import SalesTargetService
from .model import MonthReportRow


class ReportService:
    def __init__(self, compensation: MonthlyCompensationService, sales: SalesTargetService):
        self._compensation = compensation
        self._sales = sales

    def six_month_report(self, *, user_id: str, year: int, month: int) -> list[MonthReportRow]:
        """Trailing months ending at year/month, oldest first."""
        totals = self._compensation.series(user_id=user_id, year=year, month=month, months=DEFAULT_REPORT_MONTHS)
        sales = self._sales.history(user_id=user_id, year=year, month=month, months=DEFAULT_REPORT_MONTHS)
        return [MonthReportRow(totals=t, sales=s) for t, s in zip(totals, sales)]
