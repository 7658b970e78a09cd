from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..payroll.model import MonthlyTotals
from ..sales.model import SalesSummary


@dataclass(frozen=True)
class MonthReportRow:
    totals: MonthlyTotals
    sales: SalesSummary

    @property
    def label(self) -> str:
        return date(self.totals.year, self.totals.month, 1).strftime("%b %Y")

    def to_dict(self) -> dict:
        row = {**self.totals.to_dict(), **self.sales.to_dict()}
        row["month"] = self.label
        del row["year"]
        return row
