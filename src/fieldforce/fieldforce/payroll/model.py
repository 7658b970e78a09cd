from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MonthlyTotals:
    year: int
    month: int
    working_days: int
    total_base_salary: Decimal
    total_allowance: Decimal
    total_fare: Decimal
    total_other_expense: Decimal

    @property
    def grand_total(self) -> Decimal:
        return self.total_base_salary + self.total_allowance + self.total_fare + self.total_other_expense

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "workingDays": self.working_days,
            "totalBaseSalary": f"{self.total_base_salary:.2f}",
            "totalAllowance": f"{self.total_allowance:.2f}",
            "totalFare": f"{self.total_fare:.2f}",
            "totalOtherExpense": f"{self.total_other_expense:.2f}",
            "grandTotal": f"{self.grand_total:.2f}",
        }
