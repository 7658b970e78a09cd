from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Optional

from ...records.model import ExpenseClaim, LeaveRequest
from ..model import MonthlyTotals


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for monthly compensation)."""

    @abstractmethod
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
        raise NotImplementedError
