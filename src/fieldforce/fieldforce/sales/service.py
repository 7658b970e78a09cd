from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..common.datetime_utils import month_bounds, month_key, shift_month
from ..core.constants import DEFAULT_REPORT_MONTHS, DEFAULT_SALES_TARGET
from ..core.enums import RecordStatus
from ..records.model import SalesOrder
from ..records.repository import RecordRepository
from ..settings.repository import SettingsRepository
from .model import SalesSummary

logger = logging.getLogger(__name__)

PERCENT = Decimal("0.1")


def order_amount(order: SalesOrder) -> Decimal:
    """totalAmount, else unitPrice x quantity, else amount, else 0."""
    if order.total_amount is not None:
        return order.total_amount
    if order.unit_price is not None and order.quantity is not None:
        return order.unit_price * order.quantity
    if order.amount is not None:
        return order.amount
    return Decimal("0")


def achievement(achieved: Decimal, target: Decimal) -> Optional[Decimal]:
    if target <= 0:
        return None
    return (achieved / target * 100).quantize(PERCENT, rounding=ROUND_HALF_UP)


class SalesTargetService:
    def __init__(
        self,
        records: RecordRepository,
        settings: SettingsRepository,
        *,
        fallback_target: Decimal = Decimal(DEFAULT_SALES_TARGET),
    ):
        self._records = records
        self._settings = settings
        self._fallback_target = Decimal(fallback_target)

    def resolve_target(self, *, user_id: str, year: int, month: int) -> Decimal:
        targets = self._settings.get_monthly_target(user_id)
        explicit = targets.targets.get(month_key(year, month))
        if explicit is not None:
            return explicit
        if targets.default_target is not None:
            return targets.default_target
        return self._fallback_target

    def achieved_sales(self, *, user_id: str, year: int, month: int) -> Decimal:
        start, end = month_bounds(year, month)
        total = Decimal("0")
        for order in self._records.orders_for_user(user_id=user_id, status=RecordStatus.APPROVED):
            if order.created_at is None:
                logger.debug("Order %s has no createdAt; not counted", order.id)
                continue
            if start <= order.created_at.replace(tzinfo=None) < end:
                total += order_amount(order)
        return total

    def month_summary(self, *, user_id: str, year: int, month: int) -> SalesSummary:
        target = self.resolve_target(user_id=user_id, year=year, month=month)
        achieved = self.achieved_sales(user_id=user_id, year=year, month=month)
        return SalesSummary(
            year=year,
            month=month,
            target=target,
            achieved=achieved,
            achievement=achievement(achieved, target),
        )

    def history(self, *, user_id: str, year: int, month: int, months: int = DEFAULT_REPORT_MONTHS) -> list[SalesSummary]:
        """Per-month summaries ending at year/month, oldest first; each month
        resolves its own target."""
        out = []
        for offset in range(months - 1, -1, -1):
            y, m = shift_month(year, month, -offset)
            out.append(self.month_summary(user_id=user_id, year=y, month=m))
        return out
