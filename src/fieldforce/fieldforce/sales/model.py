from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class SalesSummary:
    year: int
    month: int
    target: Decimal
    achieved: Decimal
    achievement: Optional[Decimal]

    @property
    def achievement_label(self) -> str:
        return "N/A" if self.achievement is None else f"{self.achievement}%"

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "target": f"{self.target:.2f}",
            "achieved": f"{self.achieved:.2f}",
            "achievement": self.achievement_label,
        }
