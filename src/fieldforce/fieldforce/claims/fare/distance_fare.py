from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ...common.validators import to_decimal
from ...core.exceptions import ValidationError
from .base import FareCalculator

CENTS = Decimal("0.01")


def calculate_fare(distance_km: Any, fare_per_distance: Any) -> Decimal:
    """distance x rate, rounded half-up to 2 decimal places."""
    distance = to_decimal(distance_km, "Distance")
    rate = to_decimal(fare_per_distance, "Fare rate")
    if distance < 0 or rate < 0:
        raise ValidationError("Distance and fare rate must not be negative")
    return (distance * rate).quantize(CENTS, rounding=ROUND_HALF_UP)


class DistanceFareCalculator(FareCalculator):
    """Standard rule: fare = distance_km x fare_per_distance."""

    def fare(self, distance_km: Decimal, fare_per_distance: Decimal) -> Decimal:
        return calculate_fare(distance_km, fare_per_distance)
