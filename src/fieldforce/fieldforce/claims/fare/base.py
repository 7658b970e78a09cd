from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...settings.model import ConfigSnapshot


class FareCalculator(ABC):
    """Calculator interface (Strategy Pattern for travel fares)."""

    @abstractmethod
    def fare(self, distance_km: Decimal, fare_per_distance: Decimal) -> Decimal:
        raise NotImplementedError

    def fare_for_location(self, location: str, snapshot: ConfigSnapshot) -> tuple[Decimal, Decimal]:
        """(distance_km, fare) of a location under one configuration snapshot."""
        distance = snapshot.distance_for(location)
        return distance, self.fare(distance, snapshot.fare_per_distance)
