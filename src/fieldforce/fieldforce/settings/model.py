from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional

from ..common.validators import lenient_decimal

_MONTH_KEY = re.compile(r"^\d{4}_\d{1,2}$")


def location_key(name: str) -> str:
    """Location names are matched case-insensitively."""
    return (name or "").strip().upper()


@dataclass(frozen=True)
class LocationDistance:
    name: str
    distance_km: Decimal

    @classmethod
    def from_document(cls, doc: Mapping) -> "LocationDistance":
        distance = doc.get("distanceKm", doc.get("distance"))
        return cls(name=str(doc.get("name") or ""), distance_km=lenient_decimal(distance))

    def to_document(self) -> dict:
        return {"name": self.name, "distanceKm": str(self.distance_km)}


@dataclass(frozen=True)
class FareRateSetting:
    fare_per_distance: Decimal

    @classmethod
    def from_document(cls, doc: Optional[Mapping]) -> "FareRateSetting":
        if not doc:
            return cls(fare_per_distance=Decimal("0"))
        rate = doc.get("farePerDistance", doc.get("farePerKm"))
        return cls(fare_per_distance=lenient_decimal(rate))


@dataclass(frozen=True)
class EmployeeProfile:
    """Compensation-relevant part of a user document."""

    user_id: str
    daily_salary: Decimal = Decimal("0")
    allowance_amount: Decimal = Decimal("0")
    headquarters: Optional[str] = None
    location_overrides: Mapping[str, LocationDistance] = field(default_factory=dict)

    @classmethod
    def from_document(cls, user_id: str, doc: Optional[Mapping]) -> "EmployeeProfile":
        if not doc:
            return cls(user_id=str(user_id))
        overrides: dict[str, LocationDistance] = {}
        for entry in (doc.get("locations") or {}).values():
            loc = LocationDistance.from_document(entry)
            if loc.name:
                overrides[location_key(loc.name)] = loc
        return cls(
            user_id=str(user_id),
            daily_salary=lenient_decimal(doc.get("dailySalary")),
            allowance_amount=lenient_decimal(doc.get("allowanceAmount")),
            headquarters=doc.get("headquarters") or None,
            location_overrides=overrides,
        )


@dataclass(frozen=True)
class MonthlyTarget:
    user_id: str
    targets: Mapping[str, Decimal] = field(default_factory=dict)
    default_target: Optional[Decimal] = None

    @classmethod
    def from_document(cls, user_id: str, doc: Optional[Mapping]) -> "MonthlyTarget":
        if not doc:
            return cls(user_id=str(user_id))
        targets = {str(k): lenient_decimal(v) for k, v in (doc.get("targets") or {}).items()}
        # Older documents keep month keys at the top level.
        for k, v in doc.items():
            if _MONTH_KEY.match(str(k)):
                targets.setdefault(str(k), lenient_decimal(v))
        default = doc.get("defaultTarget", doc.get("target"))
        return cls(
            user_id=str(user_id),
            targets=targets,
            default_target=lenient_decimal(default) if default not in (None, "") else None,
        )

    def to_document(self) -> dict:
        doc: dict = {"userId": self.user_id, "targets": {k: str(v) for k, v in self.targets.items()}}
        if self.default_target is not None:
            doc["defaultTarget"] = str(self.default_target)
        return doc


@dataclass(frozen=True)
class ConfigSnapshot:
    """Configuration read once, at call time, for one employee.

    Fare computations only ever see a snapshot; a later change of the rate or
    of a distance needs a new snapshot to take effect.
    """

    fare_per_distance: Decimal
    locations: Mapping[str, LocationDistance] = field(default_factory=dict)
    overrides: Mapping[str, LocationDistance] = field(default_factory=dict)

    def distance_for(self, location: Optional[str]) -> Decimal:
        """Employee override first, then the global table, else 0."""
        key = location_key(location or "")
        if not key:
            return Decimal("0")
        if key in self.overrides:
            return self.overrides[key].distance_km
        if key in self.locations:
            return self.locations[key].distance_km
        return Decimal("0")
