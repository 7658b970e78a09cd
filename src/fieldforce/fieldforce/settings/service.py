from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from ..common.datetime_utils import month_key
from ..common.validators import require_amount, require_non_empty, require_positive_int
from ..core.constants import HEADQUARTERS_STPS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import ConfigSnapshot, LocationDistance, MonthlyTarget, location_key
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Only administrators can change settings")


class ConfigurationService:
    """Admin-maintained settings and the snapshots read from them."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def snapshot(self, user_id: str) -> ConfigSnapshot:
        profile = self._settings.get_profile(user_id)
        return ConfigSnapshot(
            fare_per_distance=self._settings.get_fare_rate().fare_per_distance,
            locations={location_key(loc.name): loc for loc in self._settings.list_locations()},
            overrides=dict(profile.location_overrides),
        )

    def set_fare_rate(self, *, current_role: Role, rate: Any) -> Decimal:
        _require_admin(current_role)
        value = require_amount(rate, "Fare rate")
        self._settings.set_fare_rate(value)
        logger.info("Fare rate set to %s per km", value)
        return value

    def upsert_location(self, *, current_role: Role, name: str, distance_km: Any) -> LocationDistance:
        _require_admin(current_role)
        location = LocationDistance(
            name=location_key(require_non_empty(name, "Location")),
            distance_km=require_amount(distance_km, "Distance"),
        )
        self._settings.upsert_location(location)
        return location

    def remove_location(self, *, current_role: Role, name: str) -> None:
        _require_admin(current_role)
        if not self._settings.delete_location(require_non_empty(name, "Location")):
            raise NotFoundError(f"Location not found: {name}")

    def set_daily_salary(self, *, current_role: Role, user_id: str, amount: Any) -> None:
        _require_admin(current_role)
        self._settings.update_profile(user_id, {"dailySalary": str(require_amount(amount, "Daily salary"))})

    def set_allowance(self, *, current_role: Role, user_id: str, amount: Any) -> None:
        _require_admin(current_role)
        self._settings.update_profile(user_id, {"allowanceAmount": str(require_amount(amount, "Allowance"))})

    def set_headquarters(self, *, current_role: Role, user_id: str, headquarters: str) -> None:
        _require_admin(current_role)
        hq = location_key(headquarters)
        if hq not in HEADQUARTERS_STPS:
            raise ValidationError(f"Unknown headquarters: {headquarters}")
        self._settings.update_profile(user_id, {"headquarters": hq})

    def add_location_override(self, *, current_role: Role, user_id: str, name: str, distance_km: Any) -> LocationDistance:
        _require_admin(current_role)
        location = LocationDistance(
            name=location_key(require_non_empty(name, "Location")),
            distance_km=require_amount(distance_km, "Distance"),
        )
        profile = self._settings.get_profile(user_id)
        if profile.headquarters and location.name not in HEADQUARTERS_STPS.get(profile.headquarters, ()):
            raise ValidationError(f"{location.name} is not a destination of headquarters {profile.headquarters}")
        self._settings.put_location_override(user_id, location)
        logger.info("Location override %s=%s km set for user %s", location.name, location.distance_km, user_id)
        return location

    def remove_location_override(self, *, current_role: Role, user_id: str, name: str) -> None:
        _require_admin(current_role)
        if not self._settings.delete_location_override(user_id, require_non_empty(name, "Location")):
            raise NotFoundError(f"No location override {name} for user {user_id}")

    def set_monthly_target(self, *, current_role: Role, user_id: str, year: int, month: int, amount: Any) -> MonthlyTarget:
        _require_admin(current_role)
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        value = Decimal(require_positive_int(amount, "Target"))
        current = self._settings.get_monthly_target(user_id)
        is_new = not self._settings.has_monthly_target(user_id)
        target = MonthlyTarget(
            user_id=str(user_id),
            targets={**current.targets, month_key(int(year), int(month)): value},
            default_target=value if is_new else current.default_target,
        )
        self._settings.put_monthly_target(target)
        return target
