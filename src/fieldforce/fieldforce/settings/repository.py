from __future__ import annotations

from decimal import Decimal

from ..common.datetime_utils import now_local
from ..core.constants import FARE_SETTINGS_ID
from ..core.exceptions import NotFoundError
from ..store.repository import DocumentStore
from .model import EmployeeProfile, FareRateSetting, LocationDistance, MonthlyTarget, location_key

USERS = "users"
LOCATIONS = "locations"
SETTINGS = "settings"
MONTHLY_TARGETS = "monthlyTargets"


class SettingsRepository:
    """Admin-owned reference data kept in the document store."""

    def __init__(self, store: DocumentStore):
        self._store = store

    # Fare rate
    def get_fare_rate(self) -> FareRateSetting:
        return FareRateSetting.from_document(self._store.get(SETTINGS, FARE_SETTINGS_ID))

    def set_fare_rate(self, rate: Decimal) -> None:
        # Versionless: the previous value is overwritten.
        self._store.put(
            SETTINGS,
            {"farePerDistance": str(rate), "updatedAt": now_local().isoformat()},
            doc_id=FARE_SETTINGS_ID,
        )

    # Global location table
    def list_locations(self) -> list[LocationDistance]:
        return [LocationDistance.from_document(d) for d in self._store.query(LOCATIONS, order=("name", False))]

    def upsert_location(self, location: LocationDistance) -> None:
        self._store.put(LOCATIONS, location.to_document(), doc_id=location_key(location.name).lower())

    def delete_location(self, name: str) -> bool:
        doc_id = location_key(name).lower()
        if self._store.get(LOCATIONS, doc_id) is None:
            return False
        self._store.delete(LOCATIONS, doc_id)
        return True

    # Employee profile
    def get_profile(self, user_id: str) -> EmployeeProfile:
        return EmployeeProfile.from_document(user_id, self._store.get(USERS, str(user_id)))

    def update_profile(self, user_id: str, patch: dict) -> None:
        self._store.update(USERS, str(user_id), dict(patch, updatedAt=now_local().isoformat()))

    def put_location_override(self, user_id: str, location: LocationDistance) -> None:
        doc = self._require_user(user_id)
        overrides = dict(doc.get("locations") or {})
        overrides[location_key(location.name)] = location.to_document()
        self.update_profile(user_id, {"locations": overrides})

    def delete_location_override(self, user_id: str, name: str) -> bool:
        doc = self._require_user(user_id)
        overrides = dict(doc.get("locations") or {})
        key = location_key(name)
        # Entries written by older clients may be keyed by an arbitrary id.
        matching = [k for k, v in overrides.items() if k == key or location_key((v or {}).get("name", "")) == key]
        if not matching:
            return False
        for k in matching:
            del overrides[k]
        self.update_profile(user_id, {"locations": overrides})
        return True

    def _require_user(self, user_id: str) -> dict:
        doc = self._store.get(USERS, str(user_id))
        if doc is None:
            raise NotFoundError(f"Employee not found: {user_id}")
        return doc

    # Sales targets
    def get_monthly_target(self, user_id: str) -> MonthlyTarget:
        return MonthlyTarget.from_document(user_id, self._store.get(MONTHLY_TARGETS, str(user_id)))

    def has_monthly_target(self, user_id: str) -> bool:
        return self._store.get(MONTHLY_TARGETS, str(user_id)) is not None

    def put_monthly_target(self, target: MonthlyTarget) -> None:
        self._store.put(MONTHLY_TARGETS, target.to_document(), doc_id=target.user_id)
