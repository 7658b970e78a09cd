"""Seed the reference data an empty installation needs: the fare rate and
the distances of every headquarters' STP destinations."""

from __future__ import annotations

import importlib
import os

from dotenv import load_dotenv

from fieldforce.config import get_settings_module
from fieldforce.container import build_container, build_store
from fieldforce.core.enums import Role

SEED_FARE_PER_KM = os.getenv("SEED_FARE_PER_KM", "10")

# Road distance (km) from the headquarters; admins refine these afterwards.
SEED_DISTANCES = {
    "VIDISHA": 40,
    "SEHORE": 38,
    "ASHTA": 80,
    "ITARSI": 95,
    "NARMADAPURAM": 75,
    "DEWAS": 35,
    "MHOW": 23,
    "MORENA": 40,
    "DABRA": 42,
    "KATNI": 95,
    "BHEDAGHAT": 20,
}


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    store = build_store(backend=getattr(settings, "STORE_BACKEND", "mysql"), db_config=settings.DB_CONFIG)
    config = build_container(store=store).config_service

    config.set_fare_rate(current_role=Role.ADMIN, rate=SEED_FARE_PER_KM)
    for name, km in SEED_DISTANCES.items():
        config.upsert_location(current_role=Role.ADMIN, name=name, distance_km=km)

    print(f"OK: Seeded fare rate {SEED_FARE_PER_KM}/km and {len(SEED_DISTANCES)} locations")


if __name__ == "__main__":
    main()
