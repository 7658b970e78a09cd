"""Daily job: remove selfies of visit reports past the retention window.

Run from cron, e.g. ``0 0 * * * python scripts/cleanup_selfies.py``.
"""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from fieldforce.config import get_settings_module
from fieldforce.container import build_container, build_store


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        store=build_store(backend=getattr(settings, "STORE_BACKEND", "mysql"), db_config=settings.DB_CONFIG),
        asset_root=settings.ASSET_ROOT,
        selfie_retention_days=int(getattr(settings, "SELFIE_RETENTION_DAYS", 3)),
    )
    processed = container.selfie_cleanup_job.run()
    print(f"OK: {processed} selfie(s) cleaned up")


if __name__ == "__main__":
    main()
