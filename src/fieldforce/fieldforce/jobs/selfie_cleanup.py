from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_SELFIE_RETENTION_DAYS
from ..core.enums import RecordKind
from ..records.repository import RecordRepository
from ..store.repository import AssetStore

logger = logging.getLogger(__name__)


class SelfieCleanupJob:
    """Drops selfie assets of visit reports older than the retention window."""

    def __init__(self, records: RecordRepository, assets: AssetStore, *, retention_days: int = DEFAULT_SELFIE_RETENTION_DAYS):
        self._records = records
        self._assets = assets
        self._retention = timedelta(days=retention_days)

    def run(self, now: Optional[datetime] = None) -> int:
        cutoff = (now or now_local()) - self._retention
        reports = self._records.visit_reports_with_selfie_before(cutoff.isoformat())

        processed = 0
        for report in reports:
            try:
                self._assets.delete_asset(report.selfie_ref)
            except Exception as e:
                # Storage failures must not block clearing the ref; the asset is orphaned at worst.
                logger.warning("Could not delete selfie of report %s: %s", report.id, e)
            self._records.update_document(
                RecordKind.VISIT_REPORT,
                report.id,
                {"selfieRef": None, "selfieDeletedAt": now_local().isoformat()},
            )
            processed += 1

        logger.info("Selfie cleanup before %s: %d report(s) processed", cutoff.date(), processed)
        return processed
