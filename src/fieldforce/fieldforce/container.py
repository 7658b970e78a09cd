from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .approvals.service import ApprovalService
from .claims.service import DailyClaimService
from .core.constants import DEFAULT_SALES_TARGET, DEFAULT_SELFIE_RETENTION_DAYS
from .core.exceptions import ValidationError
from .jobs.selfie_cleanup import SelfieCleanupJob
from .payroll.service import MonthlyCompensationService
from .records.repository import RecordRepository
from .records.service import SubmissionService
from .reports.service import ReportService
from .sales.service import SalesTargetService
from .settings.repository import SettingsRepository
from .settings.service import ConfigurationService
from .store.asset_store import LocalAssetStore
from .store.connection import DBConfig, DatabaseConnection
from .store.memory_store import InMemoryDocumentStore
from .store.mysql_store import MySQLDocumentStore
from .store.repository import AssetStore, DocumentStore


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    assets: Optional[AssetStore]

    records_repo: RecordRepository
    settings_repo: SettingsRepository

    config_service: ConfigurationService
    submission_service: SubmissionService
    approval_service: ApprovalService
    claim_service: DailyClaimService
    compensation_service: MonthlyCompensationService
    sales_service: SalesTargetService
    report_service: ReportService
    selfie_cleanup_job: Optional[SelfieCleanupJob]


def build_store(*, backend: str, db_config: Optional[dict] = None) -> DocumentStore:
    backend = (backend or "").strip().lower()
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "mysql":
        if db_config is None:
            raise ValidationError("DB_CONFIG is required for the mysql store backend")
        return MySQLDocumentStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    raise ValidationError(f"Unknown store backend: {backend!r}")


def build_container(
    *,
    store: DocumentStore,
    assets: Optional[AssetStore] = None,
    asset_root: Optional[str] = None,
    default_sales_target: int = DEFAULT_SALES_TARGET,
    selfie_retention_days: int = DEFAULT_SELFIE_RETENTION_DAYS,
) -> Container:
    if assets is None and asset_root:
        assets = LocalAssetStore(asset_root)

    records_repo = RecordRepository(store)
    settings_repo = SettingsRepository(store)

    config_service = ConfigurationService(settings_repo)
    submission_service = SubmissionService(records_repo)
    approval_service = ApprovalService(records_repo, assets)
    claim_service = DailyClaimService(records_repo, settings_repo, config_service, approval_service)
    compensation_service = MonthlyCompensationService(records_repo, settings_repo)
    sales_service = SalesTargetService(records_repo, settings_repo, fallback_target=Decimal(default_sales_target))
    report_service = ReportService(compensation_service, sales_service)
    selfie_cleanup_job = SelfieCleanupJob(records_repo, assets, retention_days=selfie_retention_days) if assets else None

    return Container(
        store=store,
        assets=assets,
        records_repo=records_repo,
        settings_repo=settings_repo,
        config_service=config_service,
        submission_service=submission_service,
        approval_service=approval_service,
        claim_service=claim_service,
        compensation_service=compensation_service,
        sales_service=sales_service,
        report_service=report_service,
        selfie_cleanup_job=selfie_cleanup_job,
    )
