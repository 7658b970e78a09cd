from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import report_date_key
from ..core.constants import LEAVE_EXPENSE_TYPE
from ..core.enums import RecordKind, RecordStatus
from ..store.repository import DocumentStore
from .model import ExpenseClaim, LeaveRequest, SalesOrder, VisitReport


def _statuses(statuses: Iterable[RecordStatus]) -> list[str]:
    return [s.value for s in statuses]


class RecordRepository:
    """Typed access to the four record kinds over the document store."""

    def __init__(self, store: DocumentStore):
        self._store = store

    # Generic access used by the approval workflow
    def get_document(self, kind: RecordKind, record_id: str) -> Optional[dict]:
        return self._store.get(kind.value, str(record_id))

    def update_document(self, kind: RecordKind, record_id: str, patch: dict) -> None:
        self._store.update(kind.value, str(record_id), patch)

    def list_documents(self, kind: RecordKind, *, status: RecordStatus) -> list[dict]:
        return self._store.query(kind.value, [("status", "==", status.value)], order=("createdAt", True))

    # Visit reports
    def add_visit_report(self, report: VisitReport) -> str:
        return self._store.put(RecordKind.VISIT_REPORT.value, report.to_document())

    def visit_reports_for_day(self, *, user_id: str, day: date) -> list[VisitReport]:
        """Reports of one user and day, earliest submission first."""
        docs = self._store.query(
            RecordKind.VISIT_REPORT.value,
            [("userId", "==", str(user_id)), ("date", "==", day.isoformat())],
        )
        reports = [VisitReport.from_document(d) for d in docs]
        reports.sort(key=lambda r: (r.created_at is None, r.created_at.replace(tzinfo=None) if r.created_at else 0, r.id))
        return reports

    def visit_reports_with_selfie_before(self, cutoff_iso: str) -> list[VisitReport]:
        docs = self._store.query(
            RecordKind.VISIT_REPORT.value,
            [("createdAt", "<", cutoff_iso), ("selfieRef", "!=", None)],
        )
        return [VisitReport.from_document(d) for d in docs]

    # Expense claims
    def find_drafts(self, *, user_id: str, day: date) -> list[ExpenseClaim]:
        docs = self._store.query(
            RecordKind.EXPENSE_CLAIM.value,
            [
                ("userId", "==", str(user_id)),
                ("reportDateKey", "==", report_date_key(day)),
                ("status", "==", RecordStatus.DRAFT.value),
            ],
            order=("createdAt", False),
        )
        return [ExpenseClaim.from_document(d) for d in docs]

    def save_claim(self, claim: ExpenseClaim) -> str:
        if claim.id is None:
            return self._store.put(RecordKind.EXPENSE_CLAIM.value, claim.to_document())
        self._store.update(RecordKind.EXPENSE_CLAIM.value, claim.id, claim.to_document())
        return claim.id

    def delete_claim(self, claim_id: str) -> None:
        self._store.delete(RecordKind.EXPENSE_CLAIM.value, str(claim_id))

    def claims_for_user(self, *, user_id: str, statuses: Iterable[RecordStatus]) -> list[ExpenseClaim]:
        docs = self._store.query(
            RecordKind.EXPENSE_CLAIM.value,
            [("userId", "==", str(user_id)), ("status", "in", _statuses(statuses))],
        )
        return [ExpenseClaim.from_document(d) for d in docs]

    def leave_claims(self, *, user_id: str, day: date) -> list[ExpenseClaim]:
        docs = self._store.query(
            RecordKind.EXPENSE_CLAIM.value,
            [
                ("userId", "==", str(user_id)),
                ("reportDateKey", "==", report_date_key(day)),
                ("expenseType", "==", LEAVE_EXPENSE_TYPE),
            ],
        )
        return [ExpenseClaim.from_document(d) for d in docs]

    # Leave requests
    def add_leave(self, leave: LeaveRequest) -> str:
        return self._store.put(RecordKind.LEAVE_REQUEST.value, leave.to_document())

    def leaves_for_user(self, *, user_id: str, statuses: Iterable[RecordStatus]) -> list[LeaveRequest]:
        docs = self._store.query(
            RecordKind.LEAVE_REQUEST.value,
            [("userId", "==", str(user_id)), ("status", "in", _statuses(statuses))],
        )
        return [LeaveRequest.from_document(d) for d in docs]

    # Sales orders
    def add_order(self, order: SalesOrder) -> str:
        return self._store.put(RecordKind.SALES_ORDER.value, order.to_document())

    def orders_for_user(self, *, user_id: str, status: RecordStatus) -> list[SalesOrder]:
        docs = self._store.query(
            RecordKind.SALES_ORDER.value,
            [("userId", "==", str(user_id)), ("status", "==", status.value)],
        )
        return [SalesOrder.from_document(d) for d in docs]
