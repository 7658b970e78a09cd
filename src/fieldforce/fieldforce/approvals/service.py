from __future__ import annotations

import logging
from typing import Optional, Union

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import RecordKind, RecordStatus, Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError
from ..records.model import ExpenseClaim, LeaveRequest
from ..records.repository import RecordRepository
from ..store.repository import AssetStore
from .model import ApprovalItem, resolve_kind

logger = logging.getLogger(__name__)


class ApprovalService:
    """Status transitions of all four record kinds.

    draft -> pending (expense claims only), pending -> approved | rejected.
    Approved and rejected are terminal.
    """

    def __init__(self, records: RecordRepository, assets: Optional[AssetStore] = None):
        self._records = records
        self._assets = assets

    def _load(self, kind: RecordKind, record_id: str) -> dict:
        doc = self._records.get_document(kind, record_id)
        if doc is None:
            raise NotFoundError(f"Document not found: {kind.value}/{record_id}")
        return doc

    def submit(self, *, user_id: str, claim_id: str) -> None:
        doc = self._load(RecordKind.EXPENSE_CLAIM, claim_id)
        if str(doc.get("userId")) != str(user_id):
            raise AuthorizationError("Claims can only be submitted by their owner")
        if doc.get("status") != RecordStatus.DRAFT.value:
            raise InvalidTransitionError(f"Only drafts can be submitted (status={doc.get('status')})")

        self._records.update_document(
            RecordKind.EXPENSE_CLAIM,
            claim_id,
            {
                "status": RecordStatus.PENDING.value,
                "requiresApproval": True,
                "updatedAt": now_local().isoformat(),
            },
        )
        logger.info("Expense claim %s submitted by %s", claim_id, user_id)

    def approve(
        self,
        *,
        current_role: Role,
        record_id: str,
        type_label: Union[str, RecordKind],
        item_type: Optional[str] = None,
        approver: str = "admin",
    ) -> RecordKind:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can approve submissions")
        kind = resolve_kind(type_label, item_type)
        now = now_local().isoformat()

        doc = self._decide(
            kind,
            record_id,
            {
                "status": RecordStatus.APPROVED.value,
                "approvedBy": approver,
                "approvedAt": now,
                "updatedAt": now,
            },
        )
        logger.info("Approved %s/%s by %s", kind.value, record_id, approver)

        if kind == RecordKind.VISIT_REPORT:
            self._discard_selfie(record_id, doc.get("selfieRef") or doc.get("selfieUrl"))
        elif kind == RecordKind.LEAVE_REQUEST:
            self._propagate_leave_status(LeaveRequest.from_document(doc), RecordStatus.APPROVED)
        return kind

    def reject(
        self,
        *,
        current_role: Role,
        record_id: str,
        type_label: Union[str, RecordKind],
        reason: str,
        item_type: Optional[str] = None,
        rejected_by: str = "admin",
    ) -> RecordKind:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can reject submissions")
        reason = require_non_empty(reason, "Rejection reason")
        kind = resolve_kind(type_label, item_type)
        now = now_local().isoformat()

        doc = self._decide(
            kind,
            record_id,
            {
                "status": RecordStatus.REJECTED.value,
                "rejectedBy": rejected_by,
                "rejectedAt": now,
                "rejectionReason": reason,
                "updatedAt": now,
            },
        )
        logger.info("Rejected %s/%s by %s", kind.value, record_id, rejected_by)

        if kind == RecordKind.LEAVE_REQUEST:
            self._propagate_leave_status(LeaveRequest.from_document(doc), RecordStatus.REJECTED)
        return kind

    def list_pending(self) -> list[ApprovalItem]:
        items: list[ApprovalItem] = []
        for kind in RecordKind:
            for doc in self._records.list_documents(kind, status=RecordStatus.PENDING):
                items.append(ApprovalItem.from_document(kind, doc))
        items.sort(key=lambda i: i.created_at or "", reverse=True)
        return items

    def _decide(self, kind: RecordKind, record_id: str, patch: dict) -> dict:
        doc = self._load(kind, record_id)
        if doc.get("status") != RecordStatus.PENDING.value:
            raise InvalidTransitionError(
                f"{kind.value}/{record_id} is {doc.get('status')}, only pending items can be decided"
            )
        self._records.update_document(kind, record_id, patch)
        doc.update(patch)
        return doc

    def _discard_selfie(self, record_id: str, selfie_ref: Optional[str]) -> None:
        if not selfie_ref or self._assets is None:
            return
        try:
            self._assets.delete_asset(selfie_ref)
        except Exception as e:
            # Cleanup is advisory; the approval has already been written.
            logger.warning("Could not delete selfie of report %s: %s", record_id, e)

    def _propagate_leave_status(self, leave: LeaveRequest, status: RecordStatus) -> None:
        # Written after the leave itself; no transaction spans the two.
        if leave.start_date != leave.end_date:
            return
        claims = self._records.leave_claims(user_id=leave.user_id, day=leave.start_date)
        if not claims:
            logger.debug("Leave %s has no linked expense claim", leave.id)
        for claim in claims:
            if claim.status.is_terminal:
                continue
            self._apply_claim_status(claim, status)

    def _apply_claim_status(self, claim: ExpenseClaim, status: RecordStatus) -> None:
        self._records.update_document(
            RecordKind.EXPENSE_CLAIM,
            claim.id,
            {"status": status.value, "updatedAt": now_local().isoformat()},
        )
        logger.info("Leave status %s propagated to expense claim %s", status.value, claim.id)
