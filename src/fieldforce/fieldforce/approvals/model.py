from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

from ..core.enums import RecordKind
from ..core.exceptions import UnsupportedRecordTypeError

# Every submission label the approval queue understands, lower-cased.
TYPE_LABELS: Mapping[str, RecordKind] = {
    "report": RecordKind.VISIT_REPORT,
    "daily call report": RecordKind.VISIT_REPORT,
    "weekly report": RecordKind.VISIT_REPORT,
    "monthly report": RecordKind.VISIT_REPORT,
    "expense": RecordKind.EXPENSE_CLAIM,
    "travel": RecordKind.EXPENSE_CLAIM,
    "food": RecordKind.EXPENSE_CLAIM,
    "accommodation": RecordKind.EXPENSE_CLAIM,
    "other": RecordKind.EXPENSE_CLAIM,
    "leave": RecordKind.LEAVE_REQUEST,
    "annual leave": RecordKind.LEAVE_REQUEST,
    "sick leave": RecordKind.LEAVE_REQUEST,
    "personal leave": RecordKind.LEAVE_REQUEST,
    "emergency leave": RecordKind.LEAVE_REQUEST,
    "unpaid leave": RecordKind.LEAVE_REQUEST,
    "order": RecordKind.SALES_ORDER,
    "h-order": RecordKind.SALES_ORDER,
}

# itemType values stamped on documents at creation time.
ITEM_TYPES: Mapping[str, RecordKind] = {
    "report": RecordKind.VISIT_REPORT,
    "expense": RecordKind.EXPENSE_CLAIM,
    "leave": RecordKind.LEAVE_REQUEST,
    "order": RecordKind.SALES_ORDER,
}


def resolve_kind(label: Union[str, RecordKind, None], item_type: Optional[str] = None) -> RecordKind:
    """Map a submitted item's type to its record kind.

    ``item_type`` wins over the human-readable label. Labels outside the
    table (tour plans, visual aids, utilities, ...) are rejected.
    """
    if isinstance(label, RecordKind):
        return label
    if item_type:
        kind = ITEM_TYPES.get(str(item_type).strip().lower())
        if kind is not None:
            return kind
    normalized = str(label or "").strip().lower()
    kind = TYPE_LABELS.get(normalized)
    if kind is None:
        raise UnsupportedRecordTypeError(f"No record kind for submission type: {label!r}")
    return kind


@dataclass(frozen=True)
class ApprovalItem:
    """Read-model row of the admin approval queue."""

    kind: RecordKind
    id: str
    user_id: str
    label: str
    created_at: Optional[str]
    record: Mapping

    @classmethod
    def from_document(cls, kind: RecordKind, doc: Mapping) -> "ApprovalItem":
        if kind == RecordKind.VISIT_REPORT:
            label = doc.get("reportType") or "Daily Call Report"
        elif kind == RecordKind.EXPENSE_CLAIM:
            label = doc.get("expenseType") or "Travel"
        elif kind == RecordKind.LEAVE_REQUEST:
            label = doc.get("type") or "Leave"
        else:
            label = "order"
        return cls(
            kind=kind,
            id=str(doc["id"]),
            user_id=str(doc.get("userId") or ""),
            label=str(label),
            created_at=doc.get("createdAt"),
            record=doc,
        )
