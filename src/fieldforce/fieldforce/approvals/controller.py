from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.session_auth import admin_required, current_role
from ..common.validators import require_non_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.approval_service

    def _approver() -> str:
        return str(session.get("name") or session.get("user_id"))

    @app.route("/approvals/pending", methods=["GET"], endpoint="pending_approvals")
    @admin_required
    def pending_approvals():
        items = service.list_pending()
        return jsonify(
            [
                {
                    "kind": i.kind.value,
                    "id": i.id,
                    "userId": i.user_id,
                    "type": i.label,
                    "createdAt": i.created_at,
                    "record": i.record,
                }
                for i in items
            ]
        )

    @app.route("/approvals/approve", methods=["POST"], endpoint="approve_item")
    @admin_required
    def approve_item():
        data = request.get_json(silent=True) or {}
        kind = service.approve(
            current_role=current_role(),
            record_id=require_non_empty(data.get("id"), "Record id"),
            type_label=data.get("type"),
            item_type=data.get("itemType"),
            approver=_approver(),
        )
        return jsonify({"id": data["id"], "kind": kind.value, "status": "approved"})

    @app.route("/approvals/reject", methods=["POST"], endpoint="reject_item")
    @admin_required
    def reject_item():
        data = request.get_json(silent=True) or {}
        kind = service.reject(
            current_role=current_role(),
            record_id=require_non_empty(data.get("id"), "Record id"),
            type_label=data.get("type"),
            item_type=data.get("itemType"),
            reason=data.get("reason", ""),
            rejected_by=_approver(),
        )
        return jsonify({"id": data["id"], "kind": kind.value, "status": "rejected"})
