from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.session_auth import current_user_id, login_required
from ..container import Container
from .service import parse_claim_day


def _claim_json(claim) -> dict:
    return {"id": claim.id, **claim.to_document()}


def register(app: Flask, container: Container) -> None:
    service = container.claim_service

    @app.route("/claims/<day>/derive", methods=["POST"], endpoint="derive_claim")
    @login_required
    def derive_claim(day: str):
        claim = service.derive_daily_claim(user_id=current_user_id(), day=parse_claim_day(day))
        return jsonify(_claim_json(claim))

    @app.route("/claims/<day>/other-expenses", methods=["POST"], endpoint="add_other_expense")
    @login_required
    def add_other_expense(day: str):
        data = request.get_json(silent=True) or {}
        expense_date = data.get("date")
        claim = service.add_other_expense(
            user_id=current_user_id(),
            day=parse_claim_day(day),
            expense_type=data.get("type", ""),
            expense_date=parse_claim_day(expense_date) if expense_date else None,
            remark=data.get("remark", ""),
            amount=data.get("amount"),
        )
        return jsonify(_claim_json(claim)), 201

    @app.route("/claims/<day>/draft", methods=["DELETE"], endpoint="clear_draft")
    @login_required
    def clear_draft(day: str):
        deleted = service.clear_draft(user_id=current_user_id(), day=parse_claim_day(day))
        return jsonify({"deleted": deleted})

    @app.route("/claims/<day>/submit", methods=["POST"], endpoint="submit_claim")
    @login_required
    def submit_claim(day: str):
        claim_id = service.submit_claim(user_id=current_user_id(), day=parse_claim_day(day))
        return jsonify({"id": claim_id, "status": "pending"})

    @app.route("/claims/<day>/leave", methods=["POST"], endpoint="mark_leave_day")
    @login_required
    def mark_leave_day(day: str):
        leave_id, claim_id = service.mark_leave_day(user_id=current_user_id(), day=parse_claim_day(day))
        return jsonify({"leaveId": leave_id, "claimId": claim_id}), 201
