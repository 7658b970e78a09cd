from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.session_auth import current_role, current_user_id, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .export import XLSX_MIMETYPE, export_six_month_report_xlsx


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _rows(user_id: str, year: int, month: int):
        if current_role() != Role.ADMIN and current_user_id() != user_id:
            raise AuthorizationError("Reports of other employees are admin only")
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        return service.six_month_report(user_id=user_id, year=year, month=month)

    @app.route("/reports/<user_id>/<int:year>/<int:month>", methods=["GET"], endpoint="six_month_report")
    @login_required
    def six_month_report(user_id: str, year: int, month: int):
        return jsonify([r.to_dict() for r in _rows(user_id, year, month)])

    @app.route("/reports/<user_id>/<int:year>/<int:month>/export", methods=["GET"], endpoint="export_report")
    @login_required
    def export_report(user_id: str, year: int, month: int):
        data = export_six_month_report_xlsx(_rows(user_id, year, month))
        return send_file(
            io.BytesIO(data),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"report_{user_id}_{year}_{month:02d}.xlsx",
        )
