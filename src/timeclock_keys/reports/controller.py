from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/reports", methods=["GET"], endpoint="api_reports")
    def api_reports():
        on_date = None
        if request.args.get("date"):
            try:
                on_date = parse_iso_date(request.args["date"])
            except ValueError:
                raise ValidationError("date must be YYYY-MM-DD") from None

        rows = reports.get_reports(employee_id=request.args.get("employee_id") or None, on_date=on_date)
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/reports/<report_id>", methods=["GET"], endpoint="api_reports_get")
    def api_reports_get(report_id: str):
        return jsonify(reports.get_report(report_id).to_dict())

    @app.route("/api/reports/<report_id>", methods=["PATCH"], endpoint="api_reports_update")
    def api_reports_update(report_id: str):
        report = reports.update_report(report_id, request.get_json(silent=True) or {})
        return jsonify(report.to_dict())

    @app.route("/api/reports", methods=["DELETE"], endpoint="api_reports_clear")
    def api_reports_clear():
        reports.clear_reports()
        return "", 204
