from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso
from ..core.enums import MarkType
from ..core.exceptions import ValidationError
from ..container import Container
from .model import MarkResult


def _result_response(result: MarkResult, *, employee_status: str | None = None, created: bool = False):
    if not result.applied:
        body = {"error": result.reason or "transition rejected"}
        if employee_status:
            body["status"] = employee_status
        return jsonify(body), 409

    body = {
        "mark": result.mark.to_dict(),
        "report": result.report.to_dict() if result.report else None,
        "reportStale": result.report_stale,
    }
    if result.report_error:
        body["reportError"] = result.report_error
    return jsonify(body), 201 if created else 200


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    def _status(employee_id: str) -> str:
        return attendance.status_of(employee_id).value

    @app.route("/api/marks", methods=["GET"], endpoint="api_marks")
    def api_marks():
        employee_id = request.args.get("employee_id") or None
        only_open = request.args.get("open") in {"1", "true"}
        marks = attendance.open_marks(employee_id) if only_open else attendance.get_marks(employee_id)
        return jsonify([m.to_dict() for m in marks])

    @app.route("/api/marks", methods=["POST"], endpoint="api_marks_add")
    def api_marks_add():
        payload = request.get_json(silent=True) or {}
        employee_id = payload.get("employeeId")
        if not employee_id:
            raise ValidationError("employeeId is required")
        try:
            mark_type = MarkType(payload.get("type") or MarkType.GENERIC.value)
        except ValueError:
            raise ValidationError(f"unknown mark type {payload.get('type')!r}") from None

        result = attendance.add_mark(
            str(employee_id),
            mark_type=mark_type,
            label=payload.get("label") or payload.get("clave") or "",
            turn_id=payload.get("turnId"),
            meta=payload.get("meta"),
        )
        return _result_response(result, employee_status=_status(str(employee_id)), created=True)

    @app.route("/api/marks/<mark_id>/close", methods=["POST"], endpoint="api_marks_close")
    def api_marks_close(mark_id: str):
        return _result_response(attendance.close_mark(mark_id))

    @app.route("/api/marks/<mark_id>", methods=["PATCH"], endpoint="api_marks_update")
    def api_marks_update(mark_id: str):
        return _result_response(attendance.update_mark(mark_id, request.get_json(silent=True) or {}))

    @app.route("/api/employees/<employee_id>/shift-in", methods=["POST"], endpoint="api_shift_in")
    def api_shift_in(employee_id: str):
        result = attendance.mark_shift_in(employee_id)
        return _result_response(result, employee_status=_status(employee_id), created=True)

    @app.route("/api/employees/<employee_id>/shift-out", methods=["POST"], endpoint="api_shift_out")
    def api_shift_out(employee_id: str):
        result = attendance.mark_shift_out(employee_id)
        return _result_response(result, employee_status=_status(employee_id))

    @app.route("/api/employees/<employee_id>/breaks/<break_type>", methods=["POST"], endpoint="api_toggle_break")
    def api_toggle_break(employee_id: str, break_type: str):
        result = attendance.toggle_break(employee_id, break_type)
        return _result_response(result, employee_status=_status(employee_id))

    @app.route("/api/employees/<employee_id>/marks", methods=["POST"], endpoint="api_generic_mark")
    def api_generic_mark(employee_id: str):
        payload = request.get_json(silent=True) or {}
        result = attendance.record_generic_mark(employee_id, payload.get("label") or "")
        return _result_response(result, employee_status=_status(employee_id), created=True)

    @app.route("/api/employees/<employee_id>/status", methods=["GET"], endpoint="api_employee_status")
    def api_employee_status(employee_id: str):
        status = attendance.status_of(employee_id)
        open_marks = attendance.open_marks(employee_id)
        return jsonify(
            {
                "employeeId": employee_id,
                "status": status.value,
                "openMarks": [m.to_dict() for m in open_marks],
            }
        )

    @app.route("/api/on-duty", methods=["GET"], endpoint="api_on_duty")
    def api_on_duty():
        rows = []
        for employee_id in container.schedule_service.active_employee_ids():
            profile = container.directory.profile(employee_id)
            turn = container.schedule_service.active_turn_for(employee_id)
            shift_in = next((m for m in attendance.open_marks(employee_id) if m.type == MarkType.SHIFT_IN), None)
            rows.append(
                {
                    "employee": profile.to_dict() if profile else {"id": employee_id},
                    "turn": turn.snapshot() if turn else None,
                    "status": attendance.status_of(employee_id).value,
                    "onShiftSince": to_iso(shift_in.created_at) if shift_in else None,
                }
            )
        return jsonify({"employees": rows, "openMarks": attendance.open_marks_count()})
