from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/turns", methods=["GET"], endpoint="api_turns")
    def api_turns():
        return jsonify([t.to_dict() for t in container.turns_repo.list_all()])

    @app.route("/api/schedules", methods=["GET"], endpoint="api_schedules")
    def api_schedules():
        employee_id = request.args.get("employee_id")
        if employee_id:
            rows = container.schedules_repo.list_for_employee(employee_id)
        else:
            rows = container.schedules_repo.list_all()
        return jsonify([s.to_dict() for s in rows])

    @app.route("/api/state", methods=["GET"], endpoint="api_state")
    def api_state():
        # Whole persisted document, for backups and external exporters.
        return jsonify(container.store.load())
