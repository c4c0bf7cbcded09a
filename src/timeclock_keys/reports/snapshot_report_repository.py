from __future__ import annotations

import dataclasses
import uuid
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from ..store.repository import StateStore
from .model import Report
from .repository import ReportRepository


class SnapshotReportRepository(ReportRepository):
    def __init__(self, store: StateStore):
        self._store = store

    def list_all(self) -> Sequence[Report]:
        return [Report.from_dict(r) for r in self._store.load()["reports"]]

    def get_by_id(self, report_id: str) -> Optional[Report]:
        for r in self._store.load()["reports"]:
            if str(r.get("id")) == str(report_id):
                return Report.from_dict(r)
        return None

    def get_for_employee(self, employee_id: str) -> Optional[Report]:
        for r in self._store.load()["reports"]:
            if str(r.get("employeeId")) == str(employee_id):
                return Report.from_dict(r)
        return None

    def replace_for_employee(self, report: Report) -> Report:
        stored = dataclasses.replace(report, report_id=uuid.uuid4().hex[:12])

        # Delete and insert within one snapshot so readers never see zero or two.
        state = self._store.load()
        state["reports"] = [r for r in state["reports"] if str(r.get("employeeId")) != report.employee_id]
        state["reports"].append(stored.to_dict())
        self._store.save(state)
        return stored

    def update_notes(self, report_id: str, notes: Optional[str]) -> Report:
        state = self._store.load()
        for r in state["reports"]:
            if str(r.get("id")) == str(report_id):
                r["notes"] = notes
                self._store.save(state)
                return Report.from_dict(r)
        raise NotFoundError(f"report {report_id} not found")

    def clear(self) -> None:
        state = self._store.load()
        state["reports"] = []
        self._store.save(state)
