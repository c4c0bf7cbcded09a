from __future__ import annotations

from typing import Sequence

from ..store.repository import StateStore
from .model import Schedule
from .repository import ScheduleRepository


class SnapshotScheduleRepository(ScheduleRepository):
    def __init__(self, store: StateStore):
        self._store = store

    def list_all(self) -> Sequence[Schedule]:
        return [Schedule.from_dict(r) for r in self._store.load()["schedules"]]

    def list_for_employee(self, employee_id: str) -> Sequence[Schedule]:
        return [
            Schedule.from_dict(r)
            for r in self._store.load()["schedules"]
            if str(r.get("employeeId")) == str(employee_id)
        ]
