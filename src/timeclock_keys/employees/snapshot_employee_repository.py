from __future__ import annotations

from typing import Optional, Sequence

from ..store.repository import StateStore
from .model import Assignment, Employee, Position
from .repository import EmployeeRepository


class SnapshotEmployeeRepository(EmployeeRepository):
    def __init__(self, store: StateStore):
        self._store = store

    def list_all(self) -> Sequence[Employee]:
        return [Employee.from_dict(r) for r in self._store.load()["employees"]]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        for r in self._store.load()["employees"]:
            if str(r.get("id")) == str(employee_id):
                return Employee.from_dict(r)
        return None

    def get_assignment(self, employee_id: str) -> Optional[Assignment]:
        for r in self._store.load()["assignments"]:
            if str(r.get("employeeId")) == str(employee_id):
                return Assignment.from_dict(r)
        return None

    def get_position(self, position_id: str) -> Optional[Position]:
        for r in self._store.load()["positions"]:
            if str(r.get("id")) == str(position_id):
                return Position.from_dict(r)
        return None
