from __future__ import annotations

from typing import Optional

from .model import EmployeeProfile
from .repository import EmployeeRepository


class EmployeeDirectory:
    """Resolves the name/position/code snapshot shown on reports."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def profile(self, employee_id: str) -> Optional[EmployeeProfile]:
        emp = self._employees.get_by_id(employee_id)
        if not emp:
            return None

        assignment = self._employees.get_assignment(emp.employee_id)
        position = self._employees.get_position(assignment.position_id) if assignment and assignment.position_id else None
        return EmployeeProfile(
            employee_id=emp.employee_id,
            name=emp.name,
            position=position.name if position else None,
            code=assignment.code if assignment else None,
        )

    def employee_ids(self) -> list[str]:
        return [e.employee_id for e in self._employees.list_all()]
