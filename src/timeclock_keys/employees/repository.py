from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Assignment, Employee, Position


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_assignment(self, employee_id: str) -> Optional[Assignment]:
        raise NotImplementedError

    def get_position(self, position_id: str) -> Optional[Position]:
        raise NotImplementedError
