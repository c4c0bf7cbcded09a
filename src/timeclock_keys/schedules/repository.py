from __future__ import annotations

from typing import Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def list_all(self) -> Sequence[Schedule]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[Schedule]:
        raise NotImplementedError
