from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Report


class ReportRepository(Protocol):
    def list_all(self) -> Sequence[Report]:
        raise NotImplementedError

    def get_by_id(self, report_id: str) -> Optional[Report]:
        raise NotImplementedError

    def get_for_employee(self, employee_id: str) -> Optional[Report]:
        raise NotImplementedError

    def replace_for_employee(self, report: Report) -> Report:
        """Store `report` as the only report of its employee (upsert by employee_id).

        Returns the stored copy with a fresh id.
        """

        raise NotImplementedError

    def update_notes(self, report_id: str, notes: Optional[str]) -> Report:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError
