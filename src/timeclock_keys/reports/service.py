from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_keys
from ..core.exceptions import NotFoundError
from .model import Report
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def get_reports(self, *, employee_id: Optional[str] = None, on_date: Optional[date] = None) -> Sequence[Report]:
        out = []
        for r in self._reports.list_all():
            if employee_id and r.employee_id != str(employee_id):
                continue
            if on_date and r.timestamp.date() != on_date:
                continue
            out.append(r)
        out.sort(key=lambda r: r.timestamp, reverse=True)
        return out

    def get_report(self, report_id: str) -> Report:
        report = self._reports.get_by_id(report_id)
        if not report:
            raise NotFoundError(f"report {report_id} not found")
        return report

    def update_report(self, report_id: str, patch: dict) -> Report:
        """Manual annotation; only free-text notes may change."""

        patch = require_keys(patch, {"notes"}, "report")
        notes = patch.get("notes")
        if notes is not None:
            notes = str(notes).strip() or None
        return self._reports.update_notes(report_id, notes)

    def clear_reports(self) -> None:
        self._reports.clear()
        logger.info("reports cleared")
