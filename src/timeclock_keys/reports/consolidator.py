from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import minutes_between, now_local
from ..core.enums import MarkType, ReportType
from ..core.exceptions import ValidationError
from ..employees.service import EmployeeDirectory
from ..marks.model import Mark
from ..marks.repository import MarkRepository
from ..turns.repository import TurnRepository
from .model import BreakSummary, Report
from .repository import ReportRepository

logger = logging.getLogger(__name__)


def summarize_breaks(items: Iterable[Mark]) -> tuple[BreakSummary, ...]:
    return tuple(
        BreakSummary(
            mark_id=m.mark_id,
            break_type=m.break_type,
            start=m.created_at,
            end=m.closed_at,
            duration_min=minutes_between(m.created_at, m.closed_at) if m.closed_at else None,
        )
        for m in items
        if m.type == MarkType.BREAK_START
    )


class ReportConsolidator:
    """Builds the one report kept per employee and replaces the previous one."""

    def __init__(
        self,
        marks: MarkRepository,
        reports: ReportRepository,
        directory: EmployeeDirectory,
        turns: TurnRepository,
    ):
        self._marks = marks
        self._reports = reports
        self._directory = directory
        self._turns = turns

    def _turn_snapshot(self, turn_id: Optional[str]) -> Optional[dict]:
        turn = self._turns.get_by_id(turn_id) if turn_id else None
        return turn.snapshot() if turn else None

    def _employee_snapshot(self, employee_id: str) -> Optional[dict]:
        profile = self._directory.profile(employee_id)
        return profile.to_dict() if profile else None

    def consolidate_shift(self, shift_in: Mark, *, now: datetime | None = None) -> Report:
        if shift_in.type != MarkType.SHIFT_IN or shift_in.closed_at is None:
            raise ValidationError("only a closed shift_in can be consolidated")

        now = now or now_local()
        start, end = shift_in.created_at, shift_in.closed_at
        items = tuple(m for m in self._marks.list_for_employee(shift_in.employee_id) if start <= m.created_at <= end)

        report = Report(
            report_id="",
            type=ReportType.SHIFT_REPORT,
            employee_id=shift_in.employee_id,
            timestamp=now,
            employee=self._employee_snapshot(shift_in.employee_id),
            turn_id=shift_in.turn_id,
            turn=self._turn_snapshot(shift_in.turn_id),
            start=start,
            end=end,
            duration_min=minutes_between(start, end),
            items=items,
            breaks=summarize_breaks(items),
            mark_id=shift_in.mark_id,
        )
        stored = self._reports.replace_for_employee(report)
        logger.info(
            "report consolidated",
            extra={"employee_id": stored.employee_id, "report_type": stored.type.value, "duration_min": stored.duration_min},
        )
        return stored

    def consolidate_snapshot(self, employee_id: str, *, now: datetime | None = None) -> Report:
        now = now or now_local()
        items = tuple(self._marks.list_for_employee(employee_id))
        last_with_turn = next((m for m in reversed(items) if m.turn_id), None)
        turn_id = last_with_turn.turn_id if last_with_turn else None

        report = Report(
            report_id="",
            type=ReportType.ROW_SNAPSHOT,
            employee_id=str(employee_id),
            timestamp=now,
            employee=self._employee_snapshot(employee_id),
            turn_id=turn_id,
            turn=self._turn_snapshot(turn_id),
            items=items,
            breaks=summarize_breaks(items),
        )
        stored = self._reports.replace_for_employee(report)
        logger.info("report consolidated", extra={"employee_id": stored.employee_id, "report_type": stored.type.value})
        return stored
