from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import VISIBILITY_BUFFER_MINUTES
from ..core.enums import MarkType
from ..marks.model import Mark
from ..marks.repository import MarkRepository
from ..schedules.evaluator import shift_start_for
from ..schedules.service import ScheduleService
from .factory import AttendanceStrategyFactory
from .service import AttendanceService, session_marks

logger = logging.getLogger(__name__)


class AutoTagger:
    """Emits closed late/absent marks for scheduled employees who have not shifted in.

    Safe to run any number of times at the same instant: a tag is only created
    when the working day does not already carry one.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        marks: MarkRepository,
        schedules: ScheduleService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        buffer_minutes: int = VISIBILITY_BUFFER_MINUTES,
    ):
        self._attendance = attendance
        self._marks = marks
        self._schedules = schedules
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._buffer_minutes = int(buffer_minutes)

    def _candidates(self, now: datetime) -> list[str]:
        ids = list(self._schedules.active_employee_ids(now=now))
        for m in self._marks.list_all():
            if m.type == MarkType.SHIFT_IN and m.is_open and m.employee_id not in ids:
                ids.append(m.employee_id)
        return ids

    def _tag_employee(self, employee_id: str, now: datetime) -> Optional[Mark]:
        history = self._marks.list_for_employee(employee_id)
        if any(m.type == MarkType.SHIFT_IN and m.is_open for m in history):
            return None

        turn = self._schedules.active_turn_for(employee_id, now=now)
        session = session_marks(history, turn, now, buffer_minutes=self._buffer_minutes)
        if any(m.type in (MarkType.SHIFT_IN, MarkType.ABSENT) for m in session):
            return None

        shift_start = shift_start_for(turn, now)
        if shift_start is None:
            return None

        decision = self._factory.for_status(now=now, shift_start=shift_start).decide(now=now, shift_start=shift_start)
        if decision.tag == MarkType.LATE and any(m.type == MarkType.LATE for m in session):
            return None
        if decision.tag is None:
            return None

        result = self._attendance.tag(employee_id, decision.tag, now=now)
        if result.report_stale:
            logger.warning("absence tagged but report is stale", extra={"employee_id": employee_id})
        return result.mark

    def run_once(self, *, now: datetime | None = None) -> list[Mark]:
        now = now or now_local()
        created: list[Mark] = []
        with self._attendance.lock:
            for employee_id in self._candidates(now):
                try:
                    mark = self._tag_employee(employee_id, now)
                except Exception:
                    logger.exception("auto tag failed", extra={"employee_id": employee_id})
                    continue
                if mark:
                    created.append(mark)
        return created
