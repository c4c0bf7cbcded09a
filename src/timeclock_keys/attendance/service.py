from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import as_local_naive, now_local, parse_iso_datetime
from ..common.validators import require_keys, require_non_empty
from ..core.constants import (
    ABSENT_LABEL,
    BREAK_DURATION_HINTS,
    BREAK_LABELS,
    LATE_LABEL,
    SHIFT_IN_LABEL,
    VISIBILITY_BUFFER_MINUTES,
)
from ..core.enums import AttendanceStatus, MarkType
from ..core.exceptions import InvariantViolation, NotFoundError, ValidationError
from ..marks.model import Mark
from ..marks.repository import MarkRepository
from ..reports.consolidator import ReportConsolidator
from ..schedules.evaluator import shift_start_for
from ..schedules.service import ScheduleService
from ..turns.model import Turn
from .factory import AttendanceStrategyFactory
from .model import MarkResult

logger = logging.getLogger(__name__)


def session_marks(
    history: Iterable[Mark],
    turn: Optional[Turn],
    now: datetime,
    *,
    buffer_minutes: int = VISIBILITY_BUFFER_MINUTES,
) -> list[Mark]:
    """Marks belonging to the current working day.

    That is the calendar day of `now`, extended back to the visibility window of
    the turn occurrence `now` falls in (overnight turns started yesterday).
    """

    cutoff = datetime.combine(now.date(), datetime.min.time())
    start = shift_start_for(turn, now)
    if start is not None:
        cutoff = min(cutoff, start - timedelta(minutes=buffer_minutes))
    return [m for m in history if m.created_at >= cutoff]


def _latest_open(history: Iterable[Mark], mark_type: MarkType, break_type: Optional[str] = None) -> Optional[Mark]:
    open_marks = [
        m
        for m in history
        if m.type == mark_type and m.is_open and (break_type is None or m.break_type == break_type)
    ]
    return max(open_marks, key=lambda m: m.created_at) if open_marks else None


class AttendanceService:
    """Per-employee attendance state machine.

    Status is never stored; it is derived from the mark history and `now` on
    every call. All commands run under one re-entrant lock so each invariant
    check sees a freshly loaded snapshot.
    """

    def __init__(
        self,
        marks: MarkRepository,
        schedules: ScheduleService,
        consolidator: ReportConsolidator,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        buffer_minutes: int = VISIBILITY_BUFFER_MINUTES,
    ):
        self._marks = marks
        self._schedules = schedules
        self._consolidator = consolidator
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._buffer_minutes = int(buffer_minutes)
        self.lock = threading.RLock()

    # -- queries -----------------------------------------------------------

    def get_marks(self, employee_id: Optional[str] = None) -> Sequence[Mark]:
        if employee_id:
            return self._marks.list_for_employee(employee_id)
        return self._marks.list_all()

    def open_marks(self, employee_id: Optional[str] = None) -> list[Mark]:
        return [m for m in self.get_marks(employee_id) if m.is_open]

    def open_marks_count(self, *, now: datetime | None = None) -> int:
        """Open marks of employees currently on duty."""

        on_duty = set(self._schedules.active_employee_ids(now=now or now_local()))
        return sum(1 for m in self._marks.list_all() if m.is_open and m.employee_id in on_duty)

    def session_marks(self, employee_id: str, *, now: datetime | None = None) -> list[Mark]:
        now = now or now_local()
        turn = self._schedules.active_turn_for(employee_id, now=now)
        return session_marks(self._marks.list_for_employee(employee_id), turn, now, buffer_minutes=self._buffer_minutes)

    def status_of(self, employee_id: str, *, now: datetime | None = None) -> AttendanceStatus:
        now = now or now_local()
        history = self._marks.list_for_employee(employee_id)
        if _latest_open(history, MarkType.SHIFT_IN):
            return AttendanceStatus.ON_SHIFT

        turn = self._schedules.active_turn_for(employee_id, now=now)
        session = session_marks(history, turn, now, buffer_minutes=self._buffer_minutes)
        if any(m.type == MarkType.SHIFT_IN for m in session):
            return AttendanceStatus.CLOSED
        if any(m.type == MarkType.ABSENT for m in session):
            return AttendanceStatus.ABSENT

        shift_start = shift_start_for(turn, now)
        strategy = self._factory.for_status(now=now, shift_start=shift_start)
        return strategy.decide(now=now, shift_start=shift_start).status

    # -- commands ----------------------------------------------------------

    def mark_shift_in(self, employee_id: str, *, now: datetime | None = None) -> MarkResult:
        now = now or now_local()
        with self.lock:
            status = self.status_of(employee_id, now=now)
            if status in (AttendanceStatus.ON_SHIFT, AttendanceStatus.CLOSED, AttendanceStatus.ABSENT):
                return self._reject(employee_id, MarkType.SHIFT_IN, f"employee is {status.value}")

            turn = self._schedules.active_turn_for(employee_id, now=now)
            mark = Mark(
                mark_id="",
                employee_id=str(employee_id),
                type=MarkType.SHIFT_IN,
                label=SHIFT_IN_LABEL,
                created_at=now,
                turn_id=turn.turn_id if turn else None,
            )
            return self._append(mark)

    def mark_shift_out(self, employee_id: str, *, now: datetime | None = None) -> MarkResult:
        now = now or now_local()
        with self.lock:
            shift_in = _latest_open(self._marks.list_for_employee(employee_id), MarkType.SHIFT_IN)
            if not shift_in:
                return self._reject(employee_id, MarkType.SHIFT_OUT, "no open shift_in")
            return self._close(shift_in, closed_at=now, now=now)

    def toggle_break(self, employee_id: str, break_type: str, *, now: datetime | None = None) -> MarkResult:
        now = now or now_local()
        break_type = require_non_empty(break_type, "break_type")
        with self.lock:
            current = _latest_open(self._marks.list_for_employee(employee_id), MarkType.BREAK_START, break_type)
            if current:
                return self._close(current, closed_at=now, now=now)

            meta: dict[str, Any] = {"breakType": break_type}
            if break_type in BREAK_DURATION_HINTS:
                meta["duration"] = BREAK_DURATION_HINTS[break_type]
            turn = self._schedules.active_turn_for(employee_id, now=now)
            mark = Mark(
                mark_id="",
                employee_id=str(employee_id),
                type=MarkType.BREAK_START,
                label=BREAK_LABELS.get(break_type, break_type),
                created_at=now,
                turn_id=turn.turn_id if turn else None,
                meta=meta,
            )
            return self._append(mark)

    def record_generic_mark(self, employee_id: str, label: str, *, now: datetime | None = None) -> MarkResult:
        now = now or now_local()
        label = require_non_empty(label, "label")
        with self.lock:
            turn = self._schedules.active_turn_for(employee_id, now=now)
            mark = Mark(
                mark_id="",
                employee_id=str(employee_id),
                type=MarkType.GENERIC,
                label=label,
                created_at=now,
                turn_id=turn.turn_id if turn else None,
            )
            return self._append(mark)

    def tag(self, employee_id: str, mark_type: MarkType, *, now: datetime | None = None) -> MarkResult:
        """Record an already-closed late/absent tag; absences also refresh the report."""

        if mark_type not in (MarkType.LATE, MarkType.ABSENT):
            raise ValidationError(f"cannot tag {mark_type.value}")

        now = now or now_local()
        with self.lock:
            turn = self._schedules.active_turn_for(employee_id, now=now)
            mark = Mark(
                mark_id="",
                employee_id=str(employee_id),
                type=mark_type,
                label=LATE_LABEL if mark_type == MarkType.LATE else ABSENT_LABEL,
                created_at=now,
                turn_id=turn.turn_id if turn else None,
                closed_at=now,
            )
            result = self._append(mark)
            if result.applied and mark_type == MarkType.ABSENT:
                return self._consolidate(result.mark, now=now)
            return result

    def close_mark(self, mark_id: str, *, now: datetime | None = None) -> MarkResult:
        now = now or now_local()
        with self.lock:
            mark = self._marks.get_by_id(mark_id)
            if not mark:
                return MarkResult.rejected(f"mark {mark_id} not found")
            return self._close(mark, closed_at=now, now=now)

    def add_mark(
        self,
        employee_id: str,
        *,
        mark_type: MarkType = MarkType.GENERIC,
        label: str = "",
        turn_id: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
        now: datetime | None = None,
    ) -> MarkResult:
        """Raw append used by collaborators; routes typed marks through their commands."""

        now = now or now_local()
        if mark_type == MarkType.SHIFT_IN:
            return self.mark_shift_in(employee_id, now=now)
        if mark_type == MarkType.SHIFT_OUT:
            return self.mark_shift_out(employee_id, now=now)
        if mark_type == MarkType.BREAK_START:
            break_type = (meta or {}).get("breakType") or label
            return self.toggle_break(employee_id, break_type, now=now)

        with self.lock:
            if not turn_id:
                turn = self._schedules.active_turn_for(employee_id, now=now)
                turn_id = turn.turn_id if turn else None
            mark = Mark(
                mark_id="",
                employee_id=str(employee_id),
                type=mark_type,
                label=require_non_empty(label, "label"),
                created_at=now,
                turn_id=turn_id,
                meta=dict(meta or {}),
            )
            return self._append(mark)

    def update_mark(self, mark_id: str, patch: dict, *, now: datetime | None = None) -> MarkResult:
        """Patch a mark. Only closedAt and, for breaks, meta may change."""

        patch = require_keys(patch, {"closedAt", "meta"}, "mark")
        now = now or now_local()
        with self.lock:
            mark = self._marks.get_by_id(mark_id)
            if not mark:
                raise NotFoundError(f"mark {mark_id} not found")

            meta = patch.get("meta")
            if meta is not None and mark.type != MarkType.BREAK_START:
                raise ValidationError("only break marks carry meta")

            if patch.get("closedAt"):
                closed_at = patch["closedAt"]
                if isinstance(closed_at, str):
                    closed_at = parse_iso_datetime(closed_at)
                elif isinstance(closed_at, datetime):
                    closed_at = as_local_naive(closed_at)
                else:
                    raise ValidationError("closedAt must be an ISO datetime")
                return self._close(mark, closed_at=closed_at, now=now, meta=meta)

            if meta is not None:
                return MarkResult(mark=self._marks.update_meta(mark.mark_id, meta))
            return MarkResult(mark=mark)

    # -- internals ---------------------------------------------------------

    def _reject(self, employee_id: str, mark_type: MarkType, reason: str) -> MarkResult:
        logger.info(
            "transition rejected: %s",
            reason,
            extra={"employee_id": employee_id, "mark_type": mark_type.value},
        )
        return MarkResult.rejected(reason)

    def _append(self, mark: Mark) -> MarkResult:
        try:
            stored = self._marks.add(mark)
        except InvariantViolation as exc:
            return self._reject(mark.employee_id, mark.type, str(exc))

        logger.info(
            "mark recorded",
            extra={"employee_id": stored.employee_id, "mark_id": stored.mark_id, "mark_type": stored.type.value},
        )
        return MarkResult(mark=stored)

    def _close(self, mark: Mark, *, closed_at: datetime, now: datetime, meta: Optional[dict] = None) -> MarkResult:
        try:
            closed = self._marks.close(mark.mark_id, closed_at=closed_at, meta=meta)
        except (InvariantViolation, NotFoundError) as exc:
            return self._reject(mark.employee_id, mark.type, str(exc))

        logger.info(
            "mark closed",
            extra={"employee_id": closed.employee_id, "mark_id": closed.mark_id, "mark_type": closed.type.value},
        )
        if closed.type in (MarkType.SHIFT_IN, MarkType.ABSENT, MarkType.LATE):
            return self._consolidate(closed, now=now)
        return MarkResult(mark=closed)

    def _consolidate(self, mark: Mark, *, now: datetime) -> MarkResult:
        # The mark is already committed; a failed report only leaves it stale.
        try:
            if mark.type == MarkType.SHIFT_IN:
                report = self._consolidator.consolidate_shift(mark, now=now)
            else:
                report = self._consolidator.consolidate_snapshot(mark.employee_id, now=now)
        except Exception as exc:
            logger.exception(
                "report consolidation failed; mark kept",
                extra={"employee_id": mark.employee_id, "mark_id": mark.mark_id, "mark_type": mark.type.value},
            )
            return MarkResult(mark=mark, report_error=str(exc) or exc.__class__.__name__)
        return MarkResult(mark=mark, report=report)
