from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import VISIBILITY_BUFFER_MINUTES
from ..turns.model import Turn
from ..turns.repository import TurnRepository
from .evaluator import is_active
from .model import Schedule
from .repository import ScheduleRepository


class ScheduleService:
    """Answers which schedule and turn apply to an employee right now."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        turns: TurnRepository,
        *,
        buffer_minutes: int = VISIBILITY_BUFFER_MINUTES,
    ):
        self._schedules = schedules
        self._turns = turns
        self._buffer_minutes = int(buffer_minutes)

    def _first_active(self, schedules: Sequence[Schedule], now: datetime) -> Optional[tuple[Schedule, Optional[Turn]]]:
        for sc in schedules:
            turn = self._turns.get_by_id(sc.turn_id) if sc.turn_id else None
            if is_active(sc, turn, now, buffer_minutes=self._buffer_minutes):
                return sc, turn
        return None

    def active_schedule_for(self, employee_id: str, *, now: datetime | None = None) -> Optional[Schedule]:
        now = now or now_local()
        hit = self._first_active(self._schedules.list_for_employee(employee_id), now)
        return hit[0] if hit else None

    def active_turn_for(self, employee_id: str, *, now: datetime | None = None) -> Optional[Turn]:
        now = now or now_local()
        hit = self._first_active(self._schedules.list_for_employee(employee_id), now)
        return hit[1] if hit else None

    def active_employee_ids(self, *, now: datetime | None = None) -> list[str]:
        """Employees on duty: at least one schedule in force at `now`."""

        now = now or now_local()
        out: list[str] = []
        for sc in self._schedules.list_all():
            if sc.employee_id in out:
                continue
            turn = self._turns.get_by_id(sc.turn_id) if sc.turn_id else None
            if is_active(sc, turn, now, buffer_minutes=self._buffer_minutes):
                out.append(sc.employee_id)
        return out
