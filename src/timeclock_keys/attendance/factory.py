from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import elapsed_minutes
from ..core.constants import ABSENT_THRESHOLD_MINUTES, LATE_THRESHOLD_MINUTES
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the status strategy from minutes elapsed since the turn start."""

    late_minutes: int = LATE_THRESHOLD_MINUTES
    absent_minutes: int = ABSENT_THRESHOLD_MINUTES

    def for_status(self, *, now: datetime, shift_start: Optional[datetime]) -> AttendanceStrategy:
        if shift_start is None:
            return NormalStrategy()

        elapsed = elapsed_minutes(shift_start, now)
        if elapsed >= self.absent_minutes:
            return AbsentStrategy()
        if elapsed >= self.late_minutes:
            return LateStrategy()
        return NormalStrategy()
