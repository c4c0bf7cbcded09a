from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Before the late threshold, or no turn start to measure against."""

    def decide(self, *, now: datetime, shift_start: Optional[datetime]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.IDLE)
