from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, MarkType
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    def decide(self, *, now: datetime, shift_start: Optional[datetime]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, tag=MarkType.ABSENT)
