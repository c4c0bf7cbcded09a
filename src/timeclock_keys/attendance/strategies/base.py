from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, MarkType


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    tag: Optional[MarkType] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide the status of an employee without a shift_in."""

    @abstractmethod
    def decide(self, *, now: datetime, shift_start: Optional[datetime]) -> StatusDecision:
        raise NotImplementedError
