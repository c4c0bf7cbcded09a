from __future__ import annotations

from enum import Enum


class MarkType(str, Enum):
    """Kinds of events in an employee's attendance history."""

    SHIFT_IN = "shift_in"
    SHIFT_OUT = "shift_out"
    BREAK_START = "break_start"
    ABSENT = "absent"
    LATE = "late"
    GENERIC = "generic"


class AttendanceStatus(str, Enum):
    """Derived per-employee status; never persisted."""

    IDLE = "idle"
    ON_SHIFT = "on_shift"
    LATE = "late"
    ABSENT = "absent"
    CLOSED = "closed"


class ReportType(str, Enum):
    SHIFT_REPORT = "shift_report"
    ROW_SNAPSHOT = "row_snapshot"


class Weekday(str, Enum):
    """Weekday labels as stored on schedules (Monday == 0, like date.weekday())."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @property
    def index(self) -> int:
        return list(Weekday).index(self)
