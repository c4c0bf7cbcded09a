"""Calendar helpers.

Every local-date, weekday and time-of-day conversion goes through this module so
the rest of the package never derives a day from a datetime on its own.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import Weekday
from ..core.exceptions import ValidationError

_WEEKDAY_ALIASES = {
    # English short / full names
    "mon": Weekday.MON,
    "monday": Weekday.MON,
    "tue": Weekday.TUE,
    "tuesday": Weekday.TUE,
    "wed": Weekday.WED,
    "wednesday": Weekday.WED,
    "thu": Weekday.THU,
    "thursday": Weekday.THU,
    "fri": Weekday.FRI,
    "friday": Weekday.FRI,
    "sat": Weekday.SAT,
    "saturday": Weekday.SAT,
    "sun": Weekday.SUN,
    "sunday": Weekday.SUN,
    # Spanish short labels used by existing schedule data
    "lun": Weekday.MON,
    "mar": Weekday.TUE,
    "mié": Weekday.WED,
    "mie": Weekday.WED,
    "jue": Weekday.THU,
    "vie": Weekday.FRI,
    "sáb": Weekday.SAT,
    "sab": Weekday.SAT,
    "dom": Weekday.SUN,
}


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def as_local_naive(value: datetime) -> datetime:
    """Drop the offset of an aware datetime after converting it to local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_iso_datetime(value: str) -> datetime:
    # Browsers send toISOString() output with a trailing Z.
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_local_naive(datetime.fromisoformat(text))
    except ValueError:
        raise ValidationError(f"invalid ISO datetime {value!r}") from None


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def local_date_str(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def weekday_of(value: date) -> Weekday:
    return list(Weekday)[value.weekday()]


def parse_weekday(label: str) -> Weekday:
    if isinstance(label, Weekday):
        return label
    key = (label or "").strip().lower()
    day = _WEEKDAY_ALIASES.get(key)
    if day is None:
        raise ValidationError(f"Unknown weekday: {label!r}")
    return day


def parse_hhmm(value: Optional[str]) -> Optional[int]:
    """Convert "HH:MM" into minutes since midnight, or None when unparseable."""

    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return hours * 60 + minutes


def minutes_since_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


def wrap_minutes(value: int) -> int:
    return value % MINUTES_PER_DAY


def at_minutes(day: date, minutes: int) -> datetime:
    return datetime.combine(day, time(hour=minutes // 60, minute=minutes % 60))


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes between two datetimes, rounded half up."""
    return int(math.floor((end - start).total_seconds() / 60 + 0.5))


def elapsed_minutes(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60
