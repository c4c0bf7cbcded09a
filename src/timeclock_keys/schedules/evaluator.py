"""Decides whether a schedule is in force at a given instant.

All comparisons happen in minutes since local midnight. A turn whose end is not
after its start wraps into the next day; equal start and end means the whole
day.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import at_minutes, minutes_since_midnight, weekday_of, wrap_minutes
from ..core.constants import VISIBILITY_BUFFER_MINUTES
from ..turns.model import Turn
from .model import Schedule


def minutes_in_window(now_minutes: int, start: int, end: int) -> bool:
    if start == end:
        return True
    if start < end:
        return start <= now_minutes <= end
    return now_minutes >= start or now_minutes <= end


def is_active(
    schedule: Optional[Schedule],
    turn: Optional[Turn],
    now: datetime,
    *,
    buffer_minutes: int = VISIBILITY_BUFFER_MINUTES,
) -> bool:
    if schedule is None:
        return False

    today = now.date()
    if not schedule.covers_date(today):
        return False
    if schedule.days and weekday_of(today) not in schedule.days:
        return False

    if not schedule.turn_id or turn is None:
        return True

    start, end = turn.start_minutes, turn.end_minutes
    if start is None or end is None:
        # Better to show the employee than to hide them behind bad turn data.
        return True
    if start == end:
        return True

    adjusted_start = wrap_minutes(start - int(buffer_minutes))
    return minutes_in_window(minutes_since_midnight(now), adjusted_start, end)


def shift_start_for(turn: Optional[Turn], now: datetime) -> Optional[datetime]:
    """Start of the turn occurrence that `now` belongs to.

    For the after-midnight part of an overnight turn that is yesterday's start.
    """

    if turn is None or turn.start_minutes is None:
        return None

    start = turn.start_minutes
    end = turn.end_minutes
    day = now.date()
    if turn.wraps_midnight and end is not None and minutes_since_midnight(now) <= end:
        day = day - timedelta(days=1)
    return at_minutes(day, start)
