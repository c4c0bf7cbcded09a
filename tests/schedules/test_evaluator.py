from datetime import date, datetime

import pytest

from timeclock_keys.core.enums import Weekday
from timeclock_keys.schedules.evaluator import is_active, shift_start_for
from timeclock_keys.schedules.model import Schedule
from timeclock_keys.turns.model import Turn

MORNING = Turn(turn_id="t1", name="Morning", start_time="06:00", end_time="14:00")
NIGHT = Turn(turn_id="t2", name="Night", start_time="22:00", end_time="06:00")


def _schedule(turn_id="t1", **kw) -> Schedule:
    return Schedule(schedule_id="s1", employee_id="e1", turn_id=turn_id, **kw)


def test_missing_schedule_is_never_active():
    assert is_active(None, MORNING, datetime(2025, 11, 3, 8, 0)) is False


def test_overnight_turn_is_active_on_both_sides_of_midnight():
    sc = _schedule("t2")

    assert is_active(sc, NIGHT, datetime(2025, 11, 3, 23, 30)) is True
    assert is_active(sc, NIGHT, datetime(2025, 11, 4, 5, 30)) is True
    assert is_active(sc, NIGHT, datetime(2025, 11, 3, 12, 0)) is False


def test_visibility_buffer_opens_window_twenty_minutes_early():
    sc = _schedule()

    assert is_active(sc, MORNING, datetime(2025, 11, 3, 5, 39)) is False
    assert is_active(sc, MORNING, datetime(2025, 11, 3, 5, 40)) is True
    assert is_active(sc, MORNING, datetime(2025, 11, 3, 14, 0)) is True
    assert is_active(sc, MORNING, datetime(2025, 11, 3, 14, 1)) is False


@pytest.mark.parametrize("hour,minute", [(h, m) for h in range(24) for m in (0, 15, 39, 40, 59)])
def test_no_wrap_window_matches_buffered_range(hour, minute):
    sc = _schedule()
    now_minutes = hour * 60 + minute
    expected = 6 * 60 - 20 <= now_minutes <= 14 * 60

    assert is_active(sc, MORNING, datetime(2025, 11, 3, hour, minute)) is expected


def test_buffer_before_midnight_start_wraps_to_previous_day():
    turn = Turn(turn_id="t3", name="Early", start_time="00:10", end_time="08:00")
    sc = _schedule("t3")

    assert is_active(sc, turn, datetime(2025, 11, 3, 23, 50)) is True
    assert is_active(sc, turn, datetime(2025, 11, 3, 23, 49)) is False
    assert is_active(sc, turn, datetime(2025, 11, 3, 7, 59)) is True


def test_equal_start_and_end_means_full_day():
    turn = Turn(turn_id="t4", name="All day", start_time="06:00", end_time="06:00")
    sc = _schedule("t4")

    assert all(is_active(sc, turn, datetime(2025, 11, 3, h, 30)) for h in range(24))


def test_unparseable_turn_times_keep_schedule_visible():
    turn = Turn(turn_id="t5", name="Broken", start_time="soon", end_time="14:00")

    assert is_active(_schedule("t5"), turn, datetime(2025, 11, 3, 3, 0)) is True


def test_date_range_and_weekdays_fail_closed():
    sc = _schedule(
        days=frozenset({Weekday.MON, Weekday.TUE}),
        start_date=date(2025, 11, 1),
        end_date=date(2025, 11, 30),
    )

    assert is_active(sc, MORNING, datetime(2025, 11, 3, 8, 0)) is True  # Monday
    assert is_active(sc, MORNING, datetime(2025, 11, 5, 8, 0)) is False  # Wednesday
    assert is_active(sc, MORNING, datetime(2025, 12, 1, 8, 0)) is False  # after end_date
    assert is_active(sc, MORNING, datetime(2025, 10, 27, 8, 0)) is False  # before start_date


def test_schedule_parses_spanish_weekday_labels():
    sc = Schedule.from_dict(
        {"id": "s1", "employeeId": "e1", "turnId": "t1", "days": ["Lun", "Mié"], "freeDay": "Dom", "startDate": "2025-11-01"}
    )

    assert sc.days == frozenset({Weekday.MON, Weekday.WED})
    assert sc.free_day == Weekday.SUN
    assert sc.start_date == date(2025, 11, 1)


def test_shift_start_for_overnight_turn_after_midnight_is_yesterday():
    assert shift_start_for(NIGHT, datetime(2025, 11, 4, 5, 30)) == datetime(2025, 11, 3, 22, 0)
    assert shift_start_for(NIGHT, datetime(2025, 11, 3, 21, 50)) == datetime(2025, 11, 3, 22, 0)
    assert shift_start_for(MORNING, datetime(2025, 11, 3, 6, 6)) == datetime(2025, 11, 3, 6, 0)
