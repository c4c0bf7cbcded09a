from __future__ import annotations

import logging

from conftest import at

from timeclock_keys.attendance.poller import AutoTagPoller
from timeclock_keys.core.enums import AttendanceStatus, MarkType, ReportType


def _types(container, employee_id):
    return [m.type for m in container.attendance_service.get_marks(employee_id)]


def test_late_then_absent_scenario(container):
    tagger = container.auto_tagger
    svc = container.attendance_service

    assert tagger.run_once(now=at(6, 4)) == []
    assert svc.status_of("e1", now=at(6, 4)) == AttendanceStatus.IDLE

    created = tagger.run_once(now=at(6, 6))
    assert [m.type for m in created] == [MarkType.LATE]
    late = created[0]
    assert late.created_at == late.closed_at == at(6, 6)
    assert svc.status_of("e1", now=at(6, 6)) == AttendanceStatus.LATE

    created = tagger.run_once(now=at(6, 16))
    assert [m.type for m in created] == [MarkType.ABSENT]
    assert svc.status_of("e1", now=at(6, 16)) == AttendanceStatus.ABSENT

    report = container.reports_repo.get_for_employee("e1")
    assert report.type == ReportType.ROW_SNAPSHOT
    assert [m.type for m in report.items] == [MarkType.LATE, MarkType.ABSENT]


def test_running_twice_at_same_instant_creates_no_duplicates(container):
    tagger = container.auto_tagger

    tagger.run_once(now=at(6, 6))
    assert tagger.run_once(now=at(6, 6)) == []
    tagger.run_once(now=at(6, 16))
    assert tagger.run_once(now=at(6, 16)) == []
    assert tagger.run_once(now=at(9, 0)) == []

    assert _types(container, "e1") == [MarkType.LATE, MarkType.ABSENT]
    assert len(container.reports_repo.list_all()) == 1


def test_employee_who_shifted_in_is_never_tagged(container):
    container.attendance_service.mark_shift_in("e1", now=at(6, 3))

    assert container.auto_tagger.run_once(now=at(6, 6)) == []
    assert container.auto_tagger.run_once(now=at(6, 30)) == []
    assert _types(container, "e1") == [MarkType.SHIFT_IN]


def test_absence_jump_skips_late_tag(container):
    created = container.auto_tagger.run_once(now=at(7, 0))

    assert [m.type for m in created] == [MarkType.ABSENT]


def test_overnight_absence_is_not_repeated_after_midnight(container):
    tagger = container.auto_tagger

    created = tagger.run_once(now=at(22, 16))
    assert [(m.employee_id, m.type) for m in created] == [("e2", MarkType.ABSENT)]

    assert tagger.run_once(now=at(5, 30, day=4)) == []
    assert container.attendance_service.status_of("e2", now=at(5, 30, day=4)) == AttendanceStatus.ABSENT
    assert _types(container, "e2") == [MarkType.ABSENT]


def test_unscheduled_employees_are_ignored(container):
    container.auto_tagger.run_once(now=at(6, 30))

    assert _types(container, "e3") == []


class _BrokenTagger:
    def run_once(self, *, now=None):
        raise RuntimeError("store offline")


def test_poller_tick_logs_and_survives_failures(caplog):
    poller = AutoTagPoller(_BrokenTagger(), interval_seconds=60, clock=lambda: at(6, 6))

    with caplog.at_level(logging.ERROR):
        assert poller.tick() == 0

    assert "auto_tag_tick_failed" in caplog.text


def test_poller_tick_uses_injected_clock(container):
    poller = AutoTagPoller(container.auto_tagger, interval_seconds=60, clock=lambda: at(6, 6))

    assert poller.tick() == 1
    assert poller.tick() == 0


def test_poller_start_and_stop(container):
    poller = AutoTagPoller(container.auto_tagger, interval_seconds=60, clock=lambda: at(3, 0))

    poller.start()
    assert poller.running
    poller.stop(timeout=2)
    assert not poller.running
