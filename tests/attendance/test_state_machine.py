from __future__ import annotations

from datetime import timezone

from conftest import at

import pytest

from timeclock_keys.core.enums import AttendanceStatus, MarkType, ReportType
from timeclock_keys.core.exceptions import NotFoundError, ValidationError


def test_shift_in_resolves_turn_and_opens_session(container):
    svc = container.attendance_service

    result = svc.mark_shift_in("e1", now=at(6, 0))

    assert result.applied
    assert result.mark.type == MarkType.SHIFT_IN
    assert result.mark.turn_id == "morning"
    assert result.mark.is_open
    assert svc.status_of("e1", now=at(6, 4)) == AttendanceStatus.ON_SHIFT


def test_second_shift_in_is_a_silent_noop(container):
    svc = container.attendance_service
    svc.mark_shift_in("e1", now=at(6, 0))

    result = svc.mark_shift_in("e1", now=at(6, 1))

    assert not result.applied
    open_shifts = [m for m in svc.get_marks("e1") if m.type == MarkType.SHIFT_IN and m.is_open]
    assert len(open_shifts) == 1


def test_full_session_with_lunch_break_builds_shift_report(container):
    svc = container.attendance_service
    svc.mark_shift_in("e1", now=at(6, 0))
    opened = svc.toggle_break("e1", "almuerzo", now=at(12, 0))
    closed = svc.toggle_break("e1", "almuerzo", now=at(13, 0))

    assert opened.mark.meta == {"breakType": "almuerzo", "duration": 60}
    assert closed.mark.mark_id == opened.mark.mark_id
    assert closed.mark.closed_at == at(13, 0)

    result = svc.mark_shift_out("e1", now=at(14, 0))

    assert result.applied and not result.report_stale
    report = result.report
    assert report.type == ReportType.SHIFT_REPORT
    assert report.duration_min == 480
    assert len(report.breaks) == 1
    assert report.breaks[0].duration_min == 60
    assert report.breaks[0].break_type == "almuerzo"
    assert report.employee == {"id": "e1", "name": "Juan Pérez", "position": "Operativo", "code": "OP-001"}
    assert report.turn["name"] == "Matutino (06:00-14:00)"


def test_closed_session_is_terminal_for_the_day(container):
    svc = container.attendance_service
    svc.mark_shift_in("e1", now=at(6, 0))
    svc.mark_shift_out("e1", now=at(14, 0))

    assert svc.status_of("e1", now=at(14, 0)) == AttendanceStatus.CLOSED
    assert not svc.mark_shift_in("e1", now=at(14, 0)).applied
    assert not svc.mark_shift_in("e1", now=at(18, 0)).applied


def test_shift_out_without_open_shift_is_noop(container):
    result = container.attendance_service.mark_shift_out("e1", now=at(14, 0))

    assert not result.applied
    assert container.report_service.get_reports() == []


def test_open_break_does_not_block_shift_out(container):
    svc = container.attendance_service
    svc.mark_shift_in("e1", now=at(6, 0))
    svc.toggle_break("e1", "cafe", now=at(13, 50))

    result = svc.mark_shift_out("e1", now=at(14, 0))

    assert result.applied
    assert result.report.breaks[0].duration_min is None
    assert result.report.breaks[0].end is None


def test_status_progression_without_shift_in(container):
    svc = container.attendance_service

    assert svc.status_of("e1", now=at(5, 50)) == AttendanceStatus.IDLE
    assert svc.status_of("e1", now=at(6, 4)) == AttendanceStatus.IDLE
    assert svc.status_of("e1", now=at(6, 6)) == AttendanceStatus.LATE
    assert svc.status_of("e1", now=at(6, 16)) == AttendanceStatus.ABSENT


def test_absent_employee_cannot_shift_in(container):
    svc = container.attendance_service

    assert not svc.mark_shift_in("e1", now=at(6, 20)).applied
    assert svc.mark_shift_in("e1", now=at(6, 10)).applied is True


def test_unscheduled_employee_has_no_turn_and_stays_idle(container):
    svc = container.attendance_service

    result = svc.mark_shift_in("e3", now=at(9, 0))

    assert result.applied
    assert result.mark.turn_id is None
    assert svc.status_of("e3", now=at(9, 0)) == AttendanceStatus.ON_SHIFT


def test_generic_mark_stays_open_and_needs_label(container):
    svc = container.attendance_service

    result = svc.record_generic_mark("e1", "  X-15 ", now=at(9, 0))

    assert result.mark.type == MarkType.GENERIC
    assert result.mark.label == "X-15"
    assert svc.open_marks("e1") == [result.mark]
    with pytest.raises(ValidationError):
        svc.record_generic_mark("e1", "   ", now=at(9, 0))


def test_close_mark_on_shift_in_equals_shift_out(container):
    svc = container.attendance_service
    shift_in = svc.mark_shift_in("e1", now=at(6, 0)).mark

    result = svc.close_mark(shift_in.mark_id, now=at(10, 0))

    assert result.report.type == ReportType.SHIFT_REPORT
    assert result.report.duration_min == 240
    assert not svc.close_mark(shift_in.mark_id, now=at(11, 0)).applied
    assert not svc.close_mark("missing", now=at(11, 0)).applied


def test_closing_open_absent_mark_builds_row_snapshot(container):
    svc = container.attendance_service
    added = svc.add_mark("e1", mark_type=MarkType.ABSENT, label="FALTA", now=at(7, 0))

    result = svc.close_mark(added.mark.mark_id, now=at(7, 5))

    assert result.report.type == ReportType.ROW_SNAPSHOT
    assert result.report.turn_id == "morning"


def test_update_mark_only_accepts_close_and_break_meta(container):
    svc = container.attendance_service
    generic = svc.record_generic_mark("e1", "X", now=at(9, 0)).mark
    brk = svc.toggle_break("e1", "desayuno_cafe", now=at(9, 5)).mark

    with pytest.raises(ValidationError):
        svc.update_mark(generic.mark_id, {"label": "Y"})
    with pytest.raises(ValidationError):
        svc.update_mark(generic.mark_id, {"meta": {"note": "x"}})
    with pytest.raises(NotFoundError):
        svc.update_mark("missing", {"closedAt": "2025-11-03T09:30:00"})

    patched = svc.update_mark(brk.mark_id, {"meta": {"duration": 20}})
    assert patched.mark.meta == {"breakType": "desayuno_cafe", "duration": 20}

    closed = svc.update_mark(generic.mark_id, {"closedAt": "2025-11-03T09:30:00"})
    assert closed.mark.closed_at == at(9, 30)


def test_add_mark_routes_shift_types_through_commands(container):
    svc = container.attendance_service

    svc.add_mark("e1", mark_type=MarkType.SHIFT_IN, label="ENTRADA", now=at(6, 0))
    out = svc.add_mark("e1", mark_type=MarkType.SHIFT_OUT, label="SALIDA", now=at(14, 0))

    assert out.mark.type == MarkType.SHIFT_IN
    assert out.report.duration_min == 480
    assert not any(m.type == MarkType.SHIFT_OUT for m in svc.get_marks("e1"))


def test_open_marks_count_only_counts_on_duty_employees(container):
    svc = container.attendance_service
    svc.record_generic_mark("e1", "A", now=at(9, 0))
    svc.record_generic_mark("e3", "B", now=at(9, 0))

    assert svc.open_marks_count(now=at(9, 0)) == 1


def test_utc_closed_at_is_stored_as_local_time(container):
    svc = container.attendance_service
    svc.mark_shift_in("e1", now=at(6, 0))
    brk = svc.toggle_break("e1", "almuerzo", now=at(12, 0)).mark

    # Same instant as 13:00 local, written the way a browser serializes it.
    utc_text = at(13, 0).astimezone().astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    closed = svc.update_mark(brk.mark_id, {"closedAt": utc_text}, now=at(13, 0))

    assert closed.mark.closed_at == at(13, 0)
    assert closed.mark.closed_at.tzinfo is None

    result = svc.mark_shift_out("e1", now=at(14, 0))
    assert not result.report_stale
    assert result.report.breaks[0].duration_min == 60


def test_update_mark_rejects_bad_closed_at(container):
    svc = container.attendance_service
    shift_in = svc.mark_shift_in("e1", now=at(6, 0)).mark

    with pytest.raises(ValidationError):
        svc.update_mark(shift_in.mark_id, {"closedAt": "not-a-date"}, now=at(7, 0))
    with pytest.raises(ValidationError):
        svc.update_mark(shift_in.mark_id, {"closedAt": "2025-11-03T05:00:00"}, now=at(7, 0))

    assert container.marks_repo.get_by_id(shift_in.mark_id).is_open
    assert container.reports_repo.list_all() == []
