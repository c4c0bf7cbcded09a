"""Preconditions every mark store checks before appending to a history."""

from __future__ import annotations

from typing import Iterable

from ..core.enums import MarkType
from ..core.exceptions import InvariantViolation
from .model import Mark


def check_can_add(history: Iterable[Mark], mark: Mark) -> None:
    """Raise InvariantViolation if `mark` cannot join the employee's `history`."""

    own = [m for m in history if m.employee_id == mark.employee_id]

    if mark.type == MarkType.SHIFT_IN:
        if mark.is_open and any(m.type == MarkType.SHIFT_IN and m.is_open for m in own):
            raise InvariantViolation("an open shift_in already exists")
        if any(m.type == MarkType.SHIFT_IN and not m.is_open and m.created_on == mark.created_on for m in own):
            raise InvariantViolation("the session for this day is already closed")

    elif mark.type == MarkType.BREAK_START and mark.is_open:
        if any(m.type == MarkType.BREAK_START and m.is_open and m.break_type == mark.break_type for m in own):
            raise InvariantViolation(f"break {mark.break_type!r} is already open")

    elif mark.type in (MarkType.ABSENT, MarkType.LATE):
        if any(m.type == mark.type and m.created_on == mark.created_on for m in own):
            raise InvariantViolation(f"{mark.type.value} already tagged for {mark.created_on.isoformat()}")
