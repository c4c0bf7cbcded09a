from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date, parse_weekday
from ..core.enums import Weekday
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _optional_date(value) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        logger.warning("ignoring unparseable schedule date %r", value)
        return None


def _weekdays(values) -> frozenset[Weekday]:
    days = set()
    for v in values or ():
        try:
            days.add(parse_weekday(v))
        except ValidationError:
            logger.warning("ignoring unknown schedule weekday %r", v)
    return frozenset(days)


@dataclass(frozen=True)
class Schedule:
    """Binding of an employee to a turn for some weekdays within an optional date range."""

    schedule_id: str
    employee_id: str
    turn_id: Optional[str]
    days: frozenset[Weekday] = field(default_factory=frozenset)
    free_day: Optional[Weekday] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def covers_date(self, day: date) -> bool:
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False
        return True

    @classmethod
    def from_dict(cls, r: dict) -> "Schedule":
        free_day = _weekdays([r["freeDay"]]) if r.get("freeDay") else frozenset()
        return cls(
            schedule_id=str(r["id"]),
            employee_id=str(r["employeeId"]),
            turn_id=str(r["turnId"]) if r.get("turnId") else None,
            days=_weekdays(r.get("days")),
            free_day=next(iter(free_day), None),
            start_date=_optional_date(r.get("startDate")),
            end_date=_optional_date(r.get("endDate")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "employeeId": self.employee_id,
            "turnId": self.turn_id,
            "days": [d.value for d in Weekday if d in self.days],
            "freeDay": self.free_day.value if self.free_day else None,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }
