from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..core.enums import ReportType
from ..marks.model import Mark


@dataclass(frozen=True)
class BreakSummary:
    mark_id: str
    break_type: Optional[str]
    start: datetime
    end: Optional[datetime] = None
    duration_min: Optional[int] = None

    @classmethod
    def from_dict(cls, r: dict) -> "BreakSummary":
        return cls(
            mark_id=str(r["id"]),
            break_type=r.get("breakType"),
            start=parse_iso_datetime(r["start"]),
            end=parse_iso_datetime(r["end"]) if r.get("end") else None,
            duration_min=r.get("durationMin"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.mark_id,
            "breakType": self.break_type,
            "start": to_iso(self.start),
            "end": to_iso(self.end),
            "durationMin": self.duration_min,
        }


@dataclass(frozen=True)
class Report:
    """The single current summary of an employee's latest session or status."""

    report_id: str
    type: ReportType
    employee_id: str
    timestamp: datetime
    employee: Optional[dict] = None
    turn_id: Optional[str] = None
    turn: Optional[dict] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    duration_min: Optional[int] = None
    items: tuple[Mark, ...] = field(default_factory=tuple)
    breaks: tuple[BreakSummary, ...] = field(default_factory=tuple)
    mark_id: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, r: dict) -> "Report":
        return cls(
            report_id=str(r["id"]),
            type=ReportType(r["type"]),
            employee_id=str(r["employeeId"]),
            timestamp=parse_iso_datetime(r["timestamp"]),
            employee=r.get("employee"),
            turn_id=r.get("turnId"),
            turn=r.get("turn"),
            start=parse_iso_datetime(r["start"]) if r.get("start") else None,
            end=parse_iso_datetime(r["end"]) if r.get("end") else None,
            duration_min=r.get("durationMin"),
            items=tuple(Mark.from_dict(x) for x in r.get("items") or ()),
            breaks=tuple(BreakSummary.from_dict(x) for x in r.get("breaks") or ()),
            mark_id=r.get("markId"),
            notes=r.get("notes"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "type": self.type.value,
            "markId": self.mark_id,
            "employeeId": self.employee_id,
            "employee": self.employee,
            "turnId": self.turn_id,
            "turn": self.turn,
            "start": to_iso(self.start),
            "end": to_iso(self.end),
            "durationMin": self.duration_min,
            "items": [m.to_dict() for m in self.items],
            "breaks": [b.to_dict() for b in self.breaks],
            "timestamp": to_iso(self.timestamp),
            "notes": self.notes,
        }
