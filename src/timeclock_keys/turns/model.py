from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import parse_hhmm


@dataclass(frozen=True)
class Turn:
    """Domain entity: a named time-of-day window, possibly wrapping past midnight."""

    turn_id: str
    name: str
    start_time: Optional[str]
    end_time: Optional[str]
    fixed: bool = False

    @property
    def start_minutes(self) -> Optional[int]:
        return parse_hhmm(self.start_time)

    @property
    def end_minutes(self) -> Optional[int]:
        return parse_hhmm(self.end_time)

    @property
    def wraps_midnight(self) -> bool:
        start, end = self.start_minutes, self.end_minutes
        if start is None or end is None or start == end:
            return False
        return end <= start

    @property
    def full_day(self) -> bool:
        start, end = self.start_minutes, self.end_minutes
        return start is not None and start == end

    def snapshot(self) -> dict:
        return {"id": self.turn_id, "name": self.name, "startTime": self.start_time, "endTime": self.end_time}

    @classmethod
    def from_dict(cls, r: dict) -> "Turn":
        return cls(
            turn_id=str(r["id"]),
            name=r.get("name") or "",
            start_time=r.get("startTime"),
            end_time=r.get("endTime"),
            fixed=bool(r.get("fixed", False)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.turn_id,
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "fixed": self.fixed,
        }
