from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..core.enums import MarkType


@dataclass(frozen=True)
class Mark:
    """Domain entity: one event ("clave") in an employee's attendance history."""

    mark_id: str
    employee_id: str
    type: MarkType
    label: str
    created_at: datetime
    turn_id: Optional[str] = None
    closed_at: Optional[datetime] = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        return self.closed_at is None

    @property
    def created_on(self) -> date:
        return self.created_at.date()

    @property
    def break_type(self) -> Optional[str]:
        return (self.meta or {}).get("breakType")

    @classmethod
    def from_dict(cls, r: dict) -> "Mark":
        return cls(
            mark_id=str(r["id"]),
            employee_id=str(r["employeeId"]),
            type=MarkType(r.get("type") or MarkType.GENERIC.value),
            label=r.get("label") or r.get("clave") or "",
            created_at=parse_iso_datetime(r["createdAt"]),
            turn_id=str(r["turnId"]) if r.get("turnId") else None,
            closed_at=parse_iso_datetime(r["closedAt"]) if r.get("closedAt") else None,
            meta=dict(r.get("meta") or {}),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.mark_id,
            "employeeId": self.employee_id,
            "turnId": self.turn_id,
            "label": self.label,
            "type": self.type.value,
            "createdAt": to_iso(self.created_at),
            "closedAt": to_iso(self.closed_at),
            "meta": dict(self.meta or {}) or None,
        }
