from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee."""

    employee_id: str
    name: str

    @classmethod
    def from_dict(cls, r: dict) -> "Employee":
        return cls(employee_id=str(r["id"]), name=r.get("name") or "")


@dataclass(frozen=True)
class Position:
    position_id: str
    name: str

    @classmethod
    def from_dict(cls, r: dict) -> "Position":
        return cls(position_id=str(r["id"]), name=r.get("name") or "")


@dataclass(frozen=True)
class Assignment:
    """Ties an employee to a position and a badge code (one per employee)."""

    employee_id: str
    position_id: Optional[str]
    code: Optional[str]

    @classmethod
    def from_dict(cls, r: dict) -> "Assignment":
        return cls(
            employee_id=str(r["employeeId"]),
            position_id=str(r["positionId"]) if r.get("positionId") else None,
            code=r.get("code"),
        )


@dataclass(frozen=True)
class EmployeeProfile:
    """Point-in-time view of an employee copied into reports."""

    employee_id: str
    name: str
    position: Optional[str]
    code: Optional[str]

    def to_dict(self) -> dict:
        return {"id": self.employee_id, "name": self.name, "position": self.position, "code": self.code}
