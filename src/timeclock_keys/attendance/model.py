from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..marks.model import Mark
from ..reports.model import Report


@dataclass(frozen=True)
class MarkResult:
    """Outcome of a state-machine command.

    `mark` is None when the transition was rejected. `report_error` is set when
    the mark was committed but the report could not be rebuilt.
    """

    mark: Optional[Mark] = None
    report: Optional[Report] = None
    report_error: Optional[str] = None
    reason: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.mark is not None

    @property
    def report_stale(self) -> bool:
        return self.report_error is not None

    @classmethod
    def rejected(cls, reason: str) -> "MarkResult":
        return cls(reason=reason)
