from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .model import Mark


class MarkRepository(Protocol):
    def list_all(self) -> Sequence[Mark]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[Mark]:
        """Marks of one employee sorted by created_at."""

        raise NotImplementedError

    def get_by_id(self, mark_id: str) -> Optional[Mark]:
        raise NotImplementedError

    def add(self, mark: Mark) -> Mark:
        """Append a mark; the stored copy gets a fresh id.

        Raises InvariantViolation when the mark would break a history invariant.
        """

        raise NotImplementedError

    def close(self, mark_id: str, *, closed_at: datetime, meta: Optional[dict[str, Any]] = None) -> Mark:
        """Set closed_at (and optionally meta) on an open mark.

        Raises NotFoundError for unknown ids and InvariantViolation if already closed.
        """

        raise NotImplementedError

    def update_meta(self, mark_id: str, meta: dict[str, Any]) -> Mark:
        raise NotImplementedError
