from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.exceptions import InvariantViolation, NotFoundError, ValidationError
from ..store.repository import StateStore
from .invariants import check_can_add
from .model import Mark
from .repository import MarkRepository


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class SnapshotMarkRepository(MarkRepository):
    def __init__(self, store: StateStore):
        self._store = store

    def list_all(self) -> Sequence[Mark]:
        return [Mark.from_dict(r) for r in self._store.load()["marks"]]

    def list_for_employee(self, employee_id: str) -> Sequence[Mark]:
        marks = [m for m in self.list_all() if m.employee_id == str(employee_id)]
        marks.sort(key=lambda m: m.created_at)
        return marks

    def get_by_id(self, mark_id: str) -> Optional[Mark]:
        for r in self._store.load()["marks"]:
            if str(r.get("id")) == str(mark_id):
                return Mark.from_dict(r)
        return None

    def add(self, mark: Mark) -> Mark:
        state = self._store.load()
        history = [Mark.from_dict(r) for r in state["marks"] if str(r.get("employeeId")) == mark.employee_id]
        check_can_add(history, mark)

        stored = dataclasses.replace(mark, mark_id=new_id())
        state["marks"].append(stored.to_dict())
        self._store.save(state)
        return stored

    def close(self, mark_id: str, *, closed_at: datetime, meta: Optional[dict[str, Any]] = None) -> Mark:
        state = self._store.load()
        for i, r in enumerate(state["marks"]):
            if str(r.get("id")) != str(mark_id):
                continue
            current = Mark.from_dict(r)
            if not current.is_open:
                raise InvariantViolation(f"mark {mark_id} is already closed")
            if closed_at < current.created_at:
                raise ValidationError(f"mark {mark_id} cannot close before it was created")

            updated = dataclasses.replace(
                current,
                closed_at=closed_at,
                meta={**current.meta, **meta} if meta else current.meta,
            )
            state["marks"][i] = updated.to_dict()
            self._store.save(state)
            return updated

        raise NotFoundError(f"mark {mark_id} not found")

    def update_meta(self, mark_id: str, meta: dict[str, Any]) -> Mark:
        state = self._store.load()
        for i, r in enumerate(state["marks"]):
            if str(r.get("id")) == str(mark_id):
                current = Mark.from_dict(r)
                updated = dataclasses.replace(current, meta={**current.meta, **(meta or {})})
                state["marks"][i] = updated.to_dict()
                self._store.save(state)
                return updated
        raise NotFoundError(f"mark {mark_id} not found")
