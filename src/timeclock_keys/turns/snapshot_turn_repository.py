from __future__ import annotations

from typing import Optional, Sequence

from ..store.repository import StateStore
from .model import Turn
from .repository import TurnRepository


class SnapshotTurnRepository(TurnRepository):
    def __init__(self, store: StateStore):
        self._store = store

    def list_all(self) -> Sequence[Turn]:
        return [Turn.from_dict(r) for r in self._store.load()["turns"]]

    def get_by_id(self, turn_id: str) -> Optional[Turn]:
        if not turn_id:
            return None
        for r in self._store.load()["turns"]:
            if str(r.get("id")) == str(turn_id):
                return Turn.from_dict(r)
        return None
