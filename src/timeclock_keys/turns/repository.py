from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Turn


class TurnRepository(Protocol):
    def list_all(self) -> Sequence[Turn]:
        raise NotImplementedError

    def get_by_id(self, turn_id: str) -> Optional[Turn]:
        raise NotImplementedError
