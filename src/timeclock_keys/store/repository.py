from __future__ import annotations

import copy
from typing import Any, Protocol

from ..core.constants import STATE_COLLECTIONS


def empty_state() -> dict[str, list[dict[str, Any]]]:
    return {name: [] for name in STATE_COLLECTIONS}


def normalize_state(raw: dict | None) -> dict[str, Any]:
    """Fill in missing collections so callers can index every key."""

    state = dict(raw or {})
    for name in STATE_COLLECTIONS:
        if not isinstance(state.get(name), list):
            state[name] = []
    return state


class StateStore(Protocol):
    """Persisted collection of every record the engine reads and writes.

    Reads and writes are whole snapshots: callers load, mutate and save.
    """

    def load(self) -> dict[str, Any]:
        raise NotImplementedError

    def save(self, state: dict[str, Any]) -> None:
        raise NotImplementedError


class InMemoryStateStore(StateStore):
    def __init__(self, initial: dict | None = None):
        self._state = normalize_state(copy.deepcopy(initial))

    def load(self) -> dict[str, Any]:
        # Hand out copies so unsaved mutations never leak into the store.
        return copy.deepcopy(self._state)

    def save(self, state: dict[str, Any]) -> None:
        self._state = normalize_state(copy.deepcopy(state))
