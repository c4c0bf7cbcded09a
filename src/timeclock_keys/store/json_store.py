from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .repository import StateStore, empty_state, normalize_state


class JsonFileStateStore(StateStore):
    """State document kept in one JSON file.

    Writes go to a temp file in the same directory followed by os.replace, so a
    crash leaves either the old or the new document on disk.
    """

    def __init__(self, path: str | os.PathLike):
        self._path = Path(path)

    def load(self) -> dict[str, Any]:
        if not self._path.exists():
            return empty_state()
        with self._path.open("r", encoding="utf-8") as fh:
            return normalize_state(json.load(fh))

    def save(self, state: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=self._path.name, suffix=".tmp", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(normalize_state(state), fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
