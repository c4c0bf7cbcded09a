from __future__ import annotations

import json
from typing import Any

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_payload
from .repository import StateStore, empty_state, normalize_state


class MySQLStateStore(StateStore):
    """State document stored as one JSON row of the kv_store table."""

    def __init__(self, conn_factory: DatabaseConnection, *, store_key: str = "timeclock_state_v1"):
        self._conn_factory = conn_factory
        self._store_key = store_key

    def load(self) -> dict[str, Any]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("SELECT payload FROM kv_store WHERE store_key=%s", (self._store_key,))
            payload = fetch_payload(cur)
        if not payload:
            return empty_state()
        return normalize_state(json.loads(payload))

    def save(self, state: dict[str, Any]) -> None:
        payload = json.dumps(normalize_state(state), ensure_ascii=False)
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO kv_store(store_key, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (self._store_key, payload),
            )
