from __future__ import annotations

from datetime import datetime

import pytest

from timeclock_keys.container import build_container
from timeclock_keys.store.repository import InMemoryStateStore

# 2025-11-03 is a Monday.
MONDAY = datetime(2025, 11, 3)


def at(hour: int, minute: int = 0, *, day: int = 3) -> datetime:
    return datetime(2025, 11, day, hour, minute)


def sample_state() -> dict:
    return {
        "employees": [
            {"id": "e1", "name": "Juan Pérez"},
            {"id": "e2", "name": "María García"},
            {"id": "e3", "name": "Luis Torres"},
        ],
        "positions": [{"id": "p1", "name": "Operativo"}, {"id": "p2", "name": "Supervisor"}],
        "assignments": [
            {"employeeId": "e1", "positionId": "p1", "code": "OP-001"},
            {"employeeId": "e2", "positionId": "p1", "code": "OP-002"},
        ],
        "turns": [
            {"id": "morning", "name": "Matutino (06:00-14:00)", "startTime": "06:00", "endTime": "14:00", "fixed": True},
            {"id": "night", "name": "Nocturno (22:00-06:00)", "startTime": "22:00", "endTime": "06:00", "fixed": True},
        ],
        "schedules": [
            {"id": "s1", "employeeId": "e1", "turnId": "morning", "days": [], "freeDay": "Dom"},
            {"id": "s2", "employeeId": "e2", "turnId": "night", "days": [], "freeDay": "Sáb"},
        ],
        "marks": [],
        "reports": [],
    }


@pytest.fixture
def store():
    return InMemoryStateStore(sample_state())


@pytest.fixture
def container(store):
    return build_container(store=store)
