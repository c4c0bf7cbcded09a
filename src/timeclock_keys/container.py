from __future__ import annotations

from dataclasses import dataclass

from .attendance.auto_tagger import AutoTagger
from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .core import constants
from .database.bootstrap import ensure_kv_table
from .database.connection import DatabaseConnection, DBConfig
from .employees.service import EmployeeDirectory
from .employees.snapshot_employee_repository import SnapshotEmployeeRepository
from .marks.snapshot_mark_repository import SnapshotMarkRepository
from .reports.consolidator import ReportConsolidator
from .reports.service import ReportService
from .reports.snapshot_report_repository import SnapshotReportRepository
from .schedules.service import ScheduleService
from .schedules.snapshot_schedule_repository import SnapshotScheduleRepository
from .store.json_store import JsonFileStateStore
from .store.mysql_store import MySQLStateStore
from .store.repository import InMemoryStateStore, StateStore
from .turns.snapshot_turn_repository import SnapshotTurnRepository


@dataclass(frozen=True)
class Container:
    store: StateStore

    employees_repo: SnapshotEmployeeRepository
    turns_repo: SnapshotTurnRepository
    schedules_repo: SnapshotScheduleRepository
    marks_repo: SnapshotMarkRepository
    reports_repo: SnapshotReportRepository

    directory: EmployeeDirectory
    schedule_service: ScheduleService
    consolidator: ReportConsolidator
    attendance_service: AttendanceService
    auto_tagger: AutoTagger
    report_service: ReportService


def build_store(settings) -> StateStore:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryStateStore()
    if backend == "json":
        return JsonFileStateStore(getattr(settings, "STORE_PATH"))
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if getattr(settings, "AUTO_INIT_DB", False):
            ensure_kv_table(conn)
        return MySQLStateStore(conn, store_key=getattr(settings, "STORE_KEY", "timeclock_state_v1"))
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(
    *,
    store: StateStore,
    buffer_minutes: int = constants.VISIBILITY_BUFFER_MINUTES,
    late_minutes: int = constants.LATE_THRESHOLD_MINUTES,
    absent_minutes: int = constants.ABSENT_THRESHOLD_MINUTES,
) -> Container:
    employees_repo = SnapshotEmployeeRepository(store)
    turns_repo = SnapshotTurnRepository(store)
    schedules_repo = SnapshotScheduleRepository(store)
    marks_repo = SnapshotMarkRepository(store)
    reports_repo = SnapshotReportRepository(store)

    directory = EmployeeDirectory(employees_repo)
    schedule_service = ScheduleService(schedules_repo, turns_repo, buffer_minutes=buffer_minutes)
    consolidator = ReportConsolidator(marks_repo, reports_repo, directory, turns_repo)
    strategy_factory = AttendanceStrategyFactory(late_minutes=late_minutes, absent_minutes=absent_minutes)
    attendance_service = AttendanceService(
        marks_repo,
        schedule_service,
        consolidator,
        strategy_factory=strategy_factory,
        buffer_minutes=buffer_minutes,
    )
    auto_tagger = AutoTagger(
        attendance_service,
        marks_repo,
        schedule_service,
        strategy_factory=strategy_factory,
        buffer_minutes=buffer_minutes,
    )
    report_service = ReportService(reports_repo)

    return Container(
        store=store,
        employees_repo=employees_repo,
        turns_repo=turns_repo,
        schedules_repo=schedules_repo,
        marks_repo=marks_repo,
        reports_repo=reports_repo,
        directory=directory,
        schedule_service=schedule_service,
        consolidator=consolidator,
        attendance_service=attendance_service,
        auto_tagger=auto_tagger,
        report_service=report_service,
    )
