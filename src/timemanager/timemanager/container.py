from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .clocks.mysql_clock_repository import MySQLClockRepository
from .clocks.service import ClockService
from .common.locks import TransactionManager
from .core.constants import DEFAULT_LATE_THRESHOLD, DEFAULT_LOCK_TIMEOUT_SECONDS, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .database.transaction import MySQLTransactionManager
from .hours.service import HoursService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .pauses.mysql_pause_repository import MySQLPauseRepository
from .pauses.service import PauseService
from .people.mysql_person_repository import MySQLPersonRepository
from .people.mysql_team_repository import MySQLTeamRepository
from .reports.service import ReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService
from .templates.mysql_template_repository import MySQLTemplateRepository
from .templates.service import TemplateService
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    timezone: str
    tx: TransactionManager

    clock_service: ClockService
    pause_service: PauseService
    leave_service: LeaveService
    shift_service: ShiftService
    template_service: TemplateService
    hours_service: HoursService
    report_service: ReportService
    timesheet_service: TimesheetService


def build_services(
    *,
    persons,
    teams,
    clocks,
    pauses,
    leaves,
    shifts,
    templates,
    tx: TransactionManager,
    timezone: str = DEFAULT_TIMEZONE,
    late_threshold: time = DEFAULT_LATE_THRESHOLD,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    hours_service = HoursService(clocks, pauses, persons, tx)
    return Container(
        timezone=timezone,
        tx=tx,
        clock_service=ClockService(clocks, persons, tx),
        pause_service=PauseService(pauses, clocks, tx),
        leave_service=LeaveService(leaves, persons, tx),
        shift_service=ShiftService(shifts, teams, persons, tx),
        template_service=TemplateService(templates, teams, shifts, tx),
        hours_service=hours_service,
        report_service=ReportService(
            clocks, pauses, teams, calculator=hours_service.calculator, late_threshold=late_threshold
        ),
        timesheet_service=TimesheetService(hours_service, shifts, leaves, persons, teams),
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    late_threshold: time = DEFAULT_LATE_THRESHOLD,
    lock_timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        persons=MySQLPersonRepository(conn),
        teams=MySQLTeamRepository(conn),
        clocks=MySQLClockRepository(conn),
        pauses=MySQLPauseRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        shifts=MySQLShiftRepository(conn),
        templates=MySQLTemplateRepository(conn),
        tx=MySQLTransactionManager(conn, lock_timeout=lock_timeout),
        timezone=timezone,
        late_threshold=late_threshold,
    )
