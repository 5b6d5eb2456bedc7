"""Read-only data sources consulted by the planning engine.

The engine never touches the database directly. It is handed a store at the
start of a run: ``SqlPlanningStore`` queries the live tables per lookup,
``PlanningSnapshot`` serves fixed in-memory data.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from .repository import PlanningRepository
from .schemas import ExistingBlock


class PlanningStore(Protocol):
    def has_approved_leave(self, employee: str, day: date) -> bool: ...

    def part_time_day(self, employee: str) -> Optional[str]: ...

    def bookings(self, employee: str, week_start: date, day_of_week: int) -> list[ExistingBlock]: ...


@dataclass(frozen=True)
class LeaveEntry:
    employee: str
    start_date: date
    end_date: date
    status: str = "approved"
    type: str = "leave"


@dataclass(frozen=True)
class BookingEntry:
    employee: str
    week_start: date
    day_of_week: int
    start_hour: float
    duration_hours: float


@dataclass(frozen=True)
class PlanningSnapshot:
    """Fixed reference data for a planning run"""

    leave: tuple[LeaveEntry, ...] = ()
    part_time_days: dict[str, str] = field(default_factory=dict)
    existing: tuple[BookingEntry, ...] = ()

    def has_approved_leave(self, employee: str, day: date) -> bool:
        return any(
            entry.employee == employee
            and entry.status == "approved"
            and entry.start_date <= day <= entry.end_date
            for entry in self.leave
        )

    def part_time_day(self, employee: str) -> Optional[str]:
        return self.part_time_days.get(employee)

    def bookings(self, employee: str, week_start: date, day_of_week: int) -> list[ExistingBlock]:
        return [
            ExistingBlock(start_hour=entry.start_hour, duration_hours=entry.duration_hours)
            for entry in self.existing
            if entry.employee == employee
            and entry.week_start == week_start
            and entry.day_of_week == day_of_week
        ]


class SqlPlanningStore:
    """Fresh point-in-time queries against the planning tables"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PlanningRepository()

    def has_approved_leave(self, employee: str, day: date) -> bool:
        return self.repo.count_approved_leave(self.db, employee, day) > 0

    def part_time_day(self, employee: str) -> Optional[str]:
        profile = self.repo.find_employee(self.db, employee)
        if not profile:
            return None
        return profile.part_time_day

    def bookings(self, employee: str, week_start: date, day_of_week: int) -> list[ExistingBlock]:
        tasks = self.repo.get_tasks_for_day(self.db, employee, week_start, day_of_week)
        return [ExistingBlock(start_hour=t.start_hour, duration_hours=t.duration_hours) for t in tasks]
