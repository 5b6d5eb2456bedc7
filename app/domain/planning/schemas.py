"""Planning domain schemas - Pydantic models for the slot-finding engine and its API"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ... import config as settings


class Distribution(str, Enum):
    CONTIGUOUS = "contiguous"
    PER_WEEK = "per_week"
    LAST_WEEK = "last_week"


class PhaseKind(str, Enum):
    NORMAL = "normal"
    MEETING = "meeting"
    FEEDBACK = "feedback"


class WorkConfig(BaseModel):
    """Studio working hours, fixed for the duration of one planning run"""

    model_config = ConfigDict(frozen=True)

    workday_start: float = settings.PLANNING_WORKDAY_START
    workday_end: float = settings.PLANNING_WORKDAY_END
    lunch_start: float = settings.PLANNING_LUNCH_START
    lunch_end: float = settings.PLANNING_LUNCH_END
    meeting_window_start: float = settings.PLANNING_MEETING_START
    meeting_window_end: float = settings.PLANNING_MEETING_END
    standard_hours_per_day: float = settings.PLANNING_STANDARD_HOURS
    min_buffer_between_phases: int = settings.PLANNING_MIN_PHASE_BUFFER

    @model_validator(mode="after")
    def validate_windows(self):
        if not (self.workday_start < self.lunch_start < self.lunch_end < self.workday_end):
            raise ValueError("Expected workday_start < lunch_start < lunch_end < workday_end")
        if self.meeting_window_start < self.workday_start or self.meeting_window_end > self.workday_end:
            raise ValueError("Meeting window must fall inside the working day")
        if self.meeting_window_start >= self.meeting_window_end:
            raise ValueError("Meeting window must not be empty")
        if self.standard_hours_per_day <= 0:
            raise ValueError("standard_hours_per_day must be greater than 0")
        return self


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_hour: float
    duration_hours: float

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.start_hour < 0 or self.duration_hours <= 0:
            raise ValueError("A slot needs start_hour >= 0 and duration_hours > 0")
        if self.start_hour + self.duration_hours > 24:
            raise ValueError("A slot cannot run past midnight")
        return self

    @property
    def end_hour(self) -> float:
        return self.start_hour + self.duration_hours


class ExistingBlock(BaseModel):
    """Snapshot of one committed booking for one employee on one day"""

    model_config = ConfigDict(frozen=True)

    start_hour: float
    duration_hours: float

    @property
    def end_hour(self) -> float:
        return self.start_hour + self.duration_hours


class PhaseRequest(BaseModel):
    """One phase of a project as requested by the planning assistant"""

    phase_name: str
    employees: list[str]
    start_date: date
    duration_days: int = Field(ge=1)
    hours_per_day: Optional[float] = Field(default=None, gt=0, le=24)
    distribution: Distribution = Distribution.CONTIGUOUS
    days_per_week: Optional[int] = Field(default=None, ge=1, le=5)
    # People who attend meeting-type phases without working on the project
    attendees: list[str] = Field(default_factory=list)

    @field_validator("employees")
    @classmethod
    def validate_employees(cls, v):
        names = [name.strip() for name in v if name and name.strip()]
        if not names:
            raise ValueError("A phase needs at least one employee")
        return names


class PlacedBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_name: str
    phase_name: str
    discipline: str
    week_start: date
    day_of_week: int = Field(ge=0, le=4)
    start_hour: float
    duration_hours: float


class PlanningResult(BaseModel):
    placed_blocks: list[PlacedBlock] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary_text: str = ""


class PlanProjectRequest(BaseModel):
    """Structured plan_project call"""

    client_name: str
    project_name: str
    project_type: str = "general"
    phases: list[PhaseRequest]
    deadline: Optional[date] = None
    reasoning: Optional[str] = None
    # Push each phase after the previous one instead of using its own start date only
    chain_phases: bool = False

    @field_validator("phases")
    @classmethod
    def validate_phases(cls, v):
        if not v:
            raise ValueError("At least one phase is required")
        return v


class PlanProjectResponse(BaseModel):
    project_number: str
    client_id: int
    client_name: str
    project_name: str
    project_type: str
    deadline: Optional[date] = None
    placed_blocks: list[PlacedBlock]
    warnings: list[str]
    summary_text: str
    reasoning: Optional[str] = None
    planning_instructions: Optional[str] = None


class AvailabilityRequest(BaseModel):
    employees: list[str]
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_range(self):
        if not self.employees:
            raise ValueError("At least one employee is required")
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class LeavePeriod(BaseModel):
    type: str
    start_date: date
    end_date: date
    reason: Optional[str] = None

    class Config:
        from_attributes = True


class EmployeeAvailability(BaseModel):
    employee_name: str
    booked_hours: float = 0
    hours_per_day: dict[date, float] = Field(default_factory=dict)
    leave_periods: list[LeavePeriod] = Field(default_factory=list)
    part_time_day: Optional[str] = None
    error: Optional[str] = None


class AvailabilityResponse(BaseModel):
    start_date: date
    end_date: date
    employees: list[EmployeeAvailability]


class CommitProposalRequest(BaseModel):
    """An approved proposal, sent back by the planner UI"""

    project_number: str
    client_id: int
    project_name: str
    project_type: str = "general"
    deadline: Optional[date] = None
    placed_blocks: list[PlacedBlock]

    @field_validator("placed_blocks")
    @classmethod
    def validate_blocks(cls, v):
        if not v:
            raise ValueError("Nothing to commit: the proposal has no blocks")
        return v


class CommitProposalResponse(BaseModel):
    project_id: int
    project_number: str
    tasks_created: int
