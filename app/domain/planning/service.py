"""Planning service - Business logic around the planning engine"""

import logging
import time
from collections import defaultdict
from datetime import timedelta
from typing import Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import CLIENT_MATCH_THRESHOLD
from ...models import Client, PlanningConfiguration
from ...shared.matching import best_name_match
from .planner import ProjectPlanner
from .repository import PlanningRepository
from .schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    CommitProposalRequest,
    CommitProposalResponse,
    EmployeeAvailability,
    LeavePeriod,
    PlanProjectRequest,
    PlanProjectResponse,
    WorkConfig,
)
from .store import SqlPlanningStore

logger = logging.getLogger(__name__)

CONFIG_COLUMNS = {
    "workday_start": "workday_start",
    "workday_end": "workday_end",
    "lunch_start": "lunch_start",
    "lunch_end": "lunch_end",
    "meeting_window_start": "meeting_start",
    "meeting_window_end": "meeting_end",
    "standard_hours_per_day": "standard_hours_per_day",
    "min_buffer_between_phases": "min_buffer_between_phases",
}


def generate_project_number() -> str:
    """Project number from the last six digits of the current millisecond timestamp"""
    return f"P-{str(int(time.time() * 1000))[-6:]}"


class PlanningService:
    """Service layer for planning proposals"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PlanningRepository()

    def _read_configuration(self) -> Optional[PlanningConfiguration]:
        try:
            return self.repo.get_configuration(self.db)
        except SQLAlchemyError as e:
            logger.warning(f"⚠️ Could not load planning configuration, using defaults: {e}")
            return None

    @staticmethod
    def _config_from_row(row: Optional[PlanningConfiguration]) -> WorkConfig:
        """Build the work config, falling back to defaults per column"""
        if not row:
            logger.info("Planning configuration not found, using defaults")
            return WorkConfig()

        overrides = {
            field: getattr(row, column)
            for field, column in CONFIG_COLUMNS.items()
            if getattr(row, column) is not None
        }
        try:
            return WorkConfig(**overrides)
        except ValidationError as e:
            logger.warning(f"⚠️ Invalid planning configuration, using defaults: {e}")
            return WorkConfig()

    def load_config(self) -> WorkConfig:
        """Read the planning configuration, falling back to defaults"""
        return self._config_from_row(self._read_configuration())

    def get_config_overview(self) -> dict:
        row = self._read_configuration()
        return {
            "config": self._config_from_row(row).model_dump(),
            "phase_templates": (row.phase_templates if row else None) or [],
            "extra_instructions": row.extra_instructions if row else None,
        }

    def resolve_client(self, client_name: str) -> Client:
        """Find a client by partial name, then by fuzzy similarity"""
        term = client_name.strip()
        if not term:
            raise HTTPException(status_code=400, detail="Client name is required")

        matches = self.repo.search_clients(self.db, term, limit=1)
        if matches:
            return matches[0]

        client = best_name_match(
            term,
            self.repo.get_all_clients(self.db),
            lambda c: c.name,
            threshold=CLIENT_MATCH_THRESHOLD,
        )
        if client:
            logger.info(f"🔎 Fuzzy matched client '{client_name}' to '{client.name}'")
            return client

        logger.warning(f"⚠️ Client not found: {client_name}")
        raise HTTPException(
            status_code=404,
            detail=f'Could not find client "{client_name}". Look up the client first or create a new one.',
        )

    def plan_project(self, data: PlanProjectRequest) -> PlanProjectResponse:
        """Build a planning proposal; nothing is written to the database"""
        client = self.resolve_client(data.client_name)
        project_number = generate_project_number()
        logger.info(
            f"📥 Planning project {project_number} '{data.project_name}' for {client.name}: "
            f"{len(data.phases)} phase(s), deadline {data.deadline}"
        )

        planner = ProjectPlanner(self.load_config(), SqlPlanningStore(self.db))
        result = planner.plan(data.phases, deadline=data.deadline, chain_phases=data.chain_phases)

        return PlanProjectResponse(
            project_number=project_number,
            client_id=client.id,
            client_name=client.name,
            project_name=data.project_name,
            project_type=data.project_type,
            deadline=data.deadline,
            placed_blocks=result.placed_blocks,
            warnings=result.warnings,
            summary_text=result.summary_text,
            reasoning=data.reasoning,
            planning_instructions=client.planning_instructions,
        )

    def availability_overview(self, data: AvailabilityRequest) -> AvailabilityResponse:
        """Booked hours and leave per employee for a date range"""
        employees = []
        for name in data.employees:
            try:
                tasks = self.repo.get_tasks_in_range(self.db, name, data.start_date, data.end_date)
                leave = self.repo.get_approved_leave(self.db, name, data.start_date, data.end_date)
                profile = self.repo.find_employee(self.db, name)
            except SQLAlchemyError as e:
                logger.error(f"❌ Failed to load availability for {name}: {e}")
                employees.append(EmployeeAvailability(employee_name=name, error="Could not load availability"))
                continue

            per_day = defaultdict(float)
            for task in tasks:
                per_day[task.week_start + timedelta(days=task.day_of_week)] += task.duration_hours

            employees.append(
                EmployeeAvailability(
                    employee_name=name,
                    booked_hours=sum(per_day.values()),
                    hours_per_day=dict(sorted(per_day.items())),
                    leave_periods=[LeavePeriod.model_validate(record) for record in leave],
                    part_time_day=profile.part_time_day if profile else None,
                )
            )

        return AvailabilityResponse(start_date=data.start_date, end_date=data.end_date, employees=employees)

    def commit_proposal(self, data: CommitProposalRequest) -> CommitProposalResponse:
        """Persist an approved proposal as a project with its tasks"""
        client = self.repo.get_client_by_id(self.db, data.client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")

        if self.repo.get_project_by_number(self.db, data.project_number):
            raise HTTPException(status_code=400, detail=f"Project {data.project_number} already exists")

        task_rows = [
            {
                "employee_name": block.employee_name,
                "phase_name": block.phase_name,
                "discipline": block.discipline,
                "work_type": block.phase_name,
                "week_start": block.week_start,
                "day_of_week": block.day_of_week,
                "start_hour": block.start_hour,
                "duration_hours": block.duration_hours,
                "plan_status": "planned",
            }
            for block in data.placed_blocks
        ]
        project = self.repo.create_project_with_tasks(
            self.db,
            task_rows,
            project_number=data.project_number,
            client_id=client.id,
            description=data.project_name,
            project_type=data.project_type,
            deadline=data.deadline,
            status="active",
        )
        logger.info(f"✅ Committed project {project.project_number} with {len(task_rows)} tasks")
        return CommitProposalResponse(
            project_id=project.id,
            project_number=project.project_number,
            tasks_created=len(task_rows),
        )
