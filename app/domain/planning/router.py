"""Planning router - FastAPI endpoints for the planning assistant"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    CommitProposalRequest,
    CommitProposalResponse,
    PlanProjectRequest,
    PlanProjectResponse,
)
from .service import PlanningService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/planning", tags=["Planning"])


def get_planning_service(db: Session = Depends(get_db)) -> PlanningService:
    """Dependency injection for PlanningService"""
    return PlanningService(db)


@router.get("/config")
async def get_planning_config(service: PlanningService = Depends(get_planning_service)):
    """Get the working hours and phase templates used for planning"""
    return service.get_config_overview()


@router.post("/plan-project", response_model=PlanProjectResponse)
async def plan_project(
    data: PlanProjectRequest,
    service: PlanningService = Depends(get_planning_service),
):
    """Build a planning proposal for a new project (nothing is booked yet)"""
    return service.plan_project(data)


@router.post("/availability", response_model=AvailabilityResponse)
async def check_availability(
    data: AvailabilityRequest,
    service: PlanningService = Depends(get_planning_service),
):
    """Get booked hours and approved leave for employees in a date range"""
    return service.availability_overview(data)


@router.post("/commit", response_model=CommitProposalResponse)
async def commit_proposal(
    data: CommitProposalRequest,
    service: PlanningService = Depends(get_planning_service),
):
    """Book an approved proposal into the planning grid"""
    return service.commit_proposal(data)


__all__ = [
    "router",
    "get_planning_config",
    "plan_project",
    "check_availability",
    "commit_proposal",
]
