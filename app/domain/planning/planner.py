"""Project planner - runs the phase scheduler over every phase of a project"""

import logging
from datetime import date, timedelta
from typing import Optional

from .availability import AvailabilityOracle
from .bookings import BookingIndex
from .calendar import next_weekday, working_days_between
from .classifier import classify_discipline, classify_kind
from .scheduler import PhaseScheduler, ProposedBlocks
from .schemas import PhaseRequest, PlanningResult, WorkConfig
from .store import PlanningStore

logger = logging.getLogger(__name__)

# Upper bound for the automatic gap between chained phases
MAX_PHASE_BUFFER_DAYS = 5


class ProjectPlanner:
    """Builds a planning proposal; never writes to the store"""

    def __init__(self, config: WorkConfig, store: PlanningStore):
        self.config = config
        self.scheduler = PhaseScheduler(config, AvailabilityOracle(store), BookingIndex(store))

    def plan(
        self,
        phases: list[PhaseRequest],
        deadline: Optional[date] = None,
        chain_phases: bool = False,
    ) -> PlanningResult:
        result = PlanningResult()
        if not phases:
            return result

        first_start = min(phase.start_date for phase in phases)
        buffer_days = self._phase_buffer(phases, first_start, deadline) if chain_phases else 0
        summary_parts: list[str] = []
        running_date: Optional[date] = None
        # Later phases must not stack on blocks an earlier phase already took
        proposed: ProposedBlocks = {}

        for phase in phases:
            kind = classify_kind(phase.phase_name, phase.hours_per_day)
            discipline = classify_discipline(phase.phase_name)

            start = phase.start_date
            if running_date is not None and running_date > start:
                start = running_date

            summary_parts.append(f"\n{phase.phase_name} (start: {start.day}/{start.month}):")
            outcome = self.scheduler.schedule(
                phase,
                kind=kind,
                discipline=discipline,
                first_start=first_start,
                deadline=deadline,
                start_date=start,
                proposed=proposed,
            )

            result.placed_blocks.extend(outcome.blocks)
            result.warnings.extend(outcome.warnings)
            summary_parts.extend(outcome.summary_lines)

            if chain_phases:
                running_date = self._after_buffer(outcome.next_free_day, buffer_days)

        summary = "\n".join(summary_parts)
        if result.warnings:
            summary += "\n\n⚠️ Warnings:\n" + "\n".join(f"  - {w}" for w in result.warnings)
        result.summary_text = summary

        logger.info(
            f"✅ Planned {len(phases)} phase(s): {len(result.placed_blocks)} blocks, "
            f"{len(result.warnings)} warnings"
        )
        return result

    def _phase_buffer(self, phases: list[PhaseRequest], first_start: date, deadline: Optional[date]) -> int:
        """Working days left between chained phases.

        Spare days up to the deadline are spread evenly over the gaps, capped
        at MAX_PHASE_BUFFER_DAYS and never below the configured minimum.
        """
        if len(phases) < 2:
            return 0
        total_days = sum(phase.duration_days for phase in phases)
        available = working_days_between(first_start, deadline) if deadline else total_days
        spare = max(0, available - total_days)
        per_gap = min(spare // (len(phases) - 1), MAX_PHASE_BUFFER_DAYS)
        return max(self.config.min_buffer_between_phases, per_gap)

    @staticmethod
    def _after_buffer(day: date, buffer_days: int) -> date:
        for _ in range(buffer_days):
            day = next_weekday(day + timedelta(days=1))
        return day
