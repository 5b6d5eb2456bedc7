"""Phase scheduler - places the blocks of one phase into the weekly grid.

A phase asks for ``duration_days`` working days per employee. The
distribution mode decides which dates are tried:

* contiguous: consecutive working days from the start date
* per_week:   ``days_per_week`` days in each week, feedback rounds on Thu/Fri
* last_week:  consecutive working days in the final week before the deadline

Every tried date gets one attempt per employee. A failed attempt (leave,
part-time day, no free slot) becomes a warning and is not retried later.
"""

import logging
import math
from datetime import date, timedelta
from typing import Optional

from .availability import AvailabilityOracle, AvailabilityStatus
from .bookings import BookingIndex
from .calendar import (
    DAY_ABBREVIATIONS,
    THURSDAY,
    day_index,
    format_hour,
    monday_of,
    next_weekday,
)
from .classifier import ATTENDEE_DISCIPLINE
from .schemas import Distribution, ExistingBlock, PhaseKind, PhaseRequest, PlacedBlock, WorkConfig
from .slots import find_meeting_slot, find_slot

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# Blocks placed during the current run, per (employee, date)
ProposedBlocks = dict[tuple[str, date], list[ExistingBlock]]


class PhaseOutcome:
    """Blocks, warnings and summary lines produced for one phase"""

    def __init__(self, start: date):
        self.blocks: list[PlacedBlock] = []
        self.warnings: list[str] = []
        self.summary_lines: list[str] = []
        self.days_attempted = 0
        # Day after the last attempted date, used to chain the next phase
        self.next_free_day = start


class PhaseScheduler:
    def __init__(self, config: WorkConfig, oracle: AvailabilityOracle, booking_index: BookingIndex):
        self.config = config
        self.oracle = oracle
        self.booking_index = booking_index

    def schedule(
        self,
        phase: PhaseRequest,
        kind: PhaseKind,
        discipline: str,
        first_start: date,
        deadline: Optional[date] = None,
        start_date: Optional[date] = None,
        proposed: Optional[ProposedBlocks] = None,
    ) -> PhaseOutcome:
        """Place all blocks for ``phase``.

        ``first_start`` is the start of the project and only numbers weeks in
        the summary. ``start_date`` overrides the phase's own start date.
        ``proposed`` holds blocks placed earlier in the same run; it is checked
        next to the committed bookings and extended with every new block.
        """
        start = start_date or phase.start_date
        outcome = PhaseOutcome(start)
        if proposed is None:
            proposed = {}
        context = _DayContext(phase, kind, discipline, first_start, outcome, proposed)

        if phase.distribution == Distribution.PER_WEEK:
            self._schedule_per_week(context, start, deadline)
        elif phase.distribution == Distribution.LAST_WEEK:
            self._schedule_last_week(context, deadline)
        else:
            self._schedule_contiguous(context, start, deadline)

        logger.info(
            f"📅 Phase '{phase.phase_name}' ({phase.distribution.value}, {kind.value}): "
            f"{len(outcome.blocks)} blocks, {len(outcome.warnings)} warnings"
        )
        return outcome

    # ------------------------------------------------------------------
    # Distribution modes
    # ------------------------------------------------------------------

    def _schedule_contiguous(self, context: "_DayContext", start: date, deadline: Optional[date]) -> None:
        day = start
        for _ in range(context.phase.duration_days):
            day = next_weekday(day)
            if deadline and day >= deadline:
                self._warn_deadline(context, deadline)
                return
            self._attempt_day(context, day)
            day += ONE_DAY

    def _schedule_per_week(self, context: "_DayContext", start: date, deadline: Optional[date]) -> None:
        phase = context.phase
        days_per_week = phase.days_per_week or 1
        total_weeks = math.ceil(phase.duration_days / days_per_week)
        feedback = context.kind == PhaseKind.FEEDBACK
        remaining = phase.duration_days
        anchor = start

        for _ in range(total_weeks):
            day = next_weekday(anchor)
            week_monday = monday_of(day)
            if feedback and day.weekday() < THURSDAY:
                # Feedback rounds are pinned to Thursday/Friday
                day = week_monday + timedelta(days=THURSDAY)

            target = min(days_per_week, remaining)
            placed = 0
            while placed < target and monday_of(day) == week_monday:
                if deadline and day >= deadline:
                    self._warn_deadline(context, deadline)
                    return
                self._attempt_day(context, day)
                placed += 1
                remaining -= 1
                day = next_weekday(day + ONE_DAY)

            anchor = week_monday + timedelta(days=7)
            if feedback:
                anchor += timedelta(days=THURSDAY)

        if remaining > 0:
            context.outcome.warnings.append(
                f"{phase.phase_name}: {remaining} of {phase.duration_days} days did not fit "
                f"in {total_weeks} week(s) of {days_per_week} day(s)"
            )

    def _schedule_last_week(self, context: "_DayContext", deadline: Optional[date]) -> None:
        phase = context.phase
        if deadline is None:
            context.outcome.warnings.append(
                f"{phase.phase_name}: distribution 'last_week' needs a project deadline, phase not scheduled"
            )
            return

        day = next_weekday(deadline - timedelta(days=7))
        for _ in range(phase.duration_days):
            day = next_weekday(day)
            if day >= deadline:
                self._warn_deadline(context, deadline)
                return
            self._attempt_day(context, day)
            day += ONE_DAY

    def _warn_deadline(self, context: "_DayContext", deadline: date) -> None:
        phase = context.phase
        context.outcome.warnings.append(
            f"{phase.phase_name}: not all days fit before deadline {deadline.isoformat()} "
            f"({context.outcome.days_attempted} of {phase.duration_days} days planned)"
        )

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _attempt_day(self, context: "_DayContext", day: date) -> None:
        phase = context.phase
        hours = phase.hours_per_day or self.config.standard_hours_per_day

        for employee in phase.employees:
            self._attempt(context, employee, day, hours)

        if context.kind == PhaseKind.MEETING:
            for attendee in phase.attendees:
                if attendee in phase.employees:
                    continue
                self._attempt(context, attendee, day, hours, attendee=True)

        context.outcome.days_attempted += 1
        context.outcome.next_free_day = day + ONE_DAY

    def _attempt(
        self,
        context: "_DayContext",
        employee: str,
        day: date,
        hours: float,
        attendee: bool = False,
    ) -> None:
        outcome = context.outcome
        label = f"{employee} (attendee)" if attendee else employee

        availability = self.oracle.check(employee, day)
        if availability.status == AvailabilityStatus.ON_LEAVE:
            outcome.warnings.append(f"{label} is on leave on {day.isoformat()}")
            return
        if availability.status == AvailabilityStatus.PART_TIME_OFF:
            outcome.warnings.append(f"{label} does not work on {day.isoformat()} (part-time)")
            return

        key = (employee, day)
        bookings = sorted(
            self.booking_index.bookings_on(employee, day) + context.proposed.get(key, []),
            key=lambda b: b.start_hour,
        )
        meeting = attendee or context.kind == PhaseKind.MEETING
        if attendee:
            slot = find_meeting_slot(bookings, self.config, hours)
        else:
            slot = find_slot(bookings, self.config, hours, context.kind)

        if slot is None:
            if meeting:
                window = f"{format_hour(self.config.meeting_window_start)}-{format_hour(self.config.meeting_window_end)}"
                outcome.warnings.append(f"No meeting slot ({window}) for {label} on {day.isoformat()}")
            else:
                outcome.warnings.append(f"No free slot for {label} on {day.isoformat()}")
            return

        column = day_index(day)
        outcome.blocks.append(
            PlacedBlock(
                employee_name=employee,
                phase_name=context.phase.phase_name,
                discipline=ATTENDEE_DISCIPLINE if attendee else context.discipline,
                week_start=monday_of(day),
                day_of_week=column,
                start_hour=slot.start_hour,
                duration_hours=slot.duration_hours,
            )
        )
        context.proposed.setdefault(key, []).append(
            ExistingBlock(start_hour=slot.start_hour, duration_hours=slot.duration_hours)
        )
        week_number = (day - context.first_start).days // 7 + 1
        suffix = " (meeting)" if meeting else ""
        outcome.summary_lines.append(
            f"  {label}: wk{week_number} {DAY_ABBREVIATIONS[column]} "
            f"{format_hour(slot.start_hour)}-{format_hour(slot.end_hour)}{suffix}"
        )


class _DayContext:
    """Per-phase values shared by every placement attempt"""

    def __init__(
        self,
        phase: PhaseRequest,
        kind: PhaseKind,
        discipline: str,
        first_start: date,
        outcome: PhaseOutcome,
        proposed: ProposedBlocks,
    ):
        self.phase = phase
        self.kind = kind
        self.discipline = discipline
        self.first_start = first_start
        self.outcome = outcome
        self.proposed = proposed
