"""Slot finder - earliest free interval for a block on one day.

All hours are decimal (12.5 = 12:30). Candidate starts are scanned on whole
hours from the beginning of the window, first fit wins.
"""

import math
from typing import Optional, Sequence

from .schemas import ExistingBlock, PhaseKind, TimeSlot, WorkConfig

# Tolerance for float comparisons on decimal hours
EPSILON = 1e-9


def intervals_overlap(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    """Half-open overlap: touching intervals do not overlap"""
    return a_start < b_end and a_end > b_start


def has_conflict(bookings: Sequence[ExistingBlock], start: float, duration: float) -> bool:
    end = start + duration
    return any(intervals_overlap(start, end, b.start_hour, b.end_hour) for b in bookings)


def overlaps_lunch(config: WorkConfig, start: float, end: float) -> bool:
    return intervals_overlap(start, end, config.lunch_start, config.lunch_end)


def find_full_day_slot(bookings: Sequence[ExistingBlock], config: WorkConfig) -> Optional[TimeSlot]:
    """Whole-day block: morning and afternoon must both be free.

    Only two windows are checked: workday start to lunch, and the first whole
    hour after lunch to the end of the day. The returned block starts at the
    beginning of the day and runs to its end, covering lunch visually.
    """
    morning_free = not has_conflict(bookings, config.workday_start, config.lunch_start - config.workday_start)
    afternoon_start = math.ceil(config.lunch_end)
    afternoon_free = not has_conflict(bookings, afternoon_start, config.workday_end - afternoon_start)
    if morning_free and afternoon_free:
        return TimeSlot(start_hour=config.workday_start, duration_hours=config.workday_end - config.workday_start)
    return None


def _scan(
    bookings: Sequence[ExistingBlock],
    config: WorkConfig,
    duration: float,
    window_start: float,
    window_end: float,
    skip_lunch: bool = True,
) -> Optional[TimeSlot]:
    start = window_start
    while start + duration <= window_end + EPSILON:
        end = start + duration
        if not (skip_lunch and overlaps_lunch(config, start, end)) and not has_conflict(bookings, start, duration):
            return TimeSlot(start_hour=start, duration_hours=duration)
        start += 1
    return None


def find_partial_slot(
    bookings: Sequence[ExistingBlock], config: WorkConfig, duration: float
) -> Optional[TimeSlot]:
    return _scan(bookings, config, duration, config.workday_start, config.workday_end)


def find_meeting_slot(
    bookings: Sequence[ExistingBlock],
    config: WorkConfig,
    duration: float,
    allow_lunch: bool = False,
) -> Optional[TimeSlot]:
    """Like a partial block, but restricted to the meeting window.

    ``allow_lunch`` is for client meetings where lunch is part of the meeting.
    """
    return _scan(
        bookings,
        config,
        duration,
        config.meeting_window_start,
        config.meeting_window_end,
        skip_lunch=not allow_lunch,
    )


def find_slot(
    bookings: Sequence[ExistingBlock],
    config: WorkConfig,
    duration: float,
    kind: PhaseKind = PhaseKind.NORMAL,
) -> Optional[TimeSlot]:
    if kind == PhaseKind.MEETING:
        return find_meeting_slot(bookings, config, duration)
    if duration >= config.standard_hours_per_day:
        return find_full_day_slot(bookings, config)
    return find_partial_slot(bookings, config, duration)
