"""Availability oracle - leave and part-time checks per employee per day.

Lookups fail open: if the store raises, the employee is reported as
``LOOKUP_FAILED`` which planning treats as available. A broken leave table
should not silently block every booking.
"""

import logging
from datetime import date
from enum import Enum
from typing import NamedTuple, Optional

from .calendar import weekday_matches
from .store import PlanningStore

logger = logging.getLogger(__name__)


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    ON_LEAVE = "on_leave"
    PART_TIME_OFF = "part_time_off"
    LOOKUP_FAILED = "lookup_failed"


class AvailabilityCheck(NamedTuple):
    status: AvailabilityStatus
    detail: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status in (AvailabilityStatus.AVAILABLE, AvailabilityStatus.LOOKUP_FAILED)


class AvailabilityOracle:
    def __init__(self, store: PlanningStore):
        self.store = store

    def check(self, employee: str, day: date) -> AvailabilityCheck:
        """Leave first, then the recurring part-time day.

        Each lookup is guarded on its own, so a failing leave table still
        lets the part-time day block. ``LOOKUP_FAILED`` is only returned when
        nothing blocking was found.
        """
        failure = None
        try:
            if self.store.has_approved_leave(employee, day):
                return AvailabilityCheck(AvailabilityStatus.ON_LEAVE)
        except Exception as e:
            logger.warning(f"⚠️ Leave lookup failed for {employee} on {day}, assuming no leave: {e}")
            failure = str(e)

        try:
            part_time_day = self.store.part_time_day(employee)
        except Exception as e:
            logger.warning(f"⚠️ Part-time lookup failed for {employee}, assuming working day: {e}")
            part_time_day = None
            failure = failure or str(e)

        if part_time_day and weekday_matches(day, part_time_day):
            return AvailabilityCheck(AvailabilityStatus.PART_TIME_OFF, part_time_day)
        if failure:
            return AvailabilityCheck(AvailabilityStatus.LOOKUP_FAILED, failure)
        return AvailabilityCheck(AvailabilityStatus.AVAILABLE)

    def has_approved_leave(self, employee: str, day: date) -> bool:
        return self.check(employee, day).status == AvailabilityStatus.ON_LEAVE

    def is_fixed_part_time_off(self, employee: str, day: date) -> bool:
        try:
            part_time_day = self.store.part_time_day(employee)
        except Exception as e:
            logger.warning(f"⚠️ Part-time lookup failed for {employee}, assuming working day: {e}")
            return False
        return bool(part_time_day) and weekday_matches(day, part_time_day)
