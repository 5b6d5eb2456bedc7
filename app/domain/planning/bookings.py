"""Existing-booking index - committed blocks for one employee on one day"""

import logging
from datetime import date

from .calendar import day_index, monday_of
from .schemas import ExistingBlock
from .store import PlanningStore

logger = logging.getLogger(__name__)


class BookingIndex:
    def __init__(self, store: PlanningStore):
        self.store = store

    def bookings_on(self, employee: str, day: date) -> list[ExistingBlock]:
        """Committed blocks on ``day`` sorted by start hour.

        Blocks proposed earlier in the same run are not included.
        """
        week_start, column = monday_of(day), day_index(day)
        try:
            blocks = self.store.bookings(employee, week_start, column)
        except Exception as e:
            logger.error(f"❌ Error fetching existing blocks for {employee} on {day}: {e}")
            return []
        return sorted(blocks, key=lambda b: b.start_hour)
