"""
Planning Domain

Automated slot finding and task placement for the planning assistant.

Layers, leaf first:
- calendar.py      ISO week arithmetic for the Mon-Fri grid
- availability.py  leave and part-time checks (fail-open)
- bookings.py      committed blocks per employee per day
- slots.py         earliest free slot (full day, partial, meeting)
- scheduler.py     per-phase placement by distribution mode
- planner.py       runs all phases of a project into one proposal
- service.py       config, client lookup, availability overview, commit
- router.py        /planning endpoints
"""

from .router import router

__all__ = ["router"]
