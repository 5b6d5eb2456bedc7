from datetime import date

import pytest

from app.domain.planning.availability import AvailabilityOracle
from app.domain.planning.bookings import BookingIndex
from app.domain.planning.scheduler import PhaseScheduler
from app.domain.planning.schemas import Distribution, PhaseKind
from app.domain.planning.store import BookingEntry, LeaveEntry, PlanningSnapshot

MONDAY = date(2025, 3, 3)


@pytest.fixture
def schedule(config):
    def _schedule(phase, store=None, kind=PhaseKind.NORMAL, deadline=None, discipline="Productie"):
        store = store or PlanningSnapshot()
        scheduler = PhaseScheduler(config, AvailabilityOracle(store), BookingIndex(store))
        return scheduler.schedule(phase, kind=kind, discipline=discipline, first_start=MONDAY, deadline=deadline)

    return _schedule


def days(outcome):
    return [(b.week_start, b.day_of_week) for b in outcome.blocks]


def test_contiguous_skips_the_weekend(schedule, make_phase):
    phase = make_phase(employees=["Anna"], start_date=date(2025, 3, 6), duration_days=3)
    outcome = schedule(phase)
    assert days(outcome) == [(MONDAY, 3), (MONDAY, 4), (date(2025, 3, 10), 0)]
    assert outcome.warnings == []


def test_contiguous_start_on_saturday_begins_monday(schedule, make_phase):
    outcome = schedule(make_phase(employees=["Anna"], start_date=date(2025, 3, 8), duration_days=1))
    assert days(outcome) == [(date(2025, 3, 10), 0)]


def test_contiguous_stops_at_deadline(schedule, make_phase):
    phase = make_phase(employees=["Anna"], duration_days=5)
    outcome = schedule(phase, deadline=date(2025, 3, 5))
    assert days(outcome) == [(MONDAY, 0), (MONDAY, 1)]
    assert len(outcome.warnings) == 1
    assert "not all days fit before deadline 2025-03-05" in outcome.warnings[0]
    assert "2 of 5" in outcome.warnings[0]


def test_per_week_one_day_over_three_weeks(schedule, make_phase):
    phase = make_phase(
        employees=["Anna"],
        duration_days=3,
        distribution=Distribution.PER_WEEK,
        days_per_week=1,
    )
    outcome = schedule(phase)
    assert days(outcome) == [(MONDAY, 0), (date(2025, 3, 10), 0), (date(2025, 3, 17), 0)]
    assert outcome.days_attempted == 3


def test_per_week_counts_warned_days_as_attempts(schedule, make_phase):
    store = PlanningSnapshot(leave=(LeaveEntry("Anna", date(2025, 3, 10), date(2025, 3, 10)),))
    phase = make_phase(
        employees=["Anna"],
        duration_days=3,
        distribution=Distribution.PER_WEEK,
        days_per_week=1,
    )
    outcome = schedule(phase, store=store)
    assert outcome.days_attempted == 3
    assert len(outcome.blocks) + len(outcome.warnings) == 3
    assert all(b.day_of_week <= 4 for b in outcome.blocks)


def test_per_week_last_week_takes_the_remainder(schedule, make_phase):
    phase = make_phase(
        employees=["Anna"],
        start_date=date(2025, 3, 5),
        duration_days=3,
        distribution=Distribution.PER_WEEK,
        days_per_week=2,
    )
    outcome = schedule(phase)
    assert days(outcome) == [(MONDAY, 2), (MONDAY, 3), (date(2025, 3, 10), 0)]


def test_per_week_feedback_is_pinned_to_thursday_and_friday(schedule, make_phase):
    phase = make_phase(
        phase_name="Feedback ronde",
        employees=["Anna"],
        duration_days=4,
        distribution=Distribution.PER_WEEK,
        days_per_week=2,
    )
    outcome = schedule(phase, kind=PhaseKind.FEEDBACK)
    assert days(outcome) == [
        (MONDAY, 3),
        (MONDAY, 4),
        (date(2025, 3, 10), 3),
        (date(2025, 3, 10), 4),
    ]


def test_per_week_does_not_spill_into_next_week(schedule, make_phase):
    phase = make_phase(
        employees=["Anna"],
        start_date=date(2025, 3, 7),
        duration_days=3,
        distribution=Distribution.PER_WEEK,
        days_per_week=3,
    )
    outcome = schedule(phase)
    assert days(outcome) == [(MONDAY, 4)]
    assert outcome.warnings == ["Shoot: 2 of 3 days did not fit in 1 week(s) of 3 day(s)"]


def test_per_week_stops_at_deadline(schedule, make_phase):
    phase = make_phase(
        employees=["Anna"],
        duration_days=3,
        distribution=Distribution.PER_WEEK,
        days_per_week=1,
    )
    outcome = schedule(phase, deadline=date(2025, 3, 12))
    assert days(outcome) == [(MONDAY, 0), (date(2025, 3, 10), 0)]
    assert "not all days fit before deadline" in outcome.warnings[0]


def test_last_week_without_deadline_places_nothing(schedule, make_phase):
    outcome = schedule(make_phase(distribution=Distribution.LAST_WEEK))
    assert outcome.blocks == []
    assert len(outcome.warnings) == 1
    assert "needs a project deadline" in outcome.warnings[0]


def test_last_week_starts_seven_days_before_deadline(schedule, make_phase):
    phase = make_phase(employees=["Anna"], duration_days=3, distribution=Distribution.LAST_WEEK)
    outcome = schedule(phase, deadline=date(2025, 3, 14))
    assert days(outcome) == [(MONDAY, 4), (date(2025, 3, 10), 0), (date(2025, 3, 10), 1)]
    assert outcome.warnings == []


def test_last_week_is_cut_short_by_deadline(schedule, make_phase):
    phase = make_phase(employees=["Anna"], duration_days=10, distribution=Distribution.LAST_WEEK)
    outcome = schedule(phase, deadline=date(2025, 3, 17))
    assert len(outcome.blocks) == 5
    assert {b.week_start for b in outcome.blocks} == {date(2025, 3, 10)}
    assert "not all days fit before deadline 2025-03-17" in outcome.warnings[0]


def test_part_time_day_is_skipped_with_warning(schedule, make_phase):
    store = PlanningSnapshot(part_time_days={"Anna": "friday"})
    phase = make_phase(employees=["Anna", "Bram"], start_date=date(2025, 3, 7), duration_days=1)
    outcome = schedule(phase, store=store)
    assert [b.employee_name for b in outcome.blocks] == ["Bram"]
    assert outcome.warnings == ["Anna does not work on 2025-03-07 (part-time)"]


def test_no_free_slot_is_a_warning(schedule, make_phase):
    store = PlanningSnapshot(existing=(BookingEntry("Anna", MONDAY, 0, 14, 2),))
    outcome = schedule(make_phase(employees=["Anna"], duration_days=1), store=store)
    assert outcome.blocks == []
    assert outcome.warnings == ["No free slot for Anna on 2025-03-03"]


def test_partial_blocks_stack_around_existing_bookings(schedule, make_phase):
    store = PlanningSnapshot(existing=(BookingEntry("Anna", MONDAY, 0, 9, 2),))
    outcome = schedule(make_phase(employees=["Anna"], duration_days=1, hours_per_day=3), store=store)
    assert outcome.blocks[0].start_hour == 14
    assert outcome.summary_lines == ["  Anna: wk1 mon 14:00-17:00"]


def test_meeting_phase_uses_meeting_window_and_attendees(schedule, make_phase):
    phase = make_phase(
        phase_name="Kick-off",
        employees=["Anna"],
        duration_days=1,
        hours_per_day=1,
        attendees=["Carla", "Anna"],
    )
    outcome = schedule(phase, kind=PhaseKind.MEETING, discipline="Intern/Review")
    assert [(b.employee_name, b.start_hour, b.discipline) for b in outcome.blocks] == [
        ("Anna", 10, "Intern/Review"),
        ("Carla", 10, "Meeting"),
    ]
    assert outcome.summary_lines == [
        "  Anna: wk1 mon 10:00-11:00 (meeting)",
        "  Carla (attendee): wk1 mon 10:00-11:00 (meeting)",
    ]


def test_attendees_are_ignored_for_normal_phases(schedule, make_phase):
    phase = make_phase(employees=["Anna"], duration_days=1, attendees=["Carla"])
    outcome = schedule(phase)
    assert [b.employee_name for b in outcome.blocks] == ["Anna"]


def test_meeting_without_slot_names_the_window(schedule, make_phase):
    store = PlanningSnapshot(existing=(BookingEntry("Anna", MONDAY, 0, 9, 9),))
    phase = make_phase(phase_name="Presentatie", employees=["Anna"], duration_days=1, hours_per_day=1)
    outcome = schedule(phase, store=store, kind=PhaseKind.MEETING)
    assert outcome.warnings == ["No meeting slot (10:00-17:00) for Anna on 2025-03-03"]


def test_next_free_day_follows_last_attempt(schedule, make_phase):
    outcome = schedule(make_phase(duration_days=2))
    assert outcome.next_free_day == date(2025, 3, 5)
