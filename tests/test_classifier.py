import pytest

from app.domain.planning.classifier import FALLBACK_DISCIPLINE, classify_discipline, classify_kind
from app.domain.planning.schemas import PhaseKind


@pytest.mark.parametrize(
    "name, discipline",
    [
        ("Conceptontwikkeling", "Conceptontwikkeling"),
        ("Strategie sessie", "Strategy"),
        ("Creatie", "Creative team"),
        ("Shoot dag 1", "Productie"),
        ("Pre-productie", "Productie"),
        ("Offline edit", "Studio"),
        ("Montage", "Studio"),
        ("VFX", "Studio"),
        ("Interne review", "Intern/Review"),
        ("Kick-off meeting", "Intern/Review"),
    ],
)
def test_discipline_rules(name, discipline):
    assert classify_discipline(name) == discipline


def test_first_matching_rule_wins():
    # "concept" comes before "edit" in the rule table
    assert classify_discipline("Concept edit") == "Conceptontwikkeling"


def test_unknown_name_falls_back():
    assert classify_discipline("Something else") == FALLBACK_DISCIPLINE


@pytest.mark.parametrize(
    "name",
    ["Kick-off", "kickoff klant", "Eindpresentatie", "Client presentation", "Klantmeeting", "Tussentijdse check"],
)
def test_meeting_vocabulary(name):
    assert classify_kind(name) == PhaseKind.MEETING


@pytest.mark.parametrize("name", ["Feedback ronde", "Review", "Revisie 2", "Correcties"])
def test_feedback_vocabulary(name):
    assert classify_kind(name) == PhaseKind.FEEDBACK


def test_meeting_is_checked_before_feedback():
    assert classify_kind("Review meeting") == PhaseKind.MEETING


def test_short_days_are_feedback():
    assert classify_kind("Edit", hours_per_day=2) == PhaseKind.FEEDBACK
    assert classify_kind("Edit", hours_per_day=3) == PhaseKind.NORMAL
    assert classify_kind("Edit") == PhaseKind.NORMAL
