"""Phase-name classification.

Phase names are free text ("Kick-off meeting", "Offline edit", "Shoot dag 1"),
so discipline and kind are inferred from keywords. Rules are checked in order
and the first match wins.
"""

from typing import Optional

from .schemas import PhaseKind

FALLBACK_DISCIPLINE = "Algemeen"
ATTENDEE_DISCIPLINE = "Meeting"

# Hours per day at or below which a phase is treated as a feedback round
FEEDBACK_MAX_HOURS = 2

DISCIPLINE_RULES: list[tuple[tuple[str, ...], str]] = [
    (("concept",), "Conceptontwikkeling"),
    (("strateg",), "Strategy"),
    (("creati",), "Creative team"),
    (("product", "shoot"), "Productie"),
    (("edit", "montage"), "Studio"),
    (("vfx", "online"), "Studio"),
    (("review", "meeting"), "Intern/Review"),
]

MEETING_KEYWORDS = (
    "presentatie",
    "presentation",
    "meeting",
    "kick-off",
    "kick off",
    "kickoff",
    "tussentijds",
)

FEEDBACK_KEYWORDS = (
    "feedback",
    "review",
    "revisie",
    "correctie",
)


def _matches(name: str, keywords: tuple[str, ...]) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in keywords)


def classify_discipline(phase_name: str) -> str:
    for keywords, discipline in DISCIPLINE_RULES:
        if _matches(phase_name, keywords):
            return discipline
    return FALLBACK_DISCIPLINE


def classify_kind(phase_name: str, hours_per_day: Optional[float] = None) -> PhaseKind:
    if _matches(phase_name, MEETING_KEYWORDS):
        return PhaseKind.MEETING
    if _matches(phase_name, FEEDBACK_KEYWORDS):
        return PhaseKind.FEEDBACK
    if hours_per_day is not None and hours_per_day <= FEEDBACK_MAX_HOURS:
        return PhaseKind.FEEDBACK
    return PhaseKind.NORMAL
