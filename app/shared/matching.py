"""Fuzzy name matching for free-text references to people and clients"""

from difflib import SequenceMatcher
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity score between 0 and 1"""
    a, b = a.lower().strip(), b.lower().strip()
    if not a and not b:
        return 1.0
    return SequenceMatcher(None, a, b).ratio()


def best_name_match(
    term: str,
    candidates: Iterable[T],
    get_name: Callable[[T], str],
    threshold: float = 0.6,
) -> Optional[T]:
    """
    Find the candidate whose name best matches ``term``.

    Both the full name and its first word are compared, so "Anna" matches
    "Anna de Vries". Returns None when no score reaches ``threshold``.
    """
    best = None
    best_score = 0.0
    for candidate in candidates:
        name = get_name(candidate) or ""
        first_word = name.split(" ")[0] if name else ""
        score = max(similarity(term, name), similarity(term, first_word))
        if score > best_score and score >= threshold:
            best = candidate
            best_score = score
    return best
