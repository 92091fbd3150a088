"""
Fuzzy name matching for the problem and to-do searches.

A candidate matches when the query is a substring of its name, or when the
best-aligned window of the name is similar enough to the query (so "two smu"
still finds "Two Sum").
"""

from difflib import SequenceMatcher
from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

DEFAULT_THRESHOLD = 0.75


def partial_ratio(query: str, text: str) -> float:
    """Similarity of ``query`` to the best window of ``text`` (0.0 - 1.0).

    Case-insensitive. Substring hits score 1.0.
    """
    needle = query.strip().lower()
    haystack = text.lower()
    if not needle:
        return 0.0
    if needle in haystack:
        return 1.0
    if len(haystack) <= len(needle):
        return SequenceMatcher(None, needle, haystack).ratio()

    window = len(needle)
    best = 0.0
    for start in range(len(haystack) - window + 1):
        score = SequenceMatcher(None, needle, haystack[start : start + window]).ratio()
        if score > best:
            best = score
            if best == 1.0:
                break
    return best


def fuzzy_filter(
    query: str,
    items: Sequence[T],
    key: Callable[[T], str],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[T]:
    """Return items whose key matches ``query``, best score first.

    Ties keep the input order.
    """
    scored: List[Tuple[float, int, T]] = []
    for position, item in enumerate(items):
        score = partial_ratio(query, key(item))
        if score >= threshold:
            scored.append((score, position, item))
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [item for _, _, item in scored]
