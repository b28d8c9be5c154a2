"""Fuzzy matching for the branch search prompt."""

from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def _term_score(term: str, text: str) -> float:
    """Score one lowercase term against lowercase text, 0.0 when it does not match."""
    if term in text:
        return 1.0

    # In-order subsequence, scored by how tightly the characters cluster
    start: Optional[int] = None
    position = 0
    for char in term:
        position = text.find(char, position)
        if position < 0:
            return 0.0
        if start is None:
            start = position
        position += 1
    return len(term) / (position - start)


def score(query: str, text: str) -> float:
    """Score how well text matches query.

    Every whitespace-separated term of the query must appear in the text,
    either verbatim or as an in-order subsequence. Returns the mean term score
    in ``(0, 1]``, or 0.0 when any term is missing.
    """
    terms = query.lower().split()
    if not terms:
        return 1.0
    haystack = text.lower()
    scores = [_term_score(term, haystack) for term in terms]
    if not all(scores):
        return 0.0
    return sum(scores) / len(scores)


def fuzzy_filter(query: str, candidates: Sequence[T], key: Callable[[T], str] = str) -> list[T]:
    """Return candidates matching query, best first.

    Ties keep their original order. An empty query returns every candidate.
    """
    if not query.strip():
        return list(candidates)
    scored = [(score(query, key(candidate)), candidate) for candidate in candidates]
    matches = [pair for pair in scored if pair[0] > 0]
    matches.sort(key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in matches]
