"""Literal pattern matching over text."""

import re
from typing import Sequence

from .models import PatternMatch


def _compile(pattern: str, case_sensitive: bool) -> re.Pattern:
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(re.escape(pattern), flags)


def contains_pattern(text: str, patterns: Sequence[str], case_sensitive: bool) -> bool:
    """Return True if any pattern occurs in text.

    Patterns are literal strings; regex metacharacters in them have no
    special meaning.
    """
    if not text:
        return False

    for pattern in patterns:
        if not pattern:
            continue
        if _compile(pattern, case_sensitive).search(text):
            return True
    return False


def find_pattern_matches(
    text: str,
    patterns: Sequence[str],
    case_sensitive: bool,
) -> list[PatternMatch]:
    """Find every occurrence of every pattern in text.

    Occurrences are grouped by (pattern, actual text). When matching
    case-insensitively, "NoMerge" and "NOMERGE" found for the pattern
    "nomerge" are reported as two separate entries with their own counts.

    Args:
        text: Text to search.
        patterns: Forbidden patterns, in the order they should be reported.
        case_sensitive: Whether letter case must match exactly.

    Returns:
        List of PatternMatch in first-encountered order. Empty if nothing matched.
    """
    if not text:
        return []

    counts: dict[tuple[str, str], int] = {}

    for pattern in patterns:
        if not pattern:
            continue
        for match in _compile(pattern, case_sensitive).finditer(text):
            key = (pattern, match.group(0))
            counts[key] = counts.get(key, 0) + 1

    return [
        PatternMatch(pattern=pattern, actual_text=actual_text, count=count)
        for (pattern, actual_text), count in counts.items()
    ]


def summarize_matches(matches: Sequence[PatternMatch]) -> tuple[list[str], int]:
    """Return the distinct matched texts (first-seen order) and the total count."""
    seen: list[str] = []
    total = 0
    for match in matches:
        if match.actual_text not in seen:
            seen.append(match.actual_text)
        total += match.count
    return seen, total
