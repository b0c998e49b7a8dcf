"""Fuzzy subsequence matching used by the floating pickers."""

from __future__ import annotations

SCORE_MATCH = 16
GAP_START = -3
GAP_EXTENSION = -1
BONUS_BOUNDARY = 8
BONUS_CAMEL = 7
BONUS_CONSECUTIVE = 4
FIRST_CHAR_MULTIPLIER = 2


def _position_bonus(text: str, index: int) -> int:
    """Bonus for a match landing on ``text[index]``."""
    current = text[index]
    if not current.isalnum():
        return 0
    if index == 0:
        return BONUS_BOUNDARY
    previous = text[index - 1]
    if not previous.isalnum():
        return BONUS_BOUNDARY
    if previous.islower() and current.isupper():
        return BONUS_CAMEL
    if current.isdigit() and not previous.isdigit():
        return BONUS_CAMEL
    return 0


def fuzzy_match(text: str, pattern: str) -> int | None:
    """Score ``pattern`` as a subsequence of ``text``.

    Returns ``None`` when the pattern does not occur as a subsequence,
    otherwise an integer score where higher means a better match.
    Matching is case-insensitive unless the pattern contains an
    uppercase letter. An empty pattern matches everything with score 0.
    """
    if not pattern:
        return 0

    case_sensitive = any(ch.isupper() for ch in pattern)

    def fold(ch: str) -> str:
        return ch if case_sensitive else ch.lower()

    haystack = [fold(ch) for ch in text]
    needle = [fold(ch) for ch in pattern]

    remaining = iter(haystack)
    if not all(ch in remaining for ch in needle):
        return None

    bonuses = [_position_bonus(text, j) for j in range(len(text))]

    previous_row: list[int | None] | None = None
    for i, pattern_char in enumerate(needle):
        row: list[int | None] = [None] * len(haystack)
        gap: int | None = None
        for j, text_char in enumerate(haystack):
            if previous_row is not None:
                if gap is not None:
                    gap += GAP_EXTENSION
                if j >= 2 and previous_row[j - 2] is not None:
                    candidate = previous_row[j - 2] + GAP_START
                    if gap is None or candidate > gap:
                        gap = candidate
            if text_char != pattern_char:
                continue
            multiplier = FIRST_CHAR_MULTIPLIER if i == 0 else 1
            base = SCORE_MATCH + bonuses[j] * multiplier
            if previous_row is None:
                row[j] = base
                continue
            best = gap
            if j >= 1 and previous_row[j - 1] is not None:
                consecutive = previous_row[j - 1] + BONUS_CONSECUTIVE
                if best is None or consecutive > best:
                    best = consecutive
            if best is not None:
                row[j] = best + base
        previous_row = row

    return max(score for score in previous_row if score is not None)