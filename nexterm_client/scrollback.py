"""Scrollback history ring buffer with regular-expression search."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterator, Sequence
from typing import Any


def line_text(line: Sequence[Any]) -> str:
    """Join a line's characters into text with trailing whitespace removed.

    Items may be single-character strings or cell objects with a ``ch``
    attribute.
    """
    return "".join(getattr(cell, "ch", cell) for cell in line).rstrip()


def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error:
        return None


class Scrollback:
    """Fixed-capacity history of lines; the oldest line is dropped first."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("scrollback capacity must be positive")
        self.capacity = capacity
        self._lines: deque[Sequence[Any]] = deque(maxlen=capacity)

    def push_line(self, line: Sequence[Any]) -> None:
        """Append a line, overwriting the oldest one when full."""
        self._lines.append(line)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Sequence[Any]]:
        return iter(self._lines)

    def get(self, index: int) -> Sequence[Any] | None:
        """Return the line at ``index`` (0 is the oldest), or None."""
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def search(self, pattern: str) -> list[tuple[int, int, int]]:
        """Find every match as ``(row, start_col, end_col)``.

        An invalid pattern yields no results.
        """
        regex = _compile(pattern)
        if regex is None:
            return []
        return [
            (row, match.start(), match.end())
            for row, line in enumerate(self._lines)
            for match in regex.finditer(line_text(line))
        ]

    def _first_matching(self, pattern: str, rows: Iterator[int]) -> int | None:
        if not pattern or not self._lines:
            return None
        regex = _compile(pattern)
        if regex is None:
            return None
        return next(
            (row for row in rows if regex.search(line_text(self._lines[row]))),
            None,
        )

    def search_next(self, pattern: str, from_row: int) -> int | None:
        """Row of the first match at or after ``from_row``, wrapping around."""
        count = len(self._lines)
        rows = ((from_row + offset) % count for offset in range(count)) if count else iter(())
        return self._first_matching(pattern, rows)

    def search_prev(self, pattern: str, before_row: int) -> int | None:
        """Row of the first match before ``before_row``, searching backwards."""
        count = len(self._lines)
        rows = (
            ((before_row - offset) % count for offset in range(1, count + 1))
            if count
            else iter(())
        )
        return self._first_matching(pattern, rows)