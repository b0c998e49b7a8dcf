"""Grid text selection: URL detection, mouse drag, copy mode and context menu."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

Point = tuple[int, int]
Range = tuple[Point, Point]

_URL_PREFIXES = ("https://", "http://")
_URL_TERMINATORS = frozenset("\"'<>)")


def _row_text(row: str | Sequence[Any]) -> str:
    if isinstance(row, str):
        return row
    return "".join(getattr(cell, "ch", cell) for cell in row)


def _is_url_end(ch: str) -> bool:
    return ch.isspace() or ch in _URL_TERMINATORS


@dataclass(frozen=True)
class DetectedUrl:
    """A URL found on a grid row, spanning ``col_start`` up to ``col_end``."""

    row: int
    col_start: int
    col_end: int
    url: str

    def contains(self, col: int, row: int) -> bool:
        """Whether the grid cell ``(col, row)`` lies within this URL."""
        return row == self.row and self.col_start <= col < self.col_end


def detect_urls_in_row(row_index: int, text: str | Sequence[Any]) -> list[DetectedUrl]:
    """Find ``https://`` and ``http://`` URLs on one grid row.

    ``text`` is the row as a string or as a sequence of cells with a ``ch``
    attribute. A URL ends at whitespace, a quote, ``<``, ``>`` or ``)``.
    All ``https://`` URLs are listed before the ``http://`` ones.
    """
    line = _row_text(text)
    urls: list[DetectedUrl] = []
    for prefix in _URL_PREFIXES:
        start = line.find(prefix)
        while start != -1:
            end = next(
                (i for i in range(start, len(line)) if _is_url_end(line[i])),
                len(line),
            )
            if end > start:
                urls.append(DetectedUrl(row_index, start, end, line[start:end]))
            start = line.find(prefix, start + 1)
    return urls


def _ordered(first: Point, second: Point) -> Range:
    """Order two ``(col, row)`` points by row, then column."""
    if (first[1], first[0]) <= (second[1], second[0]):
        return first, second
    return second, first


@dataclass
class MouseSelection:
    """Text selected by dragging the mouse over the grid."""

    is_dragging: bool = False
    start: Point = (0, 0)
    end: Point = (0, 0)

    def begin(self, col: int, row: int) -> None:
        """Start a drag at ``(col, row)``."""
        self.is_dragging = True
        self.start = (col, row)
        self.end = (col, row)

    def update(self, col: int, row: int) -> None:
        """Move the end of the selection while dragging."""
        if self.is_dragging:
            self.end = (col, row)

    def finish(self) -> None:
        """End the drag, keeping the selected range."""
        self.is_dragging = False

    def normalized(self) -> Range | None:
        """The selection as ``(start, end)`` in reading order, or None if empty."""
        if self.start == self.end:
            return None
        return _ordered(self.start, self.end)

    def contains(self, col: int, row: int) -> bool:
        """Whether the cell ``(col, row)`` is inside the selection."""
        selection = self.normalized()
        if selection is None:
            return False
        (start_col, start_row), (end_col, end_row) = selection
        if row < start_row or row > end_row:
            return False
        if row == start_row and row == end_row:
            return start_col <= col <= end_col
        if row == start_row:
            return col >= start_col
        if row == end_row:
            return col <= end_col
        return True


@dataclass
class CopyModeState:
    """Keyboard-driven, vi-like text selection."""

    is_active: bool = False
    cursor_col: int = 0
    cursor_row: int = 0
    selection_start: Point | None = None
    search_query: str | None = None

    def enter(self, cursor_col: int, cursor_row: int) -> None:
        """Activate copy mode with the cursor at the pane's cursor."""
        self.is_active = True
        self.cursor_col = cursor_col
        self.cursor_row = cursor_row
        self.selection_start = None

    def exit(self) -> None:
        """Leave copy mode, dropping any selection and search."""
        self.is_active = False
        self.selection_start = None
        self.search_query = None

    def toggle_selection(self) -> None:
        """Start a selection at the cursor, or drop the current one."""
        if self.selection_start is not None:
            self.selection_start = None
        else:
            self.selection_start = (self.cursor_col, self.cursor_row)

    def normalized_selection(self) -> Range | None:
        """The selection from its start to the cursor, in reading order."""
        if self.selection_start is None:
            return None
        return _ordered(self.selection_start, (self.cursor_col, self.cursor_row))


class ContextMenuAction(enum.Enum):
    """What a context menu entry does when chosen."""

    COPY = "copy"
    PASTE = "paste"
    SELECT_ALL = "select_all"
    SPLIT_VERTICAL = "split_vertical"
    SPLIT_HORIZONTAL = "split_horizontal"
    CLOSE_PANE = "close_pane"
    INLINE_SEARCH = "inline_search"
    OPEN_SETTINGS = "open_settings"
    OPEN_PROFILE = "open_profile"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class ContextMenuItem:
    """One entry of the context menu; ``hint`` is a key shown on the right."""

    label: str
    action: ContextMenuAction
    hint: str = ""
    profile_name: str | None = None

    @classmethod
    def separator(cls) -> ContextMenuItem:
        return cls("", ContextMenuAction.SEPARATOR)

    @property
    def is_separator(self) -> bool:
        return self.action is ContextMenuAction.SEPARATOR


@dataclass
class ContextMenu:
    """The right-click menu, placed at pixel position ``(x, y)``."""

    x: float
    y: float
    items: list[ContextMenuItem] = field(default_factory=list)
    hovered: int | None = None

    @classmethod
    def default(
        cls, x: float, y: float, profiles: Iterable[tuple[str, str]] = ()
    ) -> ContextMenu:
        """The standard menu; ``profiles`` are ``(name, icon)`` pairs."""
        items = [
            ContextMenuItem("Copy", ContextMenuAction.COPY, "Ctrl+C"),
            ContextMenuItem("Paste", ContextMenuAction.PASTE, "Ctrl+V"),
            ContextMenuItem("Select All", ContextMenuAction.SELECT_ALL, "Ctrl+A"),
            ContextMenuItem.separator(),
            ContextMenuItem("Split Vertical", ContextMenuAction.SPLIT_VERTICAL, "Ctrl+B  %"),
            ContextMenuItem(
                "Split Horizontal", ContextMenuAction.SPLIT_HORIZONTAL, 'Ctrl+B  "'
            ),
            ContextMenuItem("Close Pane", ContextMenuAction.CLOSE_PANE, "Ctrl+B  x"),
        ]
        profile_items = [
            ContextMenuItem(
                f"> {name}" if not icon else f"{icon} {name}",
                ContextMenuAction.OPEN_PROFILE,
                profile_name=name,
            )
            for name, icon in profiles
        ]
        if profile_items:
            items.append(ContextMenuItem.separator())
            items.extend(profile_items)
        items.append(ContextMenuItem.separator())
        items.append(ContextMenuItem("Search...", ContextMenuAction.INLINE_SEARCH, "Ctrl+F"))
        items.append(ContextMenuItem("Settings...", ContextMenuAction.OPEN_SETTINGS, "Ctrl+,"))
        return cls(x, y, items)