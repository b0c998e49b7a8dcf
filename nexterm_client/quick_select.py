"""Quick Select mode and the SFTP file transfer dialog."""

from __future__ import annotations

import dataclasses
import re
import string
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

LABEL_CHARS = string.ascii_lowercase

_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"""https?://[^\s<>"'\]]+"""), "url"),
    (re.compile(r"(?:^|[\s(])((?:/[^\s/:]+)+/?)"), "path"),
    (re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}(?::\d+)?\b"), "ip"),
    (re.compile(r"\b[0-9a-f]{7,40}\b"), "hash"),
    (re.compile(r"\b\d+\b"), "num"),
)

_FIELD_NAMES = ("host_name", "local_path", "remote_path")


def _row_text(row: str | Sequence[Any]) -> str:
    if isinstance(row, str):
        return row
    return "".join(getattr(cell, "ch", cell) for cell in row)


@dataclass
class FileTransferDialog:
    """Input state of the SFTP upload/download dialog.

    ``field`` selects the input being edited: 0 is the host name,
    1 the local path and 2 the remote path.
    """

    is_open: bool = False
    mode: str = "upload"
    field: int = 0
    host_name: str = ""
    local_path: str = ""
    remote_path: str = ""

    def _open(self, mode: str) -> None:
        self.mode = mode
        self.field = 0
        self.host_name = ""
        self.local_path = ""
        self.remote_path = ""
        self.is_open = True

    def open_upload(self) -> None:
        """Open the dialog for an upload with every field cleared."""
        self._open("upload")

    def open_download(self) -> None:
        """Open the dialog for a download with every field cleared."""
        self._open("download")

    def close(self) -> None:
        self.is_open = False

    @property
    def _field_name(self) -> str:
        return _FIELD_NAMES[min(self.field, len(_FIELD_NAMES) - 1)]

    @property
    def current_value(self) -> str:
        """Text of the field being edited."""
        return getattr(self, self._field_name)

    def type_char(self, ch: str) -> None:
        """Append ``ch`` to the field being edited."""
        name = self._field_name
        setattr(self, name, getattr(self, name) + ch)

    def delete_char(self) -> None:
        """Remove the last character of the field being edited."""
        name = self._field_name
        setattr(self, name, getattr(self, name)[:-1])

    def next_field(self) -> None:
        self.field = min(self.field + 1, len(_FIELD_NAMES) - 1)

    def prev_field(self) -> None:
        self.field = max(self.field - 1, 0)


@dataclass(frozen=True)
class QuickSelectMatch:
    """A selectable span of a grid row and the label that picks it."""

    row: int
    col_start: int
    col_end: int
    text: str
    label: str


def index_to_label(index: int, total: int) -> str:
    """Label of match ``index`` among ``total``: a..z, then aa, ab, ...

    Raises ValueError when there are too many matches to label.
    """
    base = len(LABEL_CHARS)
    if total <= base:
        return LABEL_CHARS[index % base]
    second, first = divmod(index, base)
    if second == 0:
        return LABEL_CHARS[first]
    if second > base:
        raise ValueError(f"cannot label match {index}: too many matches")
    return LABEL_CHARS[second - 1] + LABEL_CHARS[first]


def find_quick_select_matches(
    rows: Iterable[str | Sequence[Any]],
) -> list[QuickSelectMatch]:
    """Find URLs, paths, IPv4 addresses, hashes and numbers on the grid.

    Rows are strings or sequences of cells with a ``ch`` attribute. Matches
    are listed row by row, and within a row pattern by pattern.
    """
    spans = [
        (row_index, match.start(), match.end(), match.group())
        for row_index, row in enumerate(rows)
        for line in (_row_text(row),)
        for pattern, _kind in _PATTERNS
        for match in pattern.finditer(line)
    ]
    total = len(spans)
    return [
        QuickSelectMatch(row, start, end, text, index_to_label(i, total))
        for i, (row, start, end, text) in enumerate(spans)
    ]


@dataclass
class QuickSelectState:
    """Quick Select mode: labelled matches and the label typed so far."""

    is_active: bool = False
    matches: list[QuickSelectMatch] = dataclasses.field(default_factory=list)
    typed_label: str = ""

    def enter(self, rows: Iterable[str | Sequence[Any]]) -> None:
        """Activate the mode and label every match on ``rows``."""
        self.is_active = True
        self.typed_label = ""
        self.matches = find_quick_select_matches(rows)

    def exit(self) -> None:
        self.is_active = False
        self.matches = []
        self.typed_label = ""

    def accept(self) -> QuickSelectMatch | None:
        """The match whose label equals the typed label, if any."""
        if not self.typed_label:
            return None
        return next((m for m in self.matches if m.label == self.typed_label), None)