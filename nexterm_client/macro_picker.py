"""Macro picker: a fuzzy-searchable list of configured macros."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from nexterm_client.matching import fuzzy_match


@dataclass(frozen=True)
class MacroConfig:
    """A configured macro as listed in the picker."""

    name: str
    description: str = ""


class MacroPicker:
    """Open/close state, query and selection of the macro picker."""

    def __init__(self, macros: Iterable[MacroConfig] = ()) -> None:
        self._macros: list[MacroConfig] = list(macros)
        self.query = ""
        self.is_open = False
        self.selected = 0

    def open(self) -> None:
        self.query = ""
        self.selected = 0
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.query = ""

    def push_char(self, ch: str) -> None:
        self.query += ch
        self.selected = 0

    def pop_char(self) -> None:
        self.query = self.query[:-1]
        self.selected = 0

    def select_next(self) -> None:
        count = len(self.filtered())
        if count:
            self.selected = (self.selected + 1) % count

    def select_prev(self) -> None:
        count = len(self.filtered())
        if count:
            self.selected = count - 1 if self.selected == 0 else self.selected - 1

    def selected_macro(self) -> MacroConfig | None:
        matches = self.filtered()
        return matches[self.selected] if self.selected < len(matches) else None

    def filtered(self) -> list[MacroConfig]:
        """Macros whose name or description match the query, best first."""
        if not self.query:
            return list(self._macros)
        scored = [
            (score, macro)
            for macro in self._macros
            if (score := fuzzy_match(f"{macro.name} {macro.description}", self.query))
            is not None
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [macro for _, macro in scored]

    def reload(self, macros: Iterable[MacroConfig]) -> None:
        """Replace the macro list, e.g. after the configuration changed."""
        self._macros = list(macros)
        self.selected = 0