"""Command palette: a fuzzy-searchable list of client actions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from nexterm_client.matching import fuzzy_match


@dataclass(frozen=True)
class PaletteAction:
    """An entry of the palette: the label shown and the action identifier."""

    label: str
    action: str


_DEFAULT_ACTIONS = (
    ("Split Vertical", "SplitVertical"),
    ("Split Horizontal", "SplitHorizontal"),
    ("Focus Next Pane", "FocusNextPane"),
    ("Focus Previous Pane", "FocusPrevPane"),
    ("Detach", "Detach"),
    ("Search Scrollback", "SearchScrollback"),
    ("Display Panes", "DisplayPanes"),
    ("Toggle Zoom", "ToggleZoom"),
    ("Swap With Next Pane", "SwapPaneNext"),
    ("Swap With Previous Pane", "SwapPanePrev"),
    ("Break Pane Into Window", "BreakPane"),
    ("Connect Serial Port", "ConnectSerialPrompt"),
    ("Show Host Manager", "ShowHostManager"),
    ("Show Macro Picker", "ShowMacroPicker"),
    ("SFTP Upload", "SftpUploadDialog"),
    ("SFTP Download", "SftpDownloadDialog"),
    ("Show Settings", "ShowSettings"),
)


def default_actions() -> list[PaletteAction]:
    """The built-in palette actions, in display order."""
    return [PaletteAction(label, action) for label, action in _DEFAULT_ACTIONS]


class CommandPalette:
    """Open/close state, query and selection of the command palette."""

    def __init__(self, actions: Iterable[PaletteAction] | None = None) -> None:
        self.actions: list[PaletteAction] = (
            default_actions() if actions is None else list(actions)
        )
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

    def selected_action(self) -> PaletteAction | None:
        matches = self.filtered()
        return matches[self.selected] if self.selected < len(matches) else None

    def filtered(self) -> list[PaletteAction]:
        """Actions matching the query, best score first."""
        if not self.query:
            return list(self.actions)
        scored = [
            (score, action)
            for action in self.actions
            if (score := fuzzy_match(action.label, self.query)) is not None
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [action for _, action in scored]

    def register(self, action: PaletteAction) -> None:
        """Add a custom action to the end of the list."""
        self.actions.append(action)