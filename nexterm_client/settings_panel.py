"""Settings panel state: categories, font, colour scheme, opacity and profiles."""

from __future__ import annotations

import enum
import os
from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

SCHEMES = (
    "dark",
    "light",
    "tokyonight",
    "solarized",
    "gruvbox",
    "catppuccin",
    "dracula",
    "nord",
    "onedark",
)

MIN_FONT_SIZE = 8.0
MAX_FONT_SIZE = 32.0
FONT_SIZE_STEP = 0.5
MIN_OPACITY = 0.1
MAX_OPACITY = 1.0
OPACITY_STEP = 0.05


def scheme_index(name: str | None) -> int:
    """Index of a built-in colour scheme; custom or unknown schemes give 0."""
    if not name:
        return 0
    try:
        return SCHEMES.index(name.lower())
    except ValueError:
        return 0


class SettingsCategory(enum.Enum):
    """Sidebar categories of the settings panel, in display order."""

    STARTUP = ("Startup", ">")
    FONT = ("Font", "F")
    THEME = ("Theme", "*")
    WINDOW = ("Window", "#")
    SSH = ("SSH", "S")
    KEYBINDINGS = ("Keybindings", "K")
    PROFILES = ("Profiles", "P")

    def label(self) -> str:
        return self.value[0]

    def icon(self) -> str:
        return self.value[1]


@dataclass
class ProfileEntry:
    """A shell profile editable in the panel."""

    name: str = ""
    icon: str = ">"
    shell_program: str = ""
    working_dir: str = ""


def _section(doc: MutableMapping[str, Any], name: str) -> MutableMapping[str, Any]:
    section = doc.get(name)
    if not isinstance(section, MutableMapping):
        section = tomlkit.table()
        doc[name] = section
    return section


class SettingsPanel:
    """Open/close state and edited values of the settings panel."""

    def __init__(
        self,
        font_size: float = 14.0,
        opacity: float = 1.0,
        font_family: str = "monospace",
        scheme: str | None = "dark",
        profiles: Iterable[ProfileEntry] = (),
    ) -> None:
        self.is_open = False
        self.category = SettingsCategory.FONT
        self.font_size = float(font_size)
        self.scheme_index = scheme_index(scheme)
        self.opacity = float(opacity)
        self.dirty = False
        self.font_family = font_family
        self.font_family_editing = False
        self.profiles: list[ProfileEntry] = list(profiles)
        self.selected_profile = 0
        self.startup_session = "main"
        self.tab_rename_editing: int | None = None
        self.tab_rename_text = ""

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.dirty = False
        self.font_family_editing = False
        self.tab_rename_editing = None

    def _step_category(self, delta: int) -> None:
        categories = list(SettingsCategory)
        index = categories.index(self.category)
        self.category = categories[(index + delta) % len(categories)]

    def prev_category(self) -> None:
        self._step_category(-1)

    def next_category(self) -> None:
        self._step_category(1)

    def push_font_family_char(self, ch: str) -> None:
        """Append to the font family while its field is being edited."""
        if self.font_family_editing:
            self.font_family += ch
            self.dirty = True

    def pop_font_family_char(self) -> None:
        """Remove the font family's last character while it is being edited."""
        if self.font_family_editing:
            self.font_family = self.font_family[:-1]
            self.dirty = True

    def increase_font_size(self) -> None:
        self.font_size = min(self.font_size + FONT_SIZE_STEP, MAX_FONT_SIZE)
        self.dirty = True

    def decrease_font_size(self) -> None:
        self.font_size = max(self.font_size - FONT_SIZE_STEP, MIN_FONT_SIZE)
        self.dirty = True

    def next_scheme(self) -> None:
        self.scheme_index = (self.scheme_index + 1) % len(SCHEMES)
        self.dirty = True

    def prev_scheme(self) -> None:
        self.scheme_index = (self.scheme_index - 1) % len(SCHEMES)
        self.dirty = True

    def increase_opacity(self) -> None:
        self.opacity = min(self.opacity + OPACITY_STEP, MAX_OPACITY)
        self.dirty = True

    def decrease_opacity(self) -> None:
        self.opacity = max(self.opacity - OPACITY_STEP, MIN_OPACITY)
        self.dirty = True

    def scheme_name(self) -> str:
        return SCHEMES[self.scheme_index % len(SCHEMES)]

    def begin_tab_rename(self, window_id: int, current_name: str) -> None:
        self.tab_rename_editing = window_id
        self.tab_rename_text = current_name

    def cancel_tab_rename(self) -> None:
        self.tab_rename_editing = None
        self.tab_rename_text = ""

    def push_tab_rename_char(self, ch: str) -> None:
        if self.tab_rename_editing is not None:
            self.tab_rename_text += ch

    def pop_tab_rename_char(self) -> None:
        if self.tab_rename_editing is not None:
            self.tab_rename_text = self.tab_rename_text[:-1]

    def save_to_toml(self, path: str | os.PathLike[str]) -> None:
        """Write the edited values into the TOML file at ``path``.

        Other content of an existing file is kept; unparsable content is
        replaced. Missing parent directories are created.
        """
        target = Path(path)
        existing = target.read_text(encoding="utf-8") if target.exists() else ""
        try:
            doc = tomlkit.parse(existing)
        except TOMLKitError:
            doc = tomlkit.document()

        font = _section(doc, "font")
        if self.font_family:
            font["family"] = self.font_family
        font["size"] = float(self.font_size)
        _section(doc, "colors")["scheme"] = self.scheme_name()
        _section(doc, "window")["background_opacity"] = float(self.opacity)

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(tomlkit.dumps(doc), encoding="utf-8")