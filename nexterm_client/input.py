"""Terminal key handling: prefix mode, key translation and error toasts."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field

TOAST_SECONDS = 3.0
_MAX_FUNCTION_KEY = 255

_NAMED_KEYS = {
    "enter": "Enter",
    "backspace": "Backspace",
    "delete": "Delete",
    "esc": "Escape",
    "tab": "Tab",
    "backtab": "BackTab",
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "insert": "Insert",
}

_PREFIX_COMMANDS = {
    "%": "SplitVertical",
    '"': "SplitHorizontal",
    "x": "ClosePane",
    "n": "FocusNextPane",
    "p": "FocusPrevPane",
    "z": "ToggleZoom",
}


class Modifiers(enum.IntFlag):
    """Modifier keys held during a key press."""

    SHIFT = 1
    CTRL = 2
    ALT = 4


class PrefixMode(enum.Enum):
    """Whether the client waits for a Ctrl+B command key or shows help."""

    NONE = "none"
    CTRL_B = "ctrl_b"
    HELP = "help"


class ActionKind(enum.Enum):
    """What the event loop should do in response to input."""

    QUIT = "quit"
    SEND_KEY = "send_key"
    RESIZE = "resize"
    ENTER_PREFIX = "enter_prefix"
    PREFIX_COMMAND = "prefix_command"
    TOGGLE_HELP = "toggle_help"
    CANCEL_PREFIX = "cancel_prefix"


@dataclass(frozen=True)
class Action:
    """An input action.

    ``command`` names the server command of a prefix command, ``key`` and
    ``modifiers`` describe a key to send, and ``size`` is ``(cols, rows)``
    of a resize.
    """

    kind: ActionKind
    command: str | None = None
    key: str | None = None
    modifiers: Modifiers = Modifiers(0)
    size: tuple[int, int] | None = None

    @classmethod
    def resize(cls, cols: int, rows: int) -> Action:
        return cls(ActionKind.RESIZE, size=(cols, rows))


def convert_key_code(code: str) -> str | None:
    """Translate a terminal key to its protocol key code.

    A single character stands for itself. Named keys (``enter``, ``esc``,
    ``pageup``, ``f5`` ...) are matched case-insensitively and become
    ``Enter``, ``Escape``, ``PageUp``, ``F5`` and so on. Unknown keys give
    None.
    """
    if len(code) == 1:
        return code
    name = code.lower()
    if name in _NAMED_KEYS:
        return _NAMED_KEYS[name]
    number = name[1:]
    if name.startswith("f") and number.isdigit() and int(number) <= _MAX_FUNCTION_KEY:
        return f"F{int(number)}"
    return None


def handle_prefix_key(code: str) -> Action:
    """Action for the key pressed after Ctrl+B; unknown keys cancel the prefix."""
    if code in _PREFIX_COMMANDS:
        return Action(ActionKind.PREFIX_COMMAND, command=_PREFIX_COMMANDS[code])
    if code == "?":
        return Action(ActionKind.TOGGLE_HELP)
    return Action(ActionKind.CANCEL_PREFIX)


def handle_key(
    code: str,
    modifiers: Modifiers = Modifiers(0),
    prefix_mode: PrefixMode = PrefixMode.NONE,
) -> Action | None:
    """Action for a key press in the given prefix mode, or None to ignore it."""
    modifiers = Modifiers(modifiers)
    if prefix_mode is PrefixMode.HELP:
        return Action(ActionKind.TOGGLE_HELP)
    if prefix_mode is PrefixMode.CTRL_B:
        return handle_prefix_key(code)
    if Modifiers.CTRL in modifiers:
        if code == "q":
            return Action(ActionKind.QUIT)
        if code == "b":
            return Action(ActionKind.ENTER_PREFIX)
    if code.lower() == "esc":
        return None
    key = convert_key_code(code)
    if key is None:
        return None
    return Action(ActionKind.SEND_KEY, key=key, modifiers=modifiers)


@dataclass
class ErrorToast:
    """An error message shown for a while; ``shown_at`` is a monotonic time."""

    message: str
    shown_at: float


@dataclass
class PrefixState:
    """Prefix mode and the current error toast of the terminal client."""

    prefix_mode: PrefixMode = PrefixMode.NONE
    error_toast: ErrorToast | None = field(default=None)

    def enter_prefix(self) -> None:
        self.prefix_mode = PrefixMode.CTRL_B

    def exit_prefix(self) -> None:
        self.prefix_mode = PrefixMode.NONE

    def toggle_help(self) -> None:
        if self.prefix_mode is PrefixMode.HELP:
            self.prefix_mode = PrefixMode.NONE
        else:
            self.prefix_mode = PrefixMode.HELP

    def show_error(self, message: str, now: float | None = None) -> None:
        """Show ``message`` as the error toast, replacing any earlier one."""
        shown_at = time.monotonic() if now is None else now
        self.error_toast = ErrorToast(message, shown_at)

    def tick_toasts(self, now: float | None = None) -> None:
        """Drop the error toast once it has been shown for three seconds."""
        if self.error_toast is None:
            return
        current = time.monotonic() if now is None else now
        if current - self.error_toast.shown_at >= TOAST_SECONDS:
            self.error_toast = None