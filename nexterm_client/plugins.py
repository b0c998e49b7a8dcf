"""Sample output and command plugins: command counter, error detector, timestamps."""

from __future__ import annotations

import re
import time
from collections.abc import Callable

LogFn = Callable[[str], None]
WritePaneFn = Callable[[int, str], None]
NowFn = Callable[[], int]

FOCUSED_PANE = 0
_I32_MAX = 2**31 - 1
_EXIT_DIGITS = re.compile(r"[0-9]*")
_SEMANTIC_DONE = "\x1b]133;D"
_MIN_STAMP_INTERVAL_MS = 100


def _discard_log(message: str) -> None:
    del message


def _discard_write(pane_id: int, text: str) -> None:
    del pane_id, text


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


def format_time(ms: int) -> str:
    """Format Unix milliseconds as ``HH:MM:SS.mmm`` (UTC time of day)."""
    total_sec, millis = divmod(ms, 1000)
    sec = total_sec % 60
    minute = (total_sec // 60) % 60
    hour = (total_sec // 3600) % 24
    return f"{hour:02}:{minute:02}:{sec:02}.{millis:03}"


class CommandCounter:
    """Counts finished commands (OSC 133 ``D`` marks) and their last exit code.

    Commands: ``:count-show`` writes the figures to the focused pane,
    ``:count-reset`` clears them.
    """

    def __init__(
        self, log: LogFn = _discard_log, write_pane: WritePaneFn = _discard_write
    ) -> None:
        self._log = log
        self._write_pane = write_pane
        self.count = 0
        self.last_exit: int | None = None
        log("[command-counter] initialised")

    def on_output(self, text: str, pane_id: int) -> bool:
        """Record a finished command; output is never suppressed."""
        del pane_id
        if _SEMANTIC_DONE in text:
            self.count += 1
            position = text.find("exit=")
            if position == -1:
                self.last_exit = 0
            else:
                digits = _EXIT_DIGITS.match(text, position + 5).group()
                if digits and int(digits) <= _I32_MAX:
                    self.last_exit = int(digits)
        return False

    def on_command(self, command: str) -> bool:
        """Handle a custom command; returns whether it was handled."""
        command = command.strip()
        if command == ":count-show":
            last = "n/a" if self.last_exit is None else str(self.last_exit)
            self._write_pane(
                FOCUSED_PANE,
                f"\x1b[36m[command-counter] commands: {self.count}  "
                f"last exit code: {last}\x1b[0m\r\n",
            )
            return True
        if command == ":count-reset":
            self.count = 0
            self.last_exit = None
            self._log("[command-counter] counter reset")
            return True
        return False


class ErrorDetector:
    """Notices "error" in pane output, in any case, and writes a banner.

    Command: ``:error-reset`` clears the running count.
    """

    def __init__(
        self, log: LogFn = _discard_log, write_pane: WritePaneFn = _discard_write
    ) -> None:
        self._log = log
        self._write_pane = write_pane
        self.count = 0
        log("[error-detector] initialised")

    def on_output(self, text: str, pane_id: int) -> bool:
        """Count output containing an error; output is never suppressed."""
        if "error" in text.lower():
            self.count += 1
            self._write_pane(
                pane_id,
                f"\x1b[33m[error-detector] error detected (total {self.count}) "
                f"— pane {pane_id}\x1b[0m\r\n",
            )
            self._log(f"[error-detector] error detected: pane={pane_id} count={self.count}")
        return False

    def on_command(self, command: str) -> bool:
        """Handle ``:error-reset``; returns whether the command was handled."""
        if command.strip() == ":error-reset":
            self.count = 0
            self._log("[error-detector] error counter reset")
            return True
        return False


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class TimestampInjector:
    """Prefixes output lines with a ``HH:MM:SS.mmm |`` timestamp.

    Disabled by default; ``:ts-on`` and ``:ts-off`` switch it. Output
    arriving within 100 ms of the last stamped output is left alone.
    """

    def __init__(
        self,
        log: LogFn = _discard_log,
        write_pane: WritePaneFn = _discard_write,
        now_ms: NowFn = _wall_clock_ms,
    ) -> None:
        self._log = log
        self._write_pane = write_pane
        self._now_ms = now_ms
        self.enabled = False
        self.last_ts = 0
        log("[timestamp-injector] initialised (disabled by default)")

    def on_output(self, text: str, pane_id: int) -> bool:
        """Write the stamped lines to the pane; returns True to suppress the original."""
        if not self.enabled:
            return False
        now = self._now_ms()
        if max(now - self.last_ts, 0) < _MIN_STAMP_INTERVAL_MS:
            return False
        self.last_ts = now
        stamp = format_time(now)
        annotated = "\r\n".join(
            line if not line else f"\x1b[90m{stamp} |\x1b[0m {line}"
            for line in _split_lines(text)
        )
        if not annotated:
            return False
        self._write_pane(pane_id, annotated)
        return True

    def on_command(self, command: str) -> bool:
        """Handle ``:ts-on`` / ``:ts-off``; returns whether the command was handled."""
        command = command.strip()
        if command == ":ts-on":
            self.enabled = True
            self._log("[timestamp-injector] timestamps enabled")
            return True
        if command == ":ts-off":
            self.enabled = False
            self._log("[timestamp-injector] timestamps disabled")
            return True
        return False