"""Host manager: configured SSH hosts with filtering, search and history."""

from __future__ import annotations

import os
import re
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nexterm_client.matching import fuzzy_match

DEFAULT_SSH_PORT = 22
_PORT_RE = re.compile(r"\+?\d+")


@dataclass
class HostConfig:
    """A remote host that can be connected to over SSH."""

    name: str
    host: str
    port: int = DEFAULT_SSH_PORT
    username: str = ""
    auth_type: str = "agent"
    key_path: str | None = None
    forward_local: list[str] = field(default_factory=list)
    forward_remote: list[str] = field(default_factory=list)
    proxy_jump: str | None = None
    x11_forward: bool = False
    x11_trusted: bool = False
    group: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Unique history key of the form ``username@host:port``."""
        return f"{self.username}@{self.host}:{self.port}"


@dataclass
class HistoryEntry:
    """How often and when a host was last connected to."""

    key: str
    count: int = 0
    last_connected: int = 0


def _home_dir() -> str:
    if os.name == "nt":
        return os.environ.get("USERPROFILE", "")
    return os.environ.get("HOME", "")


def _parse_port(value: str) -> int:
    if _PORT_RE.fullmatch(value):
        port = int(value)
        if port <= 0xFFFF:
            return port
    return DEFAULT_SSH_PORT


def _split_line(line: str) -> tuple[str, str] | None:
    if "=" in line:
        keyword, _, value = line.partition("=")
        return keyword.strip(), value.strip()
    parts = line.split(None, 1)
    if len(parts) < 2:
        return None
    return parts[0].strip(), parts[1].strip()


def parse_ssh_config(content: str, home: str | None = None) -> list[HostConfig]:
    """Parse ssh config text into host entries.

    Wildcard ``Host`` patterns are skipped; a missing ``Hostname`` falls back
    to the alias. ``~/`` in ``IdentityFile`` is expanded with ``home``
    (the user's home directory when not given).
    """
    if home is None:
        home = _home_dir()
    hosts: list[HostConfig] = []
    block: dict[str, str] | None = None

    def flush() -> None:
        if block is None:
            return
        alias = block["alias"]
        if "*" in alias or "?" in alias:
            return
        key = block.get("key")
        if key is not None and key.startswith("~/"):
            key = home + key[1:]
        hosts.append(
            HostConfig(
                name=f"{alias} (ssh config)",
                host=block.get("hostname", alias),
                port=_parse_port(block.get("port", str(DEFAULT_SSH_PORT))),
                username=block.get("user", "root"),
                auth_type="key" if key is not None else "agent",
                key_path=key,
            )
        )

    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        pair = _split_line(line)
        if pair is None:
            continue
        keyword, value = pair
        keyword = keyword.lower()
        if keyword == "host":
            flush()
            block = {"alias": value}
        elif block is not None and keyword in ("hostname", "user", "port"):
            block[keyword] = value
        elif block is not None and keyword == "identityfile":
            block["key"] = value

    flush()
    return hosts


def load_ssh_config(path: str | os.PathLike[str] | None = None) -> list[HostConfig]:
    """Read hosts from an ssh config file (``~/.ssh/config`` by default).

    A missing or unreadable file yields an empty list.
    """
    if path is None:
        home = _home_dir()
        if not home:
            return []
        path = Path(home) / ".ssh" / "config"
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    return parse_ssh_config(content)


def _merge(
    hosts: Iterable[HostConfig], ssh_hosts: Iterable[HostConfig] | None
) -> list[HostConfig]:
    merged = list(hosts)
    if ssh_hosts is None:
        ssh_hosts = load_ssh_config()
    for candidate in ssh_hosts:
        if not any(h.host == candidate.host and h.port == candidate.port for h in merged):
            merged.append(candidate)
    return merged


class HostManager:
    """Open/close state, query, filters and history of the host list.

    ``ssh_hosts`` are appended unless a host with the same address and port
    is already present; when omitted, the user's ssh config is read.
    """

    def __init__(
        self,
        hosts: Iterable[HostConfig] = (),
        ssh_hosts: Iterable[HostConfig] | None = None,
    ) -> None:
        self._hosts = _merge(hosts, ssh_hosts)
        self.query = ""
        self.is_open = False
        self.selected = 0
        self.tag_filter: str | None = None
        self.group_filter: str | None = None
        self._history: dict[str, HistoryEntry] = {}

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

    def selected_host(self) -> HostConfig | None:
        matches = self.filtered()
        return matches[self.selected] if self.selected < len(matches) else None

    def record_connection(self, host: HostConfig) -> None:
        """Count a connection to ``host`` and stamp it with the current time."""
        entry = self._history.setdefault(host.key, HistoryEntry(host.key))
        entry.count += 1
        entry.last_connected = int(time.time())

    def history_for(self, host: HostConfig) -> HistoryEntry | None:
        return self._history.get(host.key)

    def all_tags(self) -> list[str]:
        """Every tag in use, sorted and without duplicates."""
        return sorted({tag for h in self._hosts for tag in h.tags})

    def all_groups(self) -> list[str]:
        """Every non-empty group, sorted and without duplicates."""
        return sorted({h.group for h in self._hosts if h.group})

    def set_tag_filter(self, tag: str | None) -> None:
        self.tag_filter = tag
        self.selected = 0

    def set_group_filter(self, group: str | None) -> None:
        self.group_filter = group
        self.selected = 0

    def _frequency(self, host: HostConfig) -> int:
        entry = self.history_for(host)
        return entry.count if entry else 0

    def filtered(self) -> list[HostConfig]:
        """Hosts passing the filters and query.

        Ordered by match score, then connection count (both descending),
        then name.
        """
        candidates = [
            h
            for h in self._hosts
            if (self.tag_filter is None or self.tag_filter in h.tags)
            and (self.group_filter is None or h.group == self.group_filter)
        ]
        scored: list[tuple[int, int, HostConfig]] = []
        for h in candidates:
            if self.query:
                haystack = f"{h.name} {h.username}@{h.host} {' '.join(h.tags)} {h.group}"
                score = fuzzy_match(haystack, self.query)
                if score is None:
                    continue
            else:
                score = 0
            scored.append((score, self._frequency(h), h))
        scored.sort(key=lambda item: (-item[0], -item[1], item[2].name))
        return [h for _, _, h in scored]

    def reload(
        self,
        hosts: Iterable[HostConfig],
        ssh_hosts: Iterable[HostConfig] | None = None,
    ) -> None:
        """Replace the host list, e.g. after the configuration changed."""
        self._hosts = _merge(hosts, ssh_hosts)
        self.selected = 0