# nexterm_client

The client-side state of a multiplexing terminal, kept apart from any window,
renderer or terminal backend. A front end renders this state and updates it
from key presses and mouse events.

## Modules

- `nexterm_client.matching`: `fuzzy_match(text, pattern)` scores `pattern` as a
  subsequence of `text` and returns an integer (higher is better) or `None`
  when there is no match. It is case-insensitive unless the pattern contains
  an uppercase letter. An empty pattern scores 0.
- `nexterm_client.scrollback`: `Scrollback(capacity)` is a fixed-capacity
  history of lines that drops the oldest line when full. Lines are strings or
  sequences of cells with a `ch` attribute. `search()` returns every regex
  match as `(row, start_col, end_col)`. `search_next()` and `search_prev()`
  return the next or previous matching row and wrap around. An invalid
  pattern gives no results. `line_text()` turns a line into text with
  trailing whitespace removed.
- `nexterm_client.palette`: `CommandPalette` over `PaletteAction(label, action)`
  entries. It has a query, selection that wraps around, fuzzy filtering
  ordered by score, and `register()` for custom actions. `default_actions()`
  gives the built-in set (split, focus, zoom, swap, settings and so on).
- `nexterm_client.macro_picker`: `MacroPicker` over `MacroConfig(name, description)`.
  It matches the query against name and description, and `reload()` replaces
  the list.
- `nexterm_client.host_manager`: `HostManager` over `HostConfig` entries. It
  filters by tag, by group and by fuzzy query. Results are ordered by score,
  then by connection count from `record_connection()`, then by name.
  `all_tags()` and `all_groups()` list the tags and groups in use.
  `parse_ssh_config(content, home)` reads ssh config text: wildcard hosts are
  skipped, a missing `Hostname` falls back to the alias, and `~/` in
  `IdentityFile` is expanded. `load_ssh_config(path)` reads a file
  (`~/.ssh/config` by default) and gives an empty list if the file is missing.
  Hosts read from ssh config are added unless one with the same address and
  port is already present.
- `nexterm_client.selection`: `detect_urls_in_row()` finds `https://` and
  `http://` URLs in a row as `DetectedUrl`. `MouseSelection` tracks a drag
  selection. `CopyModeState` is a vi-like selection driven from the keyboard.
  `ContextMenu.default(x, y, profiles)` builds the right-click menu of
  `ContextMenuItem`s, with an entry for each profile.
- `nexterm_client.quick_select`: `find_quick_select_matches()` finds URLs,
  paths, IPv4 addresses, hex hashes and numbers, each labelled `a`…`z`, then
  `aa`, `ab`, … (see `index_to_label()`). `QuickSelectState` holds the active
  matches and the label typed so far. `FileTransferDialog` is the
  upload/download form, with host, local path and remote path fields.
- `nexterm_client.settings_panel`: `SettingsPanel` moves through the
  `SettingsCategory` sidebar. It edits font family and size (8–32), the
  built-in colour scheme and the opacity (0.1–1.0), and handles renaming a
  tab. `save_to_toml(path)` writes `[font]`, `[colors]` and `[window]` values
  into a TOML file and keeps the rest of that file as it was.
- `nexterm_client.plugins`: output and command hooks that take `log` and
  `write_pane` callbacks:
  - `CommandCounter` counts OSC 133 `D` marks and keeps the last exit code.
    It handles `:count-show` and `:count-reset`.
  - `ErrorDetector` writes a banner when output contains "error" in any case.
    It handles `:error-reset`.
  - `TimestampInjector` prefixes lines with `HH:MM:SS.mmm |`. It is off by
    default and is switched with `:ts-on` and `:ts-off`. `format_time()`
    formats Unix milliseconds.
- `nexterm_client.input`: Ctrl+B prefix handling. `handle_key()` and
  `handle_prefix_key()` return an `Action`, and `convert_key_code()` maps key
  names to protocol key codes. `PrefixState` tracks the prefix or help mode
  and an error toast that `tick_toasts()` drops after three seconds.

## Example

```python
from nexterm_client.scrollback import Scrollback
from nexterm_client.palette import CommandPalette, default_actions

history = Scrollback(1000)
history.push_line("hello world")
history.push_line("build failed")
print(history.search_next("failed", 0))   # 1

palette = CommandPalette(default_actions())
palette.open()
for ch in "split":
    palette.push_char(ch)
print([a.action for a in palette.filtered()])
```

## What this package does not do

It has no server connection and no wire protocol. It does no drawing and has
no window, fonts or terminal screen. It installs no command to run. It does
not execute actions, macros, SSH connections or file transfers: it only holds
the state from which a front end would start them.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```