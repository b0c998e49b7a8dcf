import tomlkit

from nexterm_client.settings_panel import (
    ProfileEntry,
    SettingsCategory,
    SettingsPanel,
    scheme_index,
)


def test_default_state():
    panel = SettingsPanel(font_size=14.0, opacity=0.9)
    assert not panel.is_open
    assert panel.category is SettingsCategory.FONT
    assert not panel.dirty
    assert panel.font_size == 14.0
    assert panel.opacity == 0.9
    assert panel.startup_session == "main"


def test_font_size_clamped():
    panel = SettingsPanel()
    panel.font_size = 32.0
    panel.increase_font_size()
    assert panel.font_size == 32.0

    panel.font_size = 8.0
    panel.decrease_font_size()
    assert panel.font_size == 8.0

    panel.font_size = 14.0
    panel.increase_font_size()
    assert panel.font_size == 14.5
    assert panel.dirty


def test_scheme_wraps():
    panel = SettingsPanel()
    panel.scheme_index = 8
    panel.next_scheme()
    assert panel.scheme_index == 0

    panel.scheme_index = 0
    panel.prev_scheme()
    assert panel.scheme_index == 8
    assert panel.scheme_name() == "onedark"


def test_tab_rename_lifecycle():
    panel = SettingsPanel()
    assert panel.tab_rename_editing is None

    panel.begin_tab_rename(42, "main")
    assert panel.tab_rename_editing == 42
    assert panel.tab_rename_text == "main"

    panel.push_tab_rename_char("!")
    assert panel.tab_rename_text == "main!"

    panel.pop_tab_rename_char()
    assert panel.tab_rename_text == "main"

    panel.cancel_tab_rename()
    assert panel.tab_rename_editing is None
    assert panel.tab_rename_text == ""


def test_tab_rename_chars_ignored_when_not_editing():
    panel = SettingsPanel()
    panel.push_tab_rename_char("x")
    assert panel.tab_rename_text == ""


def test_category_navigation():
    panel = SettingsPanel()
    panel.category = SettingsCategory.FONT
    panel.next_category()
    assert panel.category is SettingsCategory.THEME
    panel.prev_category()
    assert panel.category is SettingsCategory.FONT


def test_category_navigation_wraps():
    panel = SettingsPanel()
    panel.category = SettingsCategory.STARTUP
    panel.prev_category()
    assert panel.category is SettingsCategory.PROFILES
    panel.next_category()
    assert panel.category is SettingsCategory.STARTUP


def test_category_label_and_icon():
    assert SettingsCategory.SSH.label() == "SSH"
    assert SettingsCategory.THEME.icon() == "*"
    assert SettingsCategory.STARTUP.icon() == ">"


def test_scheme_index_lookup():
    assert scheme_index("dark") == 0
    assert scheme_index("tokyonight") == 2
    assert scheme_index("Nord") == 7
    assert scheme_index("my-custom") == 0
    assert scheme_index(None) == 0


def test_scheme_from_constructor():
    panel = SettingsPanel(scheme="dracula")
    assert panel.scheme_index == 6
    assert panel.scheme_name() == "dracula"


def test_opacity_clamped():
    panel = SettingsPanel(opacity=1.0)
    panel.increase_opacity()
    assert panel.opacity == 1.0
    panel.opacity = 0.12
    panel.decrease_opacity()
    assert panel.opacity == 0.1
    assert panel.dirty


def test_font_family_editing_only_when_focused():
    panel = SettingsPanel(font_family="Mono")
    panel.push_font_family_char("x")
    assert panel.font_family == "Mono"
    assert not panel.dirty
    panel.font_family_editing = True
    panel.push_font_family_char("x")
    assert panel.font_family == "Monox"
    panel.pop_font_family_char()
    panel.pop_font_family_char()
    assert panel.font_family == "Mon"
    assert panel.dirty


def test_close_resets_editing_state():
    panel = SettingsPanel()
    panel.open()
    panel.font_family_editing = True
    panel.increase_font_size()
    panel.begin_tab_rename(1, "a")
    panel.close()
    assert not panel.is_open
    assert not panel.dirty
    assert not panel.font_family_editing
    assert panel.tab_rename_editing is None


def test_profiles_kept():
    profiles = [ProfileEntry(name="zsh", shell_program="/bin/zsh")]
    panel = SettingsPanel(profiles=profiles)
    assert panel.profiles[0].shell_program == "/bin/zsh"
    assert panel.profiles[0].icon == ">"


def test_save_to_new_file(tmp_path):
    target = tmp_path / "sub" / "nexterm.toml"
    panel = SettingsPanel(font_size=16.5, opacity=0.5, font_family="Fira Code", scheme="nord")
    panel.save_to_toml(target)
    doc = tomlkit.parse(target.read_text(encoding="utf-8"))
    assert doc["font"]["family"] == "Fira Code"
    assert doc["font"]["size"] == 16.5
    assert doc["colors"]["scheme"] == "nord"
    assert doc["window"]["background_opacity"] == 0.5


def test_save_preserves_other_content(tmp_path):
    target = tmp_path / "nexterm.toml"
    target.write_text(
        '# my config\n[font]\nfamily = "Old"\nligatures = true\n\n[shell]\nprogram = "bash"\n',
        encoding="utf-8",
    )
    panel = SettingsPanel(font_family="New")
    panel.save_to_toml(target)
    text = target.read_text(encoding="utf-8")
    doc = tomlkit.parse(text)
    assert "# my config" in text
    assert doc["font"]["family"] == "New"
    assert doc["font"]["ligatures"] is True
    assert doc["shell"]["program"] == "bash"


def test_save_empty_family_keeps_existing(tmp_path):
    target = tmp_path / "nexterm.toml"
    target.write_text('[font]\nfamily = "Keep"\n', encoding="utf-8")
    panel = SettingsPanel(font_family="")
    panel.save_to_toml(target)
    doc = tomlkit.parse(target.read_text(encoding="utf-8"))
    assert doc["font"]["family"] == "Keep"


def test_save_replaces_unparsable_file(tmp_path):
    target = tmp_path / "nexterm.toml"
    target.write_text("this is [ not toml", encoding="utf-8")
    SettingsPanel(font_size=12.0).save_to_toml(target)
    doc = tomlkit.parse(target.read_text(encoding="utf-8"))
    assert doc["font"]["size"] == 12.0