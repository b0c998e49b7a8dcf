import pytest

from nexterm_client.macro_picker import MacroConfig, MacroPicker


@pytest.fixture
def macros():
    return [
        MacroConfig("deploy", "push the build to staging"),
        MacroConfig("git-status", "show repository status"),
        MacroConfig("clear-logs", "truncate log files"),
    ]


def test_empty_query_returns_all_in_order(macros):
    picker = MacroPicker(macros)
    assert picker.filtered() == macros


def test_query_matches_name(macros):
    picker = MacroPicker(macros)
    picker.query = "deploy"
    assert picker.filtered() == [macros[0]]


def test_query_matches_description(macros):
    picker = MacroPicker(macros)
    picker.query = "repository"
    assert picker.filtered() == [macros[1]]


def test_selection_wraps(macros):
    picker = MacroPicker(macros)
    picker.selected = len(macros) - 1
    picker.select_next()
    assert picker.selected == 0
    picker.select_prev()
    assert picker.selected == len(macros) - 1


def test_selected_macro(macros):
    picker = MacroPicker(macros)
    picker.select_next()
    assert picker.selected_macro() == macros[1]
    picker.query = "zzzzzz"
    assert picker.selected_macro() is None


def test_empty_picker_selection_stays(macros):
    picker = MacroPicker()
    picker.select_next()
    picker.select_prev()
    assert picker.selected == 0
    assert picker.selected_macro() is None


def test_open_close_reset_state(macros):
    picker = MacroPicker(macros)
    picker.push_char("g")
    picker.selected = 1
    picker.open()
    assert picker.is_open
    assert (picker.query, picker.selected) == ("", 0)
    picker.push_char("d")
    picker.close()
    assert not picker.is_open
    assert picker.query == ""


def test_push_pop_char(macros):
    picker = MacroPicker(macros)
    picker.push_char("a")
    picker.push_char("b")
    assert picker.query == "ab"
    picker.selected = 2
    picker.pop_char()
    assert (picker.query, picker.selected) == ("a", 0)


def test_reload_replaces_macros(macros):
    picker = MacroPicker(macros)
    picker.selected = 2
    replacement = [MacroConfig("only", "single macro")]
    picker.reload(replacement)
    assert picker.selected == 0
    assert picker.filtered() == replacement