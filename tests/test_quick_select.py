import string
from collections import namedtuple

import pytest

from nexterm_client.quick_select import (
    FileTransferDialog,
    QuickSelectState,
    find_quick_select_matches,
    index_to_label,
)

Cell = namedtuple("Cell", "ch")


def cells(text):
    return [Cell(ch) for ch in text]


def test_single_letter_labels_follow_alphabet():
    labels = [index_to_label(i, 26) for i in range(26)]
    assert labels == list(string.ascii_lowercase)


def test_two_letter_labels_after_alphabet():
    assert index_to_label(0, 27) == "a"
    assert index_to_label(26, 27) == "aa"
    assert index_to_label(27, 27) == "ab"


def test_labels_are_unique_for_many_matches():
    labels = [index_to_label(i, 300) for i in range(300)]
    assert len(set(labels)) == 300


def test_too_many_matches_raises():
    with pytest.raises(ValueError):
        index_to_label(702, 800)


def test_url_match_on_row():
    line = "see https://example.com/x now"
    matches = find_quick_select_matches([line])
    assert len(matches) == 1
    m = matches[0]
    assert m.text == "https://example.com/x"
    assert m.col_start == line.index("https://")
    assert m.col_end == m.col_start + len(m.text)
    assert m.label == index_to_label(0, 1)


def test_ip_match_precedes_numbers():
    matches = find_quick_select_matches(["host 192.168.1.10 up"])
    texts = [m.text for m in matches]
    assert texts[0] == "192.168.1.10"
    assert texts[1:] == ["192", "168", "1", "10"]


def test_hash_match():
    matches = find_quick_select_matches(["commit deadbeef1"])
    assert [m.text for m in matches] == ["deadbeef1"]


def test_path_match_includes_leading_separator():
    matches = find_quick_select_matches(["ls /usr/local/bin", "/etc/hosts"])
    paths = [(m.row, m.col_start, m.text) for m in matches]
    assert (0, 2, " /usr/local/bin") in paths
    assert (1, 0, "/etc/hosts") in paths


def test_cell_rows_and_row_indices():
    rows = [cells("nothing here"), cells("port 8080")]
    matches = find_quick_select_matches(rows)
    assert [(m.row, m.text) for m in matches] == [(1, "8080")]


def test_spans_agree_with_text():
    rows = ["a 12 https://example.com/p 0123abcd", "/tmp/x 10.0.0.1:22"]
    for m in find_quick_select_matches(rows):
        assert rows[m.row][m.col_start : m.col_end] == m.text


def test_quick_select_lifecycle():
    state = QuickSelectState()
    state.enter(["value 42 and 7"])
    assert state.is_active
    assert [m.text for m in state.matches] == ["42", "7"]
    assert state.accept() is None
    state.typed_label = state.matches[1].label
    assert state.accept() == state.matches[1]
    state.typed_label = "zz"
    assert state.accept() is None
    state.exit()
    assert not state.is_active
    assert state.matches == []
    assert state.typed_label == ""


def test_file_transfer_upload_fields():
    dialog = FileTransferDialog()
    dialog.open_upload()
    assert dialog.is_open and dialog.mode == "upload" and dialog.field == 0
    for ch in "srv":
        dialog.type_char(ch)
    dialog.next_field()
    dialog.type_char("a")
    dialog.type_char("b")
    dialog.delete_char()
    dialog.next_field()
    dialog.type_char("r")
    assert (dialog.host_name, dialog.local_path, dialog.remote_path) == ("srv", "a", "r")


def test_file_transfer_field_bounds():
    dialog = FileTransferDialog()
    dialog.prev_field()
    assert dialog.field == 0
    for _ in range(5):
        dialog.next_field()
    assert dialog.field == 2


def test_file_transfer_download_clears_fields():
    dialog = FileTransferDialog()
    dialog.open_upload()
    dialog.type_char("x")
    dialog.next_field()
    dialog.open_download()
    assert dialog.mode == "download"
    assert dialog.field == 0
    assert dialog.host_name == ""
    dialog.close()
    assert not dialog.is_open


def test_delete_on_empty_field_keeps_it_empty():
    dialog = FileTransferDialog()
    dialog.delete_char()
    assert dialog.current_value == ""