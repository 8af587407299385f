"""Tests for the line grammar and parser."""

from __future__ import annotations

import pytest

from grammar import (
    INLINE,
    STANDALONE,
    TASK_RE,
    Grammar,
    is_date_label,
    parse,
    serialize,
    split_lines,
)
from models import Board, Section, Task


class TestPatterns:
    def test_task_pattern_open(self):
        m = TASK_RE.match("- [ ] buy milk")
        assert m is not None
        assert m.group("state") == " "
        assert m.group("text") == "buy milk"

    def test_task_pattern_done_indented(self):
        m = TASK_RE.match("    - [x] pay rent")
        assert m is not None
        assert m.group("indent") == "    "
        assert m.group("state") == "x"

    def test_task_pattern_is_case_sensitive(self):
        assert TASK_RE.match("- [X] shouting") is None

    def test_task_pattern_no_match(self):
        assert TASK_RE.match("plain text") is None
        assert TASK_RE.match("* [ ] wrong bullet") is None
        assert TASK_RE.match("- [ ]") is None
        assert TASK_RE.match("- [-] cancelled") is None

    def test_only_one_separator_space_removed(self):
        m = TASK_RE.match("- [ ]   spaced out  ")
        assert m.group("text") == "  spaced out  "

    def test_split_lines_drops_carriage_returns(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]


class TestIsDateLabel:
    def test_real_date(self):
        assert is_date_label("2024-02-29")

    def test_impossible_date(self):
        assert not is_date_label("2023-02-29")

    def test_free_text(self):
        assert not is_date_label("Backlog")
        assert not is_date_label("2024-1-1")

    def test_non_ascii_digits_rejected(self):
        assert not is_date_label("\uff12\uff10\uff12\uff14-01-01")
        assert not is_date_label("\u0662\u0660\u0662\u0664-01-01")


class TestInlineParse:
    def test_scenario_single_section(self):
        board = parse("[2024-01-01]\n- [ ] buy milk\n- [x] pay rent\n")
        assert board.labels() == ["2024-01-01"]
        assert board.get("2024-01-01").tasks == [Task("buy milk", False), Task("pay rent", True)]

    def test_date_token_anywhere_on_line(self):
        board = parse("## Monday [2024-01-01] plan\n- [ ] a\n")
        assert board.labels() == ["2024-01-01"]

    def test_tasks_before_header_dropped(self):
        board = parse("- [ ] orphan\n[2024-01-01]\n- [ ] kept\n")
        assert [t.text for t in board.get("2024-01-01").tasks] == ["kept"]
        assert len(board) == 1

    def test_unrecognized_lines_ignored(self):
        board = parse("notes\n[2024-01-01]\nsome prose\n* [ ] nope\n- [ ] yes\n")
        assert [t.text for t in board.get("2024-01-01").tasks] == ["yes"]

    def test_standalone_labels_are_not_headers(self):
        board = parse("[Backlog]\n- [ ] write tests\n")
        assert len(board) == 0

    def test_repeated_label_appends_to_first_bucket(self):
        board = parse("[2024-01-01]\n- [ ] a\n[2024-01-02]\n- [ ] b\n[2024-01-01]\n- [ ] c\n")
        assert board.labels() == ["2024-01-01", "2024-01-02"]
        assert [t.text for t in board.get("2024-01-01").tasks] == ["a", "c"]

    def test_crlf_document(self):
        board = parse("[2024-01-01]\r\n- [x] done\r\n")
        assert board.get("2024-01-01").tasks == [Task("done", True)]

    def test_embedded_markup_preserved(self):
        board = parse("[2024-01-01]\n- [ ] read **[notes](x.md)** #tag\n")
        assert board.get("2024-01-01").tasks[0].text == "read **[notes](x.md)** #tag"

    def test_non_ascii_digit_token_is_not_a_header(self):
        board = parse("[2024-01-01]\n- [ ] a\n[\uff12\uff10\uff12\uff14-01-02]\n- [ ] b\n")
        assert board.labels() == ["2024-01-01"]
        assert [t.text for t in board.get("2024-01-01").tasks] == ["a", "b"]

    def test_empty_text(self):
        assert len(parse("")) == 0


class TestStandaloneParse:
    def test_scenario_two_columns(self):
        board = Grammar(STANDALONE).parse("[Backlog]\n- [ ] write tests\n[Done]\n- [x] ship release\n")
        assert board.labels() == ["Backlog", "Done"]
        assert board.get("Done").tasks == [Task("ship release", True)]

    def test_header_must_be_whole_line(self):
        board = Grammar(STANDALONE).parse("see [Backlog] later\n- [ ] lost\n")
        assert len(board) == 0

    def test_header_surrounding_whitespace_allowed(self):
        board = Grammar(STANDALONE).parse("  [In Progress]  \n- [ ] task\n")
        assert board.labels() == ["In Progress"]

    def test_date_labels_work_as_plain_labels(self):
        board = Grammar(STANDALONE).parse("[2024-01-01]\n- [ ] a\n")
        assert board.labels() == ["2024-01-01"]


class TestGrammarVariant:
    def test_unknown_variant_rejected(self):
        with pytest.raises(ValueError):
            Grammar("markdown")

    def test_header_label(self):
        assert Grammar(INLINE).header_label("x [2024-03-04] y") == "2024-03-04"
        assert Grammar(STANDALONE).header_label("[Later]") == "Later"
        assert Grammar(STANDALONE).header_label("- [ ] Later") is None


class TestRoundTrip:
    def test_inline_round_trip(self):
        board = Board([
            Section("2024-01-01", [Task("buy milk"), Task("pay rent", True)]),
            Section("2024-01-03", [Task("call [mom]", True)]),
        ])
        assert parse(serialize(board)) == board

    def test_standalone_round_trip(self):
        board = Board([
            Section("Backlog", [Task("write tests"), Task("  indented text ")]),
            Section("Done", [Task("ship release", True)]),
        ])
        assert parse(serialize(board, STANDALONE), STANDALONE) == board

    def test_serialize_format(self):
        board = Board([Section("2024-01-01", [Task("a", True)])])
        assert serialize(board) == "[2024-01-01]\n- [x] a\n"

    def test_serialize_empty_board(self):
        assert serialize(Board()) == ""
