"""Tests for the terminal card grid."""

from __future__ import annotations

from display import ANSI_RE, CELL_PX, CardGrid, _wrap, text_width, visible_len
from models import CardView, Settings, Task


def _plain(text: str) -> str:
    return ANSI_RE.sub("", text)


def _card(label="Backlog", tasks=None):
    tasks = tasks or []
    return CardView(label=label, title=label, done=sum(t.done for t in tasks), total=len(tasks),
                    accent="#FFE4B5", tasks=tasks)


class TestWrap:
    def test_wraps_on_words(self):
        assert _wrap("one two three four", 9) == ["one two", "three", "four"]

    def test_splits_long_words(self):
        assert _wrap("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_blank(self):
        assert _wrap("   ", 5) == [""]

    def test_wide_characters_count_two_cells(self):
        assert text_width("\u6f22\u5b57") == 4
        assert visible_len("\x1b[1m\u6f22\u5b57\x1b[0m") == 4

    def test_combining_marks_take_no_cells(self):
        assert text_width("cafe\u0301") == 4

    def test_wraps_wide_characters_by_cells(self):
        assert _wrap("\u725b\u4e73\u3092\u8cb7\u3046", 4) == ["\u725b\u4e73", "\u3092\u8cb7", "\u3046"]


class TestCardGrid:
    def test_pixel_settings_to_columns(self):
        grid = CardGrid(Settings(card_width=280, card_gap=16), term_width=120)
        assert grid.card_cols == 280 // CELL_PX
        assert grid.gap_cols == 2
        assert grid.per_row == 3

    def test_narrow_terminal_one_per_row(self):
        grid = CardGrid(Settings(), term_width=20)
        assert grid.per_row == 1

    def test_card_lines_have_equal_width(self):
        grid = CardGrid(Settings(), term_width=120)
        card = _card(tasks=[Task("a fairly long task text that has to wrap over lines"), Task("done", True)])
        lines = grid.card_lines(1, card)
        assert {visible_len(line) for line in lines} == {grid.card_cols}

    def test_wide_text_keeps_card_width(self):
        grid = CardGrid(Settings(), term_width=120)
        card = _card(label="\u8cb7\u3044\u7269\u30ea\u30b9\u30c8\u3068\u6765\u9031\u306e\u4e88\u5b9a" * 2,
                     tasks=[Task("\u725b\u4e73\u3068\u30d1\u30f3\u3068\u5375\u3092\u8cb7\u3063\u3066\u304f\u308b\u3053\u3068"), Task("\U0001F34E apple", True)])
        lines = grid.card_lines(1, card)
        assert {visible_len(line) for line in lines} == {grid.card_cols}

    def test_header_shows_title_and_badge(self):
        grid = CardGrid(Settings(), term_width=120)
        header = _plain(grid.card_lines(2, _card(tasks=[Task("a", True), Task("b")]))[1])
        assert "2. Backlog" in header
        assert header.rstrip("|").rstrip().endswith("1/2")

    def test_empty_card_body(self):
        grid = CardGrid(Settings(), term_width=120)
        body = _plain("\n".join(grid.card_lines(1, _card())))
        assert "No tasks" in body
        assert "0/0" in body

    def test_task_numbers_and_boxes(self):
        grid = CardGrid(Settings(), term_width=120)
        text = _plain("\n".join(grid.card_lines(1, _card(tasks=[Task("a"), Task("b", True)]))))
        assert " 1. [ ] a" in text
        assert " 2. [x] b" in text

    def test_grid_rows(self):
        grid = CardGrid(Settings(), term_width=80)
        cards = [_card(f"C{i}") for i in range(3)]
        text = _plain(grid.render(cards))
        assert grid.per_row == 2
        assert "3. C2" in text
        first_row = text.splitlines()[1]
        assert "1. C0" in first_row and "2. C1" in first_row

    def test_no_cards(self):
        assert "(no sections)" in _plain(CardGrid(Settings(), term_width=80).render([]))
