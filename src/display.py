"""Terminal rendering of card views: a grid of boxed cards.

Card width and gap come from Settings in pixels and are converted to
character cells at CELL_PX pixels per cell. Cards flow left to right and
wrap into as many rows as the terminal width needs. Widths are counted in
terminal cells: wide East Asian characters take two, combining marks none.
"""
from __future__ import annotations
from typing import List, Sequence
from models import CardView, Settings, Task
from render import EMPTY_BODY
from theme import color, accent_style, BORDER_COLOR, DONE_COLOR, EMPTY_COLOR
import re, shutil, unicodedata

CELL_PX = 8
MIN_CARD_COLS = 16
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ('W', 'F') else 1


def text_width(s: str) -> int:
    return sum(char_width(ch) for ch in s)


def visible_len(s: str) -> int:
    return text_width(ANSI_RE.sub('', s))


def _pad(s: str, width: int) -> str:
    gap = width - visible_len(s)
    return s + ' ' * gap if gap > 0 else s


def _split_at(text: str, limit: int) -> tuple[str, str]:
    """Longest head of text fitting in limit cells (at least one char), and the rest."""
    used = 0
    for i, ch in enumerate(text):
        used += char_width(ch)
        if used > limit and i > 0:
            return text[:i], text[i:]
    return text, ''


def _wrap(text: str, limit: int) -> List[str]:
    """Greedy word wrap; words wider than limit are split hard."""
    limit = max(1, limit)
    lines: List[str] = []
    current = ''
    for word in text.split():
        while text_width(word) > limit:
            if current:
                lines.append(current)
                current = ''
            head, word = _split_at(word, limit)
            lines.append(head)
        if not word:
            continue
        candidate = word if not current else current + ' ' + word
        if text_width(candidate) <= limit:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines or ['']


class CardGrid:
    """Lays out a list of CardView objects for a given terminal width."""

    def __init__(self, settings: Settings, term_width: int = 0):
        self.settings = settings
        self.term_width = term_width or shutil.get_terminal_size((120, 30)).columns
        self.card_cols = max(MIN_CARD_COLS, settings.card_width // CELL_PX)
        self.gap_cols = settings.card_gap // CELL_PX

    @property
    def per_row(self) -> int:
        return max(1, (self.term_width + self.gap_cols) // (self.card_cols + self.gap_cols))

    # ---- single card ----
    def _task_lines(self, number: int, task: Task, inner: int) -> List[str]:
        box = '[x]' if task.done else '[ ]'
        prefix = f" {number}. {box} "
        style = DONE_COLOR if task.done else ''
        wrapped = _wrap(task.text, inner - len(prefix) - 1)
        out = [prefix + color(wrapped[0], style)]
        indent = ' ' * len(prefix)
        out.extend(indent + color(part, style) for part in wrapped[1:])
        return out

    def card_lines(self, number: int, card: CardView) -> List[str]:
        inner = self.card_cols - 2
        edge = color('+' + '-' * inner + '+', BORDER_COLOR)
        side = color('|', BORDER_COLOR)
        title = f" {number}. {card.title}"
        badge = f"{card.badge} "
        room = inner - len(badge)
        if text_width(title) > room:
            title = _split_at(title, max(1, room - 1))[0] + '~'
        header = color(_pad(title, room) + badge, accent_style(card.accent))
        body: List[str] = []
        if card.empty:
            body.append(color(f" {EMPTY_BODY}", EMPTY_COLOR))
        for idx, task in enumerate(card.tasks, start=1):
            body.extend(self._task_lines(idx, task, inner))
        lines = [edge, side + header + side, edge]
        lines.extend(side + _pad(line, inner) + side for line in body)
        lines.append(edge)
        return lines

    # ---- grid ----
    def lines(self, cards: Sequence[CardView]) -> List[str]:
        out: List[str] = []
        if not cards:
            return [color('(no sections)', EMPTY_COLOR)]
        sep = ' ' * self.gap_cols
        for start in range(0, len(cards), self.per_row):
            row = [self.card_lines(start + i + 1, card) for i, card in enumerate(cards[start:start + self.per_row])]
            height = max(len(block) for block in row)
            blank = ' ' * self.card_cols
            for r in range(height):
                out.append(sep.join(block[r] if r < len(block) else blank for block in row).rstrip())
            out.append('')
        return out

    def render(self, cards: Sequence[CardView]) -> str:
        return '\n'.join(self.lines(cards))

    def display(self, cards: Sequence[CardView]) -> None:
        print(self.render(cards))
