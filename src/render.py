"""Project a Board into card views.

Rendering is a pure function of the board, the mode and the palette; it
does no I/O and wires no events. The presentation layer turns a toggle on
card ``c`` / task ``t`` into ``(cards[c].label, cards[c].tasks[t].text)``
and hands that to the patch engine.
"""
from __future__ import annotations
from datetime import date, timedelta
from typing import List, Optional, Sequence
from grammar import is_date_label
from models import Board, CardView, Section
from theme import ACCENT_PALETTE

EMPTY_BODY = "No tasks"
DATE_TITLE_FORMAT = "%a %m/%d"


def week_start_for(anchor: date, week_offset: int = 0) -> date:
    """Sunday on or before anchor, shifted by week_offset days."""
    sunday = anchor - timedelta(days=(anchor.weekday() + 1) % 7)
    return sunday + timedelta(days=week_offset)


def window_days(anchor: date, days: int, week_offset: int = 0) -> List[date]:
    start = week_start_for(anchor, week_offset)
    return [start + timedelta(days=i) for i in range(days)]


def format_label(label: str) -> str:
    """Short weekday + month/day for date labels, the label itself otherwise."""
    if is_date_label(label):
        return date.fromisoformat(label).strftime(DATE_TITLE_FORMAT)
    return label


def accent_for(index: int, palette: Optional[Sequence[str]] = None) -> str:
    palette = palette or ACCENT_PALETTE
    return palette[index % len(palette)]


def _card(index: int, label: str, section: Optional[Section], palette: Optional[Sequence[str]]) -> CardView:
    tasks = list(section.tasks) if section else []
    return CardView(
        label=label,
        title=format_label(label),
        done=sum(1 for t in tasks if t.done),
        total=len(tasks),
        accent=accent_for(index, palette),
        tasks=tasks,
    )


def render_window(board: Board, anchor: date, days: int, week_offset: int = 0,
                  palette: Optional[Sequence[str]] = None) -> List[CardView]:
    """Exactly ``days`` cards, one per consecutive calendar day.

    Days with no section render as empty cards; labels that are not dates
    never appear in this mode.
    """
    cards: List[CardView] = []
    for index, day in enumerate(window_days(anchor, days, week_offset)):
        key = day.isoformat()
        cards.append(_card(index, key, board.get(key), palette))
    return cards


def render_all(board: Board, palette: Optional[Sequence[str]] = None) -> List[CardView]:
    """One card per section, in the order labels first appear."""
    return [_card(index, section.label, section, palette) for index, section in enumerate(board)]
