"""Entry points the presentation layer calls.

``cards()`` is the read path (document -> Board -> card views) and
``toggle()`` the write path (document -> patch -> document). The Board is
never kept between calls, so a toggle shows up only after the next
``cards()`` re-reads and re-parses the document.
"""
from __future__ import annotations
from datetime import date
from typing import Callable, List, Optional
from grammar import Grammar
from models import CardView, Settings
from patch import patch_with_count
from render import render_all, render_window
from storage import DocumentStore
import logging

logger = logging.getLogger(__name__)


class TodoCards:
    def __init__(self, store: DocumentStore, settings: Optional[Settings] = None,
                 today: Callable[[], date] = date.today, bounded: bool = False):
        self.store = store
        self.settings = settings or Settings()
        self.today = today
        self.bounded = bounded
        self.page = 0  # window shift, in steps of settings.days

    @property
    def grammar(self) -> Grammar:
        return Grammar(self.settings.variant)

    def offset(self) -> int:
        return self.settings.week_offset + self.page * self.settings.days

    def cards(self) -> List[CardView]:
        """Re-read the document and render it in the configured mode."""
        board = self.grammar.parse(self.store.read_text())
        if self.settings.mode == 'all':
            return render_all(board)
        return render_window(board, self.today(), self.settings.days, self.offset())

    def toggle(self, section_label: str, task_text: str, new_done: bool) -> bool:
        """Read, patch and write back. Returns True when the document changed.

        Nothing is written when the task cannot be found or is already in
        the requested state.
        """
        raw = self.store.read_text()
        new_text, count = patch_with_count(raw, section_label, task_text, new_done,
                                           self.grammar, self.bounded)
        if count == 0:
            logger.warning('task %r not found under [%s]; document left unchanged', task_text, section_label)
            return False
        if count > 1:
            logger.warning('task %r under [%s] matched %d lines; all were set', task_text, section_label, count)
        if new_text == raw:
            return False
        self.store.write_text(new_text)
        return True
