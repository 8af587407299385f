"""Line grammar for todo documents: section headers and checkbox tasks.

Two header forms are supported; which one a document uses is picked when
the Grammar is constructed, never guessed per line:

- inline:      any line containing a ``[YYYY-MM-DD]`` token starts that
               date's section (e.g. ``## Mon [2024-01-01]``).
- standalone:  a line whose whole trimmed content is ``[label]`` starts a
               section named ``label`` (e.g. ``[Backlog]``).

Task lines look like ``- [ ] text`` or ``- [x] text`` with optional leading
whitespace. Anything else is ignored.
"""
from __future__ import annotations
from datetime import date
from functools import reduce
from typing import List, NamedTuple, Optional
from models import Board, Task
import logging, re

logger = logging.getLogger(__name__)

INLINE = "inline"
STANDALONE = "standalone"

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
INLINE_HEADER_RE = re.compile(r"\[(\d{4}-\d{2}-\d{2})\]", re.ASCII)
STANDALONE_HEADER_RE = re.compile(r"^[ \t]*\[(.+)\][ \t]*$")
TASK_RE = re.compile(r"^(?P<indent>[ \t]*)- \[(?P<state>[ x])\] (?P<text>.+)$")

# state character <-> done flag
DONE_MARK = "x"
OPEN_MARK = " "


def state_char(done: bool) -> str:
    return DONE_MARK if done else OPEN_MARK


def split_lines(raw_text: str) -> List[str]:
    """Split on newlines only, dropping a trailing carriage return per line.

    The patch engine anchors on the same boundaries, so a line the parser
    sees is always a line the patch can find.
    """
    return [line[:-1] if line.endswith("\r") else line for line in raw_text.split("\n")]


def is_date_label(label: str) -> bool:
    """True when label is ``YYYY-MM-DD`` and names a real calendar day."""
    if not DATE_RE.match(label):
        return False
    try:
        date.fromisoformat(label)
    except ValueError:
        return False
    return True


class _Acc(NamedTuple):
    label: Optional[str]
    board: Board


class Grammar:
    """Parses and serializes one header variant."""

    INLINE = INLINE
    STANDALONE = STANDALONE

    def __init__(self, variant: str = INLINE):
        if variant not in (INLINE, STANDALONE):
            raise ValueError(f"Unknown grammar variant: {variant!r}")
        self.variant = variant

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Grammar({self.variant!r})"

    # -------------------- headers --------------------
    def header_label(self, line: str) -> Optional[str]:
        """Return the section label a line opens, or None."""
        if self.variant == INLINE:
            m = INLINE_HEADER_RE.search(line)
        else:
            m = STANDALONE_HEADER_RE.match(line)
        return m.group(1) if m else None

    def header_pattern(self, label: str) -> str:
        """Regex source matching the header token for one literal label."""
        esc = re.escape(label)
        if self.variant == INLINE:
            return rf"\[{esc}\]"
        return rf"^[ \t]*\[{esc}\][ \t]*\r?$"

    def any_header_pattern(self) -> str:
        """Regex source matching the header token of any label."""
        if self.variant == INLINE:
            return r"\[[0-9]{4}-[0-9]{2}-[0-9]{2}\]"
        return r"^[ \t]*\[[^\n]+\][ \t]*\r?$"

    # -------------------- parsing --------------------
    def _step(self, acc: _Acc, line: str) -> _Acc:
        label = self.header_label(line)
        if label is not None:
            return _Acc(label, acc.board)
        m = TASK_RE.match(line)
        if m and acc.label is not None:
            acc.board.add(acc.label, Task(text=m.group("text"), done=m.group("state") == DONE_MARK))
        return acc

    def parse(self, raw_text: str) -> Board:
        """Build a Board from raw document text. Never raises."""
        result = reduce(self._step, split_lines(raw_text), _Acc(None, Board()))
        logger.debug("parsed %d section(s) with %s grammar", len(result.board), self.variant)
        return result.board

    # -------------------- serialization --------------------
    def serialize(self, board: Board) -> str:
        """Write a board back out as header and task lines.

        Sections without tasks produce a bare header, which parses back to
        nothing: a parsed board never holds an empty section.
        """
        lines = []
        for section in board:
            lines.append(f"[{section.label}]")
            for task in section.tasks:
                lines.append(f"- [{state_char(task.done)}] {task.text}")
        return "\n".join(lines) + ("\n" if lines else "")


def parse(raw_text: str, variant: str = INLINE) -> Board:
    return Grammar(variant).parse(raw_text)


def serialize(board: Board, variant: str = INLINE) -> str:
    return Grammar(variant).serialize(board)
