"""Data models for the todo cards board.

A Board is derived state: it is rebuilt from the document text on every
render and discarded afterwards. The document text is the only record of
which tasks exist and whether they are done.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

@dataclass
class Task:
    """A single checkbox line.

    Fields:
        text: Content after the checkbox marker, verbatim (one separator
              space removed). Together with the section label this is the
              only way to find the line again in the document.
        done: True when the state character is "x".
    """
    text: str
    done: bool = False


@dataclass
class Section:
    """A labeled group of tasks (an ISO date or a free-text column name)."""
    label: str
    tasks: List[Task] = field(default_factory=list)

    @property
    def done_count(self) -> int:
        return sum(1 for t in self.tasks if t.done)


class Board:
    """Sections keyed by label, iterated in first-seen order.

    A label that shows up more than once in a document keeps appending to
    the bucket created on its first appearance.
    """

    def __init__(self, sections: Optional[Iterable[Section]] = None):
        self._sections: Dict[str, Section] = {}
        for section in sections or ():
            bucket = self._sections.setdefault(section.label, Section(section.label))
            bucket.tasks.extend(section.tasks)

    def add(self, label: str, task: Task) -> None:
        section = self._sections.get(label)
        if section is None:
            section = self._sections[label] = Section(label)
        section.tasks.append(task)

    def get(self, label: str) -> Optional[Section]:
        return self._sections.get(label)

    def labels(self) -> List[str]:
        return list(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections.values())

    def __len__(self) -> int:
        return len(self._sections)

    def __contains__(self, label: object) -> bool:
        return label in self._sections

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Board({list(self)!r})"


@dataclass
class CardView:
    """One rendered card: what the presentation layer draws.

    ``accent`` is a palette hex string picked by card position, so it
    changes when cards are re-ordered even if their content does not.
    """
    label: str
    title: str
    done: int
    total: int
    accent: str
    tasks: List[Task] = field(default_factory=list)

    @property
    def badge(self) -> str:
        return f"{self.done}/{self.total}"

    @property
    def empty(self) -> bool:
        return self.total == 0


MODES: Tuple[str, ...] = ("window", "all")
VARIANTS: Tuple[str, ...] = ("inline", "standalone")

@dataclass
class Settings:
    """Persisted display settings.

    card_width / card_gap are in pixels; the terminal display converts them
    to character cells. days / week_offset drive the fixed window mode.
    """
    card_width: int = 280
    card_gap: int = 16
    days: int = 3
    week_offset: int = 0
    mode: str = "window"
    variant: str = "inline"

    def __post_init__(self) -> None:
        if self.card_width <= 0:
            raise ValueError(f"card_width must be positive, got {self.card_width}")
        if self.card_gap < 0:
            raise ValueError(f"card_gap must not be negative, got {self.card_gap}")
        if self.days <= 0:
            raise ValueError(f"days must be positive, got {self.days}")
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if self.variant not in VARIANTS:
            raise ValueError(f"variant must be one of {VARIANTS}, got {self.variant!r}")
