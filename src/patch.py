"""Flip one task's state character inside raw document text.

Nothing about a task survives from parse time except its section label and
its text, so the line is found again by pattern:

    ( <header for label> <any text, lazily> ^ <indent> "- [" ) (state) ( "] " <text> ) <end of line>

Only the state group is rewritten. Every other character, including the
header line and whatever sits between it and the task, is copied through.

Known hazards, kept as documented behavior:

- By default the lazy span is not stopped by other headers. If the label's
  section has no such task but a later section does, the later one is
  flipped. ``bounded=True`` stops the span at the next header line.
- Replacement is global. When the same label header appears more than once
  with the same task text beneath each, every such line is flipped; which
  line the user meant is undefined.
"""
from __future__ import annotations
from typing import Optional, Pattern, Tuple
from grammar import Grammar, state_char
import logging, re

logger = logging.getLogger(__name__)

_DEFAULT_GRAMMAR = Grammar()


def build_pattern(section_label: str, task_text: str, grammar: Optional[Grammar] = None,
                  bounded: bool = False) -> Pattern[str]:
    grammar = grammar or _DEFAULT_GRAMMAR
    header = grammar.header_pattern(section_label)
    if bounded:
        span = rf"(?:(?!{grammar.any_header_pattern()})[\s\S])*?"
    else:
        span = r"[\s\S]*?"
    text = re.escape(task_text)
    return re.compile(rf"({header}{span}^[ \t]*- \[)([ x])(\] {text})(?=\r?$)", re.MULTILINE)


def patch_with_count(raw_text: str, section_label: str, task_text: str, new_done: bool,
                     grammar: Optional[Grammar] = None, bounded: bool = False) -> Tuple[str, int]:
    """Like patch(), also returning how many task lines the pattern matched.

    A count of 0 means the edit could not be applied; more than 1 means the
    target was ambiguous and every match was rewritten.
    """
    if not section_label or not task_text:
        return raw_text, 0
    mark = state_char(new_done)
    pattern = build_pattern(section_label, task_text, grammar, bounded)
    new_text, count = pattern.subn(lambda m: m.group(1) + mark + m.group(3), raw_text)
    return new_text, count


def patch(raw_text: str, section_label: str, task_text: str, new_done: bool,
          grammar: Optional[Grammar] = None, bounded: bool = False) -> str:
    """Return raw_text with the task's checkbox set to new_done.

    Pure and idempotent. When the task cannot be found the input comes back
    unchanged; this never raises on document content.
    """
    new_text, count = patch_with_count(raw_text, section_label, task_text, new_done, grammar, bounded)
    if count == 0:
        logger.debug("no task %r under [%s]", task_text, section_label)
    elif count > 1:
        logger.warning("task %r under [%s] matched %d lines; all were set", task_text, section_label, count)
    return new_text
