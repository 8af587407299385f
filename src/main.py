"""Main entry point for todo cards.

Usage: todo-cards PATH [--mode window|all] [--variant inline|standalone] [--print]
"""
import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional
from cli import CLI
from display import CardGrid
from models import MODES, VARIANTS
from service import TodoCards
from storage import DocumentError, DocumentStore, Storage


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo-cards", description="Show a plain-text todo document as cards.")
    parser.add_argument("path", type=Path, help="todo document to show and edit")
    parser.add_argument("--mode", choices=MODES, help="fixed day window or every section")
    parser.add_argument("--variant", choices=VARIANTS, help="header grammar of the document")
    parser.add_argument("--days", type=int, help="number of days in the window")
    parser.add_argument("--offset", type=int, help="window start, in days after Sunday")
    parser.add_argument("--bounded", action="store_true",
                        help="never let a toggle reach past the next section header")
    parser.add_argument("--print", dest="print_only", action="store_true",
                        help="print the cards once and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=os.environ.get("TODOCARDS_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = Storage.load_settings()
    overrides = {k: v for k, v in (("mode", args.mode), ("variant", args.variant),
                                   ("days", args.days), ("week_offset", args.offset)) if v is not None}
    try:
        settings = replace(settings, **overrides)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2
    app = TodoCards(DocumentStore(args.path), settings, bounded=args.bounded)
    if args.print_only:
        try:
            CardGrid(settings).display(app.cards())
        except DocumentError as exc:
            print(exc, file=sys.stderr)
            return 1
        return 0
    CLI(app).run()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
