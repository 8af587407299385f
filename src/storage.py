"""Persistence helpers: the todo document itself and the display settings.

The document file is the system of record. It is read in full right before
every patch and written in full right after; nothing here caches its text.
"""
from __future__ import annotations
import json, logging, os, shutil, tempfile
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional
from models import Settings

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path(__file__).parent.parent / 'data' / 'settings.json'


class DocumentError(Exception):
    """Reading or writing the todo document failed."""


class DocumentStore:
    """A plain-text todo document on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read_text(self) -> str:
        """Full current text. Missing file -> empty document."""
        if not self.path.exists():
            return ''
        try:
            with open(self.path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(f'Could not read {self.path}: {exc}') from exc

    def write_text(self, text: str) -> None:
        """Replace the whole document atomically (temp file + rename).

        A symlinked document is written through to its target, and the
        target keeps its permission bits.
        """
        target = self.path.resolve()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f'.{target.name}.', dir=target.parent)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                    f.write(text)
                if target.exists():
                    shutil.copymode(target, tmp)
                os.replace(tmp, target)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except (OSError, UnicodeEncodeError) as exc:
            raise DocumentError(f'Could not write {self.path}: {exc}') from exc
        logger.debug('wrote %d chars to %s', len(text), self.path)


class Storage:
    @staticmethod
    def settings_path() -> Path:
        override = os.environ.get('TODOCARDS_SETTINGS')
        return Path(override).expanduser() if override else SETTINGS_FILE

    @staticmethod
    def load_settings(path: Optional[Path] = None) -> Settings:
        """Load settings JSON; missing file or bad values fall back to defaults."""
        path = path or Storage.settings_path()
        if not path.exists():
            return Settings()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning('could not load settings from %s: %s', path, exc)
            return Settings()
        if not isinstance(data, dict):
            logger.warning('ignoring settings in %s: expected an object', path)
            return Settings()
        return _settings_from_dict(data)

    @staticmethod
    def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
        """Persist settings to disk (pretty-printed)."""
        path = path or Storage.settings_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(settings), f, indent=4)


def _settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Build Settings field by field, keeping the default for any bad value."""
    defaults = Settings()
    values: Dict[str, Any] = {}
    for fld in fields(Settings):
        if fld.name not in data:
            continue
        raw = data[fld.name]
        default = getattr(defaults, fld.name)
        if isinstance(default, int) and (isinstance(raw, bool) or not isinstance(raw, int)):
            logger.warning('ignoring setting %s=%r: expected an integer', fld.name, raw)
            continue
        try:
            Settings(**{fld.name: raw})
        except (TypeError, ValueError) as exc:
            logger.warning('ignoring setting %s=%r: %s', fld.name, raw, exc)
            continue
        values[fld.name] = raw
    return Settings(**values)
