"""Color & style helpers.

Decisions:
- Card header accents come from a fixed palette, picked by card position.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Palette override via TODOCARDS_ACCENTS (comma separated hex) in the
  environment or the project .env file.
"""
from __future__ import annotations
import logging, os, sys
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _to_256(r: int, g: int, b: int) -> int:
    """Approximate RGB to an xterm 256-color cube index."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)

def _from_hex(hex_code: str, background: bool = False) -> str:
    """Convert a hex color code to a foreground or background ANSI sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    layer = 48 if background else 38
    if _USE_TRUECOLOR:
        return f"\033[{layer};2;{r};{g};{b}m"
    return f"\033[{layer};5;{_to_256(r, g, b)}m"

def is_hex(value: str) -> bool:
    h = value.strip().lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
STRIKE = _code('9')

# Default accents (warm header tints of the original board)
ACCENTS_DEFAULT = ['#FFE4B5', '#FFD4B5', '#FFE5CC', '#FFF4E0', '#FFEFD5', '#FFE4C4', '#FFDAB9']
HEX_TEXT_ON_ACCENT = '#3A2E1F'
HEX_DONE = '#8A8A8A'
HEX_BORDER = '#C8A27A'

def _read_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    try:
        text = path.read_text()
    except OSError as exc:
        logger.warning("could not read %s: %s", path, exc)
        return values
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        values[k.strip()] = v.strip()
    return values

def parse_palette(raw: Optional[str]) -> List[str]:
    """Parse a comma separated list of hex colors; invalid entries are dropped."""
    if not raw:
        return []
    palette = []
    for item in raw.split(','):
        if is_hex(item):
            palette.append('#' + item.strip().lstrip('#').upper())
        elif item.strip():
            logger.warning("ignoring invalid accent color %r", item.strip())
    return palette

# Resolve final palette (priority: real env var > .env override > default)
_ENV_OVERRIDES = _read_env_file(Path(__file__).resolve().parent.parent / '.env')
ACCENT_PALETTE: List[str] = (
    parse_palette(os.environ.get('TODOCARDS_ACCENTS'))
    or parse_palette(_ENV_OVERRIDES.get('TODOCARDS_ACCENTS'))
    or list(ACCENTS_DEFAULT)
)

TEXT_ON_ACCENT = _from_hex(HEX_TEXT_ON_ACCENT)
DONE_COLOR = _from_hex(HEX_DONE) + STRIKE
BORDER_COLOR = _from_hex(HEX_BORDER)
EMPTY_COLOR = DIM

def accent_style(hex_code: str) -> str:
    """Header style for an accent: accent background, dark bold text."""
    return _from_hex(hex_code, background=True) + TEXT_ON_ACCENT + BOLD

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','accent_style','parse_palette','is_hex','RESET','BOLD','DIM','STRIKE',
    'ACCENT_PALETTE','ACCENTS_DEFAULT','DONE_COLOR','BORDER_COLOR','EMPTY_COLOR','_ENABLE',
]
