"""Colours for the interactive list.

Pending and done tasks get their own colour, warnings and errors another.
Output is plain when stdout is not a terminal (FORCE_COLOR=1 overrides) or
when NO_COLOR is set. Hex overrides TODO_PRIMARY, TODO_PENDING and TODO_DONE
come from the environment first, then the workspace .env file.
"""
from __future__ import annotations
import os, sys
from pathlib import Path
from config import read_dotenv

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_ENABLE = (_FORCE or sys.stdout.isatty()) and os.environ.get("NO_COLOR") is None
_TRUECOLOR = any(tok in os.environ.get("COLORTERM", "").lower() for tok in ("truecolor", "24bit"))

PALETTE = {
    'TODO_PRIMARY': '#476EAE',
    'TODO_PENDING': '#48B3AF',
    'TODO_DONE': '#A7E399',
    'warning': '#F6FF99',
    'error': '#E06C75',
}


def _sgr(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _valid_hex(value: str | None) -> bool:
    h = (value or '').lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def _palette_value(key: str, overrides: dict[str, str]) -> str:
    for value in (os.environ.get(key), overrides.get(key)):
        if _valid_hex(value):
            return '#' + value.lstrip('#')
    return PALETTE[key]


def foreground(hex_code: str) -> str:
    """Escape sequence for a hex colour; 256-colour cube without truecolor."""
    if not _ENABLE:
        return ''
    h = hex_code.lstrip('#')
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    if _TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    r6, g6, b6 = (round(c / 255 * 5) for c in (r, g, b))
    return f"\033[38;5;{16 + 36 * r6 + 6 * g6 + b6}m"


RESET = _sgr('0')
BOLD = _sgr('1')
DIM = _sgr('2')

_overrides = read_dotenv(Path.cwd() / '.env')
PRIMARY = foreground(_palette_value('TODO_PRIMARY', _overrides))

STATUS_COLOR = {
    'pending': foreground(_palette_value('TODO_PENDING', _overrides)),
    'done': foreground(_palette_value('TODO_DONE', _overrides)) + DIM,
}

LEVEL_COLOR = {
    'info': '',
    'warning': foreground(PALETTE['warning']),
    'error': foreground(PALETTE['error']) + BOLD,
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY


def color(text: str, *styles: str) -> str:
    """Wrap ``text`` in the given styles; unchanged when colour is off."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET


__all__ = ['color', 'BOLD', 'STATUS_COLOR', 'LEVEL_COLOR', 'HEADER_COLOR', 'ID_COLOR', 'EMPTY_COLOR']
