"""Runtime settings.

Priority: real environment variable > project .env file > default.
The .env file is looked up in the current directory (the workspace) and
only TODO_* keys are read from it.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from loguru import logger
from todo_list import INSERT_POLICIES, REORDER_POLICIES

TODO_FILENAME = "todo.txt"
LOG_FILENAME = "todo-completed.txt"


def truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def read_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=VALUE lines of a .env file; other lines are ignored."""
    values: dict[str, str] = {}
    if not path.is_file():
        return values
    try:
        lines = path.read_text().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable {}: {}", path, exc)
        return values
    for line in lines:
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k.startswith('TODO_'):
            values[k] = v.strip().strip('"\'')
    return values


@dataclass
class Settings:
    todo_file: Path
    log_file: Path
    completion_log: bool = True
    insert: str = "prepend"
    reorder: str = "stable"
    alt_screen: bool = True
    log_level: str = "INFO"
    log_path: Optional[Path] = None

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None,
             cwd: Optional[Path] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        cwd = Path.cwd() if cwd is None else Path(cwd)
        overrides = read_dotenv(cwd / '.env')

        def get(key: str) -> Optional[str]:
            return environ.get(key) or overrides.get(key)

        data_dir = Path(get('TODO_DATA_DIR') or cwd).expanduser()
        log_path = get('TODO_LOG_PATH')
        return cls(
            todo_file=Path(get('TODO_FILE') or data_dir / TODO_FILENAME).expanduser(),
            log_file=Path(get('TODO_LOG_FILE') or data_dir / LOG_FILENAME).expanduser(),
            completion_log=truthy_env(get('TODO_COMPLETION_LOG'), True),
            insert=_choice('TODO_INSERT', get('TODO_INSERT'), INSERT_POLICIES),
            reorder=_choice('TODO_REORDER', get('TODO_REORDER'), REORDER_POLICIES),
            alt_screen=truthy_env(get('TODO_ALT_SCREEN'), True),
            log_level=(get('TODO_LOG_LEVEL') or 'INFO').upper(),
            log_path=Path(log_path).expanduser() if log_path else data_dir / '.todo' / 'todo.log',
        )


def _choice(key: str, value: Optional[str], allowed: tuple[str, ...]) -> str:
    """Return ``value`` if allowed, else the first (default) choice."""
    if value is None:
        return allowed[0]
    normalized = value.strip().lower()
    if normalized in allowed:
        return normalized
    logger.warning("Unknown {}={!r}; using {!r}", key, value, allowed[0])
    return allowed[0]
