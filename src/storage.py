"""Persistence helpers: whole-file text read/write for the task and log files.

The engine only needs two calls, read(path) and write(path, text). A missing
file reads as None so callers can start from an empty list; every other I/O
problem surfaces as StorageError.
"""
from pathlib import Path
from typing import Optional, Union
from loguru import logger
from models import StorageError

PathLike = Union[str, Path]


class FileStorage:
    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, path: PathLike) -> Optional[str]:
        """Return the file text, or None when the file does not exist."""
        path = Path(path)
        try:
            with open(path, "r", encoding=self.encoding) as f:
                return f.read()
        except FileNotFoundError:
            logger.debug("No file at {}; treating as empty", path)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read {}: {}", path, exc)
            raise StorageError(path, exc) from exc

    def write(self, path: PathLike, text: str) -> None:
        """Replace the file contents, creating parent directories as needed."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding=self.encoding) as f:
                f.write(text)
        except OSError as exc:
            logger.error("Failed to write {}: {}", path, exc)
            raise StorageError(path, exc) from exc
