"""Data models for the terminal TODO list.

Completion is stored as a literal suffix on the description (" [DONE]")
rather than a separate field so the task file stays a plain one-line-per-task
text file. The ``done`` flag below is derived from that suffix.
"""
from __future__ import annotations
from dataclasses import dataclass

DONE_MARKER = " [DONE]"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


class TodoError(Exception):
    """Base class for all TODO list errors."""


class ValidationError(TodoError, ValueError):
    """Raised for an empty task description."""


class TaskIndexError(TodoError, IndexError):
    """Raised when a toggle target is not (or no longer) in the list."""


class StorageError(TodoError, OSError):
    """Raised when the backing file cannot be read or written."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


def normalize_description(description: str) -> str:
    """Collapse repeated trailing done markers into one.

    "Ship [DONE] [DONE]" and "Ship  [DONE]" both become "Ship [DONE]", so a
    single toggle always reaches the other state.
    """
    done = False
    while description.endswith(DONE_MARKER):
        done = True
        description = description[:-len(DONE_MARKER)].rstrip()
    return description + DONE_MARKER if done else description


@dataclass(frozen=True)
class Task:
    """A single TODO entry.

    Fields:
        description: Trimmed text as persisted, including at most one done marker.
    """
    description: str

    def __post_init__(self) -> None:
        object.__setattr__(self, 'description', normalize_description(self.description))

    @property
    def done(self) -> bool:
        return self.description.endswith(DONE_MARKER)

    @property
    def text(self) -> str:
        """Description without the done marker."""
        if self.done:
            return self.description[:-len(DONE_MARKER)]
        return self.description

    def toggled(self) -> "Task":
        if self.done:
            return Task(self.text)
        return Task(self.description + DONE_MARKER)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(text={self.text!r}, done={self.done})"


@dataclass(frozen=True)
class CompletionLogEntry:
    timestamp: str
    description: str

    def line(self) -> str:
        return f"{self.timestamp} {self.description}"
