"""Load -> mutate -> save orchestration for each TODO list operation.

Nothing is cached between calls: every operation reads the task file fresh,
applies one engine operation and writes the result back. Expected failures
(empty description, stale index, unreadable or unwritable file) come back as
an Outcome with a message rather than an exception.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple
from loguru import logger
from models import Task, CompletionLogEntry, ValidationError, TaskIndexError, StorageError
from storage import FileStorage
from todo_list import TodoListEngine, parse, serialize, status_summary
import completion_log

INFO, WARNING, ERROR = "info", "warning", "error"


@dataclass
class Outcome:
    """Result of one service call.

    Fields:
        tasks: List after the operation (unchanged on warnings).
        message: Text for the user; empty when there is nothing to say.
        level: "info", "warning" or "error".
        persisted: False when the tasks could not be written back.
        applied: False when the operation was rejected or never ran.
    """
    tasks: List[Task] = field(default_factory=list)
    message: str = ""
    level: str = INFO
    persisted: bool = True
    applied: bool = True

    @property
    def ok(self) -> bool:
        return self.level != ERROR


class TodoService:
    def __init__(self, todo_file: Path, log_file: Optional[Path] = None,
                 engine: Optional[TodoListEngine] = None, storage=None,
                 clock: Callable[[], datetime] = datetime.now):
        self.todo_file = Path(todo_file)
        self.log_file = Path(log_file) if log_file else None
        self.engine = engine or TodoListEngine()
        self.storage = storage or FileStorage()
        self.clock = clock

    @classmethod
    def from_settings(cls, settings) -> "TodoService":
        return cls(
            settings.todo_file,
            settings.log_file if settings.completion_log else None,
            engine=TodoListEngine(insert=settings.insert, reorder=settings.reorder),
        )

    # -------------------- loading / saving --------------------
    def _load(self) -> Tuple[List[Task], Optional[str]]:
        try:
            raw = self.storage.read(self.todo_file)
        except StorageError as exc:
            return [], f"Could not read TODO list ({exc}); showing an empty list."
        return (parse(raw) if raw is not None else []), None

    def _save(self, tasks: List[Task], message: str) -> Outcome:
        try:
            self.storage.write(self.todo_file, serialize(tasks))
        except StorageError as exc:
            return Outcome(tasks, f"Could not save TODO list ({exc}).", ERROR, persisted=False)
        return Outcome(tasks, message)

    # -------------------- queries --------------------
    def tasks(self) -> Outcome:
        tasks, error = self._load()
        if error:
            return Outcome(tasks, error, ERROR)
        return Outcome(tasks)

    def status(self) -> Outcome:
        """Status line text as the message, or the read error."""
        tasks, error = self._load()
        if error:
            return Outcome(tasks, error, ERROR)
        return Outcome(tasks, status_summary(tasks))

    def history(self) -> List[CompletionLogEntry]:
        if self.log_file is None:
            return []
        try:
            raw = self.storage.read(self.log_file)
        except StorageError as exc:
            logger.error("Could not read completion log: {}", exc)
            return []
        return completion_log.parse(raw) if raw is not None else []

    # -------------------- task operations --------------------
    def add(self, description: str) -> Outcome:
        tasks, error = self._load()
        if error:
            # do not overwrite a file we could not read
            return Outcome(tasks, error, ERROR, persisted=False, applied=False)
        try:
            updated = self.engine.add(tasks, description)
        except ValidationError as exc:
            logger.warning("Rejected add: {}", exc)
            return Outcome(tasks, str(exc), WARNING, applied=False)
        logger.info("Added task {!r}", description.strip())
        return self._save(updated, "")

    def toggle(self, index: int, expected: Optional[str] = None) -> Outcome:
        """Flip the task at ``index``.

        ``expected`` is the description the caller showed the user; if the
        file changed underneath and that task is no longer at ``index``
        the toggle is refused.
        """
        tasks, error = self._load()
        if error:
            return Outcome(tasks, error, ERROR, persisted=False, applied=False)
        try:
            if expected is not None and (index >= len(tasks) or index < 0
                                         or tasks[index].description != expected):
                raise TaskIndexError(f"Task #{index + 1} changed on disk; refresh and try again.")
            updated = self.engine.toggle_done(tasks, index)
        except TaskIndexError as exc:
            logger.warning("Rejected toggle: {}", exc)
            return Outcome(tasks, str(exc), WARNING, applied=False)
        task = tasks[index]
        logger.info("Toggled task #{} {!r}", index + 1, task.text)
        outcome = self._save(updated, "")
        if outcome.persisted and not task.done:
            log_error = self._record_completion(task)
            if log_error:
                outcome.message = "\n".join(m for m in (outcome.message, log_error) if m)
                if outcome.level == INFO:
                    outcome.level = WARNING
        return outcome

    def reorder(self) -> Outcome:
        tasks, error = self._load()
        if error:
            return Outcome(tasks, error, ERROR, persisted=False, applied=False)
        return self._save(self.engine.reorder(tasks), "")

    def clear(self) -> Outcome:
        """Drop every task. Callers confirm with the user first."""
        tasks, error = self._load()
        if error:
            # an unreadable file is still cleared on request
            logger.warning("Clearing unreadable list at {}", self.todo_file)
        logger.info("Clearing {} task(s)", len(tasks))
        return self._save(self.engine.clear(tasks), "All TODOs cleared.")

    # -------------------- completion log --------------------
    def _record_completion(self, task: Task) -> Optional[str]:
        """Prepend a log entry; returns an error message instead of raising."""
        if self.log_file is None:
            return None
        try:
            raw = self.storage.read(self.log_file)
            entries = completion_log.parse(raw) if raw is not None else []
            entries = completion_log.record(entries, task.text, self.clock())
            self.storage.write(self.log_file, completion_log.serialize(entries))
        except StorageError as exc:
            logger.warning("Completion log not updated for {!r}: {}", task.text, exc)
            return f"Task saved, but the completion log could not be updated ({exc})."
        return None
