"""TODO list engine: parsing, serialization, mutation and ordering rules.

The engine holds no task state. Every operation takes a list snapshot and
returns a new list; loading and saving belong to the caller (see service.py).

Two policies are configurable because the list has shipped with both:
  insert:  "prepend" (newest task first, default) or "append".
  reorder: "stable" (toggle only flips the marker; call reorder() to
           partition) or "immediate" (toggle also moves the task).
"""
from typing import List, Optional, Sequence, Tuple
from models import Task, ValidationError, TaskIndexError

INSERT_POLICIES: Tuple[str, ...] = ("prepend", "append")
REORDER_POLICIES: Tuple[str, ...] = ("stable", "immediate")
DONE_INDICATOR = "✓"
PENDING_INDICATOR = "○"
ALL_DONE_MESSAGE = "All TODOs done!"


# -------------------- text form --------------------
def parse(raw_text: str) -> List[Task]:
    """Build a task list from file text; blank lines are dropped, never an error."""
    return [Task(line.strip()) for line in raw_text.splitlines() if line.strip()]


def serialize(tasks: Sequence[Task]) -> str:
    return "\n".join(task.description for task in tasks)


# -------------------- queries --------------------
def latest_pending(tasks: Sequence[Task]) -> Optional[Task]:
    """Return the last pending task in list order, or None."""
    for task in reversed(tasks):
        if not task.done:
            return task
    return None


def reorder(tasks: Sequence[Task]) -> List[Task]:
    """Stable partition: pending tasks first, then done tasks."""
    return [t for t in tasks if not t.done] + [t for t in tasks if t.done]


def clear(tasks: Sequence[Task]) -> List[Task]:
    return []


# -------------------- presentation --------------------
def render_task_line(task: Task) -> str:
    indicator = DONE_INDICATOR if task.done else PENDING_INDICATOR
    return f"{indicator} {task.text}"


def status_summary(tasks: Sequence[Task]) -> str:
    task = latest_pending(tasks)
    if task is None:
        return ALL_DONE_MESSAGE
    return task.text


class TodoListEngine:
    """Mutation rules for an ordered task list under the configured policies."""

    def __init__(self, insert: str = "prepend", reorder: str = "stable"):
        if insert not in INSERT_POLICIES:
            raise ValueError(f"Invalid insert policy: {insert}")
        if reorder not in REORDER_POLICIES:
            raise ValueError(f"Invalid reorder policy: {reorder}")
        self.insert: str = insert
        self.reorder_policy: str = reorder

    # module-level helpers exposed on the engine for callers holding one
    parse = staticmethod(parse)
    serialize = staticmethod(serialize)
    reorder = staticmethod(reorder)
    clear = staticmethod(clear)
    latest_pending = staticmethod(latest_pending)
    render_task_line = staticmethod(render_task_line)
    status_summary = staticmethod(status_summary)

    # -------------------- task operations --------------------
    def add(self, tasks: Sequence[Task], description: str) -> List[Task]:
        title = description.strip() if description else ''
        if not title:
            raise ValidationError("Task description must not be empty.")
        if self.insert == "append":
            return list(tasks) + [Task(title)]
        return [Task(title)] + list(tasks)

    def toggle_done(self, tasks: Sequence[Task], index: int) -> List[Task]:
        if index < 0 or index >= len(tasks):
            raise TaskIndexError(f"No task #{index + 1} (list has {len(tasks)}).")
        toggled = tasks[index].toggled()
        result = list(tasks)
        if self.reorder_policy == "stable":
            result[index] = toggled
            return result
        del result[index]
        # land just before the first done task, or at the end
        target = next((i for i, t in enumerate(result) if t.done), len(result))
        result.insert(target, toggled)
        return result

    def __repr__(self) -> str:
        return f"TodoListEngine(insert={self.insert!r}, reorder={self.reorder_policy!r})"
