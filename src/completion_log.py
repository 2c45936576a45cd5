"""Completion log: a newest-first record of tasks marked done.

File format is one entry per line: ``YYYY-MM-DD HH:MM <description>``.
"""
from datetime import datetime
from typing import List, Sequence, Union
from models import CompletionLogEntry, Task, TIMESTAMP_FORMAT
import re

ENTRY_RE = re.compile(r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}) (.*\S.*)$")


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def record(entries: Sequence[CompletionLogEntry], description: str,
           timestamp: Union[datetime, str]) -> List[CompletionLogEntry]:
    """Prepend an entry for ``description``; earlier entries are kept as-is."""
    stamp = format_timestamp(timestamp) if isinstance(timestamp, datetime) else timestamp
    text = Task(description.strip()).text
    return [CompletionLogEntry(stamp, text)] + list(entries)


def parse(raw_text: str) -> List[CompletionLogEntry]:
    entries: List[CompletionLogEntry] = []
    for line in raw_text.splitlines():
        match = ENTRY_RE.match(line.strip())
        if match is None:
            continue
        entries.append(CompletionLogEntry(match.group(1), match.group(2).strip()))
    return entries


def serialize(entries: Sequence[CompletionLogEntry]) -> str:
    return "\n".join(entry.line() for entry in entries)
