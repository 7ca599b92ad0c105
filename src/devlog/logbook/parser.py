"""Read entries back out of change log markdown."""

import asyncio
import logging
from datetime import date

from devlog.core.types import LogEntry
from devlog.logbook.layout import Logbook

logger = logging.getLogger(__name__)

HEADER_MARKER = "## "
NOTE_MARKER = "- "
TAG_PREFIXES = ("Tags: ", "**Tags:** ")


def _parse_tags(line: str, prefix: str) -> list[str]:
    return [tag.strip().removeprefix("#") for tag in line[len(prefix) :].split(",")]


def parse_entries(content: str, date_label: str) -> list[LogEntry]:
    """
    Parse log entries from markdown content.

    A "## " line opens an entry, "- " lines are its notes and a tags line
    replaces its tags. Anything else is ignored. Headers without notes are
    dropped.

    Args:
        content: File content
        date_label: Date the file belongs to

    Returns:
        Entries in document order
    """
    entries: list[LogEntry] = []
    lines = content.split("\n")

    header: str | None = None
    notes: list[str] = []
    tags: list[str] = []
    start_line = -1

    def flush(end_line: int) -> None:
        if header and notes:
            entries.append(
                LogEntry(
                    date=date_label,
                    header=header,
                    notes=tuple(notes),
                    tags=tuple(tags),
                    line_range=(start_line, end_line),
                )
            )

    for i, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(HEADER_MARKER):
            flush(i - 1)
            header = line[len(HEADER_MARKER) :]
            notes = []
            tags = []
            start_line = i
        elif line.startswith(NOTE_MARKER):
            notes.append(line)
        else:
            for prefix in TAG_PREFIXES:
                if line.startswith(prefix):
                    tags = _parse_tags(line, prefix)
                    break

    flush(len(lines) - 1)
    return entries


async def read_entries(logbook: Logbook, day: date) -> list[LogEntry] | None:
    """
    Parse the log file for a day.

    Returns:
        Entries, or None when the day has no log file
    """
    path = logbook.path_for(day)
    if not await asyncio.to_thread(path.exists):
        return None

    logger.debug(f"Reading entries from {path}")
    content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    return parse_entries(content, logbook.format_date(day))
