"""Append professionally formatted entries to the daily change log."""

import asyncio
import logging
from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path

from devlog.core.config import DEFAULT_HEADER, ENTRY_TEMPLATE
from devlog.core.types import LogResult, WriteResult
from devlog.logbook.layout import Logbook

logger = logging.getLogger(__name__)


class EntryError(ValueError):
    """Raised when an entry is missing required input."""


def compose_entry(
    header: str, notes: str, time_str: str, tags: Sequence[str] = ()
) -> str:
    """Render one entry block (header, notes, timestamp and tags)."""
    block = (
        ENTRY_TEMPLATE.replace("{header}", header)
        .replace("{notes}", notes)
        .replace("{time}", time_str)
    )
    if tags:
        block += f"**Tags:** {', '.join(f'#{tag}' for tag in tags)}\n\n"
    return block


def _append_to_file(path: Path, block: str, file_header: str) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    content = "" if path.exists() else file_header
    content += block
    with open(path, "a", encoding="utf-8") as f:
        f.write(content)
    return content


async def append_entry(
    logbook: Logbook,
    notes: str,
    header: str | None = None,
    category: str | None = None,
    tags: Sequence[str] | None = None,
    target_date: date | None = None,
    now: datetime | None = None,
) -> WriteResult:
    """
    Append an entry to a day's change log.

    The file is created with the document header on first write. Existing
    content is never rewritten.

    Args:
        logbook: Target logbook
        notes: Free-text notes, one item per line
        header: Entry title (falls back to category, then "General Updates")
        category: Category used when no header is given
        tags: Optional tags
        target_date: Day to log for (defaults to today)
        now: Timestamp for the "Logged at" line (defaults to now)

    Returns:
        WriteResult describing what was written

    Raises:
        EntryError: If notes are empty
        OSError: If the file cannot be written
    """
    if not notes or not notes.strip():
        raise EntryError("Notes are required")

    raw_header = (header or "").strip() or (category or "").strip() or DEFAULT_HEADER
    entry_header = logbook.formatter.to_professional_header(raw_header)
    professional_notes = logbook.formatter.format_professional_notes(notes)
    tag_list = list(tags or [])

    time_str = (now or datetime.now()).strftime("%H:%M:%S")
    date_str = logbook.format_date(target_date)
    path = logbook.path_for(target_date)

    block = compose_entry(entry_header, professional_notes, time_str, tag_list)
    file_header = logbook.file_header.replace("{date}", date_str)
    content = await asyncio.to_thread(_append_to_file, path, block, file_header)
    logger.info(f"Professional entry added to {path}")

    return WriteResult(
        path=path,
        header=entry_header,
        date=date_str,
        tags=tag_list,
        content=content,
        original_header=raw_header,
        original_notes=notes,
    )


def _split_tags(tags: Sequence[str] | str | None) -> list[str]:
    if tags is None:
        return []
    if isinstance(tags, str):
        return [tag.strip() for tag in tags.split(",") if tag.strip()]
    return list(tags)


async def log_work(
    logbook: Logbook,
    header: str | None,
    notes: str,
    category: str | None = "General",
    tags: Sequence[str] | str | None = None,
    target_date: date | None = None,
) -> LogResult:
    """
    Log work for today without raising.

    Cleans up agent/CLI input (bulleted headers, escaped newlines, comma
    separated tags) before writing.

    Returns:
        LogResult with success=False and the error message on failure
    """
    clean_header = header
    if clean_header and clean_header.startswith("- "):
        clean_header = clean_header[2:].strip()

    if notes:
        notes = notes.replace("\\n", "\n")

    try:
        result = await append_entry(
            logbook,
            notes=notes,
            header=clean_header,
            category=category or "General",
            tags=_split_tags(tags),
            target_date=target_date,
        )
    except (EntryError, OSError) as e:
        logger.error(f"Error adding entry: {e}")
        return LogResult.failure(str(e))

    return LogResult.from_write(result)
