"""Collect, filter and group entries across a span of days."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from devlog.core.types import DailySummary, GroupedEntries, LogEntry
from devlog.logbook.layout import Logbook, iter_days
from devlog.logbook.parser import read_entries

logger = logging.getLogger(__name__)

DEFAULT_SPAN_DAYS = 7


def filter_entries(
    entries: Iterable[LogEntry],
    category: str | None = None,
    tags: Sequence[str] | None = None,
) -> list[LogEntry]:
    """
    Filter entries by header and tags.

    Args:
        entries: Entries to filter
        category: Keep only entries whose header equals this (case-sensitive)
        tags: Keep entries carrying at least one of these tags

    Returns:
        Matching entries in input order
    """
    selected = list(entries)
    if category:
        selected = [entry for entry in selected if entry.header == category]
    if tags:
        selected = [
            entry for entry in selected if any(tag in entry.tags for tag in tags)
        ]
    return selected


async def get_entries_in_range(
    logbook: Logbook,
    start: date,
    end: date | None = None,
    category: str | None = None,
    tags: Sequence[str] | None = None,
) -> list[LogEntry]:
    """
    Get entries logged between two dates, inclusive.

    Days are read one after another; days without a log file are skipped.

    Args:
        logbook: Logbook to read
        start: First day
        end: Last day (defaults to today)
        category: Optional exact header filter
        tags: Optional tag filter (any tag matches)

    Returns:
        Entries ordered by day, then by position in the file
    """
    entries: list[LogEntry] = []
    for day in iter_days(start, end or date.today()):
        parsed = await read_entries(logbook, day)
        if parsed is None:
            continue
        entries.extend(filter_entries(parsed, category=category, tags=tags))
    logger.debug(f"Collected {len(entries)} entries from {start} to {end}")
    return entries


def group_entries(
    entries: Sequence[LogEntry], by_date: bool = True, by_category: bool = False
) -> GroupedEntries:
    """
    Bucket entries by date, by header, both (date -> header), or not at all.

    Key order follows first appearance.
    """
    if by_date and by_category:
        nested: dict[str, dict[str, list[LogEntry]]] = {}
        for entry in entries:
            nested.setdefault(entry.date, {}).setdefault(entry.header, []).append(
                entry
            )
        return nested

    if by_date or by_category:
        grouped: dict[str, list[LogEntry]] = {}
        for entry in entries:
            key = entry.date if by_date else entry.header
            grouped.setdefault(key, []).append(entry)
        return grouped

    return list(entries)


async def generate_daily_summary(
    logbook: Logbook,
    start: date | None = None,
    end: date | None = None,
    by_date: bool = True,
    by_category: bool = False,
) -> DailySummary:
    """Summarize entries in a span (defaults to the last week)."""
    end = end or date.today()
    start = start or end - timedelta(days=DEFAULT_SPAN_DAYS)

    entries = await get_entries_in_range(logbook, start, end)
    return DailySummary(
        start_date=logbook.format_date(start),
        end_date=logbook.format_date(end),
        total_entries=len(entries),
        entries=group_entries(entries, by_date=by_date, by_category=by_category),
    )
