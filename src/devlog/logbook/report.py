"""Render collected entries as markdown."""

from collections.abc import Iterable
from datetime import date

from devlog.core.types import DailySummary, LogEntry
from devlog.logbook.layout import Logbook
from devlog.logbook.summary import generate_daily_summary

DEFAULT_REPORT_TITLE = "Weekly Change Log Report"


def _tag_line(tags: Iterable[str]) -> str:
    return "Tags: " + ", ".join(f"#{tag}" for tag in tags)


def render_entries(entries: Iterable[LogEntry]) -> str:
    """Render entries as header/notes/tags blocks that parse back unchanged."""
    blocks = []
    for entry in entries:
        block = f"## {entry.header}\n\n" + "\n".join(entry.notes) + "\n\n"
        if entry.tags:
            block += _tag_line(entry.tags) + "\n\n"
        blocks.append(block)
    return "".join(blocks)


def count_by_category(summary: DailySummary) -> dict[str, int]:
    """Count entries per header across a date -> header grouping."""
    counts: dict[str, int] = {}
    for date_entries in summary.entries.values():
        for category, entries in date_entries.items():
            counts[category] = counts.get(category, 0) + len(entries)
    return counts


def render_report(
    summary: DailySummary,
    title: str = DEFAULT_REPORT_TITLE,
    include_stats: bool = True,
) -> str:
    """
    Render a summary grouped by date and header as a markdown report.

    Args:
        summary: Summary with entries grouped date -> header -> entries
        title: Report title
        include_stats: Whether to add totals and per-category counts

    Returns:
        Markdown document
    """
    markdown = f"# {title}\n\n"
    markdown += f"**Period**: {summary.start_date} to {summary.end_date}\n\n"

    if include_stats:
        markdown += f"**Total Entries**: {summary.total_entries}\n\n"
        markdown += "## Summary by Category\n\n"
        for category, count in count_by_category(summary).items():
            markdown += f"- **{category}**: {count} entries\n"
        markdown += "\n"

    for day, date_entries in summary.entries.items():
        markdown += f"## {day}\n\n"
        for category, entries in date_entries.items():
            markdown += f"### {category}\n\n"
            for entry in entries:
                markdown += "\n".join(entry.notes) + "\n\n"
                if entry.tags:
                    markdown += _tag_line(entry.tags) + "\n\n"

    return markdown


async def generate_markdown_report(
    logbook: Logbook,
    start: date | None = None,
    end: date | None = None,
    title: str = DEFAULT_REPORT_TITLE,
    include_stats: bool = True,
) -> str:
    """Build a markdown report for a span (defaults to the last week)."""
    summary = await generate_daily_summary(
        logbook, start=start, end=end, by_date=True, by_category=True
    )
    return render_report(summary, title=title, include_stats=include_stats)
