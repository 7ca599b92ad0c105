"""Logbook: date-named markdown change logs.

Each calendar day gets one markdown file. Entries are appended to it and
parsed back out for summaries and reports; files are never rewritten.
"""

from devlog.logbook.layout import Logbook, format_date, iter_days
from devlog.logbook.parser import parse_entries, read_entries
from devlog.logbook.report import (
    generate_markdown_report,
    render_entries,
    render_report,
)
from devlog.logbook.summary import (
    filter_entries,
    generate_daily_summary,
    get_entries_in_range,
    group_entries,
)
from devlog.logbook.writer import EntryError, append_entry, log_work

__all__ = [
    "EntryError",
    "Logbook",
    "append_entry",
    "filter_entries",
    "format_date",
    "generate_daily_summary",
    "generate_markdown_report",
    "get_entries_in_range",
    "group_entries",
    "iter_days",
    "log_work",
    "parse_entries",
    "read_entries",
    "render_entries",
    "render_report",
]
