"""Logbook layout and path helpers.

Maps calendar dates to the markdown file that holds that day's entries.
"""

from collections.abc import Iterator
from datetime import date, datetime, timedelta
from pathlib import Path

from devlog.core.config import DATE_FORMAT, DEFAULT_FILE_HEADER, FILE_FORMAT
from devlog.core.formatter import ProfessionalFormatter
from devlog.core.project import Project


def format_date(value: date | None = None, date_format: str = DATE_FORMAT) -> str:
    """
    Format a date with the configured field template.

    Args:
        value: Date to format (defaults to today)
        date_format: Template containing YYYY, MM and DD

    Returns:
        Zero-padded date string, e.g. 2024-06-01
    """
    if value is None:
        value = date.today()
    return (
        date_format.replace("YYYY", str(value.year))
        .replace("MM", f"{value.month:02d}")
        .replace("DD", f"{value.day:02d}")
    )


def as_date(value: date) -> date:
    """Drop the time component of a datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = as_date(start)
    last = as_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


class Logbook:
    """A directory of date-named change log files."""

    def __init__(
        self,
        directory: Path | str,
        file_format: str = FILE_FORMAT,
        date_format: str = DATE_FORMAT,
        file_header: str = DEFAULT_FILE_HEADER,
        formatter: ProfessionalFormatter | None = None,
    ):
        """
        Initialize the logbook.

        Args:
            directory: Directory holding the log files
            file_format: File name template with a {date} placeholder
            date_format: Date template for file names and labels
            file_header: Block written once when a file is created
            formatter: Professional formatter (defaults to built-in vocabulary)
        """
        self.directory = Path(directory)
        self.file_format = file_format
        self.date_format = date_format
        self.file_header = file_header
        self.formatter = formatter or ProfessionalFormatter()

    @classmethod
    def from_project(cls, project: Project) -> "Logbook":
        """Build a logbook from a project's configuration."""
        config = project.load()
        return cls(
            directory=project.change_log_dir,
            file_format=config.file_format,
            date_format=config.date_format,
            file_header=config.file_header,
            formatter=project.build_formatter(),
        )

    def format_date(self, value: date | None = None) -> str:
        return format_date(value, self.date_format)

    def path_for(self, value: date | None = None) -> Path:
        """Get the change log path for a date (defaults to today)."""
        file_name = self.file_format.replace("{date}", self.format_date(value))
        return self.directory / file_name

    def list_files(self) -> list[Path]:
        """List existing change log files, oldest name first."""
        if not self.directory.exists():
            return []
        return sorted(p for p in self.directory.glob("*.md") if p.is_file())

    def __repr__(self) -> str:
        return f"Logbook({self.directory})"
