"""Shared types and data structures for devlog."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class LogEntry:
    """One header + notes + tags block in a day's log file."""

    date: str
    header: str
    notes: tuple[str, ...]
    tags: tuple[str, ...] = ()
    line_range: tuple[int, int] = field(default=(0, 0), compare=False)

    @property
    def note_count(self) -> int:
        return len(self.notes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "date": self.date,
            "header": self.header,
            "notes": list(self.notes),
            "tags": list(self.tags),
            "line_range": list(self.line_range),
        }


# Grouping shapes produced by group_entries()
EntriesByCategory = dict[str, list[LogEntry]]
EntriesByDate = dict[str, list[LogEntry]]
EntriesByDateAndCategory = dict[str, EntriesByCategory]
GroupedEntries = Union[
    list[LogEntry], EntriesByDate, EntriesByCategory, EntriesByDateAndCategory
]


@dataclass
class WriteResult:
    """What append_entry() wrote and where."""

    path: Path
    header: str
    date: str
    tags: list[str]
    content: str
    original_header: str
    original_notes: str


@dataclass
class LogResult:
    """Outcome of the auto-log path; callers branch on success."""

    success: bool
    path: Path | None = None
    header: str | None = None
    date: str | None = None
    tags: list[str] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_write(cls, result: WriteResult) -> LogResult:
        return cls(
            success=True,
            path=result.path,
            header=result.header,
            date=result.date,
            tags=list(result.tags),
        )

    @classmethod
    def failure(cls, error: str) -> LogResult:
        return cls(success=False, error=error)


@dataclass
class DailySummary:
    """Entries collected over a date span, optionally grouped."""

    start_date: str
    end_date: str
    total_entries: int
    entries: GroupedEntries


@dataclass
class Commit:
    """A git commit parsed from `git log` output."""

    hash: str
    subject: str
    author: str = ""
    date: str = ""
    email: str = ""
    parsed_type: str | None = None
    parsed_scope: str = ""
    parsed_subject: str | None = None


class DeploymentRecord(BaseModel):
    """One version's rollout to one environment.

    Persisted with the camelCase keys used by deployment-history.json.
    """

    model_config = ConfigDict(populate_by_name=True)

    environment: str
    version: str
    previous_version: str | None = Field(default=None, alias="previousVersion")
    timestamp: str
    commit_hashes: list[str] = Field(default_factory=list, alias="commits")
    manual_changes: list[str] = Field(default_factory=list, alias="manualChanges")


@dataclass
class ReleaseNotes:
    """Rendered release notes for a version."""

    version: str
    markdown: str
    path: Path


@dataclass
class DeploymentResult:
    """Outcome of track_deployment()."""

    success: bool
    deployment: DeploymentRecord | None = None
    release_notes: ReleaseNotes | None = None
    log_entry: LogResult | None = None
    error: str | None = None


@dataclass
class ToolResult:
    """Text content and metadata returned by a tool handler."""

    content: list[str]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [{"type": "text", "text": item} for item in self.content],
            "metadata": self.metadata,
        }
