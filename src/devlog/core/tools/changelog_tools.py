"""Change log tools exposed to coding agents.

Each tool takes a validated pydantic model and returns a ToolResult with a
markdown message. Write failures are reported in the message rather than
raised, so an agent can read what went wrong.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

from devlog.core.config import CATEGORIES
from devlog.core.formatter import generate_professional_summary
from devlog.core.monitor import DevelopmentMonitor
from devlog.core.tools.registry import ToolDefinition, ToolInputError, ToolRegistry
from devlog.core.types import LogResult, ToolResult
from devlog.logbook.layout import Logbook
from devlog.logbook.summary import get_entries_in_range
from devlog.logbook.writer import log_work

logger = logging.getLogger(__name__)

WORK_SESSION_HEADER = "Work Session"
WORK_SESSION_NOTES = (
    "- Analyzed recent development activities\n"
    "- Tracked user interactions and code changes\n"
    "- Monitored system performance and functionality\n"
    "- Prepared documentation for completed tasks"
)
WORK_SESSION_TAGS = ["monitoring", "documentation"]

DAILY_SUMMARY_HEADER = "Daily Development Summary"
DAILY_SUMMARY_NOTES = (
    "- Reviewed current project status and documentation\n"
    "- Monitored system functionality and performance\n"
    "- Prepared development environment for upcoming tasks\n"
    "- Validated change log system functionality"
)
DAILY_SUMMARY_TAGS = ["daily-summary", "professional", "client-ready"]

MAX_RECENT_DAYS = 3650


class _ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class LogMyWorkInput(_ToolInput):
    custom_header: str | None = Field(
        default=None,
        alias="customHeader",
        description="Optional custom header for the work summary",
    )


class DailySummaryInput(_ToolInput):
    finalize: bool = Field(
        default=True,
        description="Append a per-header task breakdown of today's entries",
    )


class AnalyzeConversationInput(_ToolInput):
    user_prompt: str = Field(..., alias="userPrompt", description="User prompt")
    ai_response: str | None = Field(
        default=None, alias="aiResponse", description="Assistant response"
    )
    code_changes: list[str] | None = Field(
        default=None, alias="codeChanges", description="Code changes made"
    )


class MonitoringStatusInput(_ToolInput):
    detailed: bool = Field(default=False, description="Include session breakdown")


class AddEntryInput(_ToolInput):
    header: str = Field(..., min_length=1, pattern=r"\S", description="Entry header")
    notes: str = Field(..., min_length=1, description="Entry notes, one per line")
    category: str | None = Field(default=None, description="Entry category")
    tags: list[str] = Field(default_factory=list, description="Entry tags")


class RecentEntriesInput(_ToolInput):
    days: int = Field(
        default=7, ge=0, le=MAX_RECENT_DAYS, description="Number of days to look back"
    )


def _entry_details(result: LogResult) -> str:
    return (
        f"- **Header:** {result.header}\n"
        f"- **File:** {result.path}\n"
        f"- **Date:** {result.date}\n"
        f"- **Tags:** {', '.join(result.tags)}"
    )


def _log_metadata(result: LogResult) -> dict:
    return {
        "success": result.success,
        "path": str(result.path) if result.path else None,
        "date": result.date,
        "tags": list(result.tags),
        "error": result.error,
    }


def _clock_time(value: datetime | None) -> str:
    return value.strftime("%H:%M:%S") if value else "Never"


class ChangelogTools:
    """Tool handlers bound to one logbook and one monitor."""

    def __init__(
        self,
        logbook: Logbook,
        monitor: DevelopmentMonitor,
        categories: Sequence[str] = CATEGORIES,
    ):
        """
        Initialize change log tools.

        Args:
            logbook: Logbook that receives entries
            monitor: Session monitor fed by analyze_conversation
            categories: Categories accepted by add_daily_log_entry
        """
        self.logbook = logbook
        self.monitor = monitor
        self.categories = list(categories)

    async def log_my_work(self, params: LogMyWorkInput) -> ToolResult:
        summary = self.monitor.generate_work_summary(params.custom_header)
        if summary is not None:
            result = await log_work(
                self.logbook,
                summary.header,
                summary.notes,
                summary.category,
                summary.tags,
            )
        else:
            result = await log_work(
                self.logbook,
                params.custom_header or WORK_SESSION_HEADER,
                WORK_SESSION_NOTES,
                "Documentation",
                WORK_SESSION_TAGS,
            )

        if not result.success:
            return ToolResult(
                content=[
                    f"**Error Logging Work**\n\nFailed to log work: {result.error}"
                ],
                metadata=_log_metadata(result),
            )
        return ToolResult(
            content=[f"**Work Logged Successfully**\n\n{_entry_details(result)}"],
            metadata={
                **_log_metadata(result),
                "completions_processed": (
                    summary.completions_processed if summary else 0
                ),
            },
        )

    async def generate_daily_summary(self, params: DailySummaryInput) -> ToolResult:
        notes = self.monitor.generate_daily_summary() or DAILY_SUMMARY_NOTES
        if params.finalize:
            today = date.today()
            entries = await get_entries_in_range(self.logbook, today, today)
            if entries:
                notes += "\n" + generate_professional_summary(entries)

        result = await log_work(
            self.logbook, DAILY_SUMMARY_HEADER, notes, "Summary", DAILY_SUMMARY_TAGS
        )
        if not result.success:
            return ToolResult(
                content=[
                    "**Error Generating Daily Summary**\n\n"
                    f"Failed to generate summary: {result.error}"
                ],
                metadata=_log_metadata(result),
            )
        return ToolResult(
            content=[
                "**End-of-Day Summary Generated**\n\n"
                f"- **File:** {result.path}\n"
                f"- **Date:** {result.date}\n\n"
                f"**Daily Summary:**\n{notes}"
            ],
            metadata=_log_metadata(result),
        )

    async def analyze_conversation(
        self, params: AnalyzeConversationInput
    ) -> ToolResult:
        analysis = self.monitor.analyze_conversation(
            params.user_prompt, params.ai_response, params.code_changes
        )
        status = self.monitor.get_status()

        if analysis is None:
            headline = "Monitoring is not active; nothing was recorded."
        elif not analysis["is_relevant"]:
            headline = "No development activity detected."
        else:
            headline = f"Recorded {analysis['category']} activity."

        return ToolResult(
            content=[
                f"**Conversation Analyzed**\n\n{headline}\n\n"
                "**Current Session:**\n"
                f"- Activities tracked: {status['total_activities']}\n"
                f"- Tasks completed: {status['task_completions']}\n"
                f"- Technical decisions: {status['technical_decisions']}\n"
                f"- Session duration: {status['duration']} minutes"
            ],
            metadata={
                "relevant": bool(analysis and analysis["is_relevant"]),
                "category": analysis.get("category") if analysis else None,
                "task_completion": bool(
                    analysis and analysis.get("is_task_completion")
                ),
            },
        )

    async def get_monitoring_status(self, params: MonitoringStatusInput) -> ToolResult:
        status = self.monitor.get_status()
        started = _clock_time(status["start_time"])
        last_log = _clock_time(status["last_log_time"])

        text = (
            "**Monitoring Status**\n\n"
            f"- Monitoring: {'Active' if status['is_active'] else 'Stopped'}\n"
            f"- Session started: {started}\n"
            f"- Duration: {status['duration']} minutes\n\n"
            "**Activity Analysis:**\n"
            f"- Total activities: {status['total_activities']}\n"
            f"- Completed tasks: {status['task_completions']}\n"
            f"- Technical decisions: {status['technical_decisions']}\n"
            f"- Last log: {last_log}"
        )

        if params.detailed:
            categories: dict[str, int] = {}
            for completion in self.monitor.session.task_completions:
                categories[completion.category] = (
                    categories.get(completion.category, 0) + 1
                )
            text += "\n\n**Completed Tasks by Category:**\n"
            text += "\n".join(
                f"- {name}: {count}" for name, count in categories.items()
            )
            if not categories:
                text += "- None yet"

        return ToolResult(
            content=[text],
            metadata={
                "is_active": status["is_active"],
                "duration": status["duration"],
                "total_activities": status["total_activities"],
                "task_completions": status["task_completions"],
                "technical_decisions": status["technical_decisions"],
            },
        )

    async def add_daily_log_entry(self, params: AddEntryInput) -> ToolResult:
        if params.category and params.category not in self.categories:
            raise ToolInputError(
                f"Unknown category {params.category!r}; "
                f"expected one of: {', '.join(self.categories)}"
            )

        result = await log_work(
            self.logbook, params.header, params.notes, params.category, params.tags
        )
        if not result.success:
            return ToolResult(
                content=[
                    f"**Error Adding Entry**\n\nFailed to add entry: {result.error}"
                ],
                metadata=_log_metadata(result),
            )
        return ToolResult(
            content=[f"**Entry Added Successfully**\n\n{_entry_details(result)}"],
            metadata=_log_metadata(result),
        )

    async def view_recent_entries(self, params: RecentEntriesInput) -> ToolResult:
        end = date.today()
        start = end - timedelta(days=params.days)
        entries = await get_entries_in_range(self.logbook, start, end)

        if not entries:
            return ToolResult(
                content=[
                    "**No Recent Entries Found**\n\n"
                    f"No changelog entries found for the last {params.days} days."
                ],
                metadata={"total": 0, "entries": []},
            )

        blocks = [
            f"### {entry.header} ({entry.date})\n"
            + "\n".join(entry.notes)
            + f"\n**Tags:** {', '.join(entry.tags)}\n"
            for entry in entries
        ]
        return ToolResult(
            content=[
                f"**Recent Changelog Entries (Last {params.days} days)**\n\n"
                + "\n".join(blocks)
                + f"\n\n**Total Entries:** {len(entries)}"
            ],
            metadata={
                "total": len(entries),
                "entries": [entry.to_dict() for entry in entries],
            },
        )

    def register(self, registry: ToolRegistry) -> ToolRegistry:
        """Register every change log tool on a registry."""
        definitions = [
            ToolDefinition(
                name="log_my_work",
                description="Log a professional summary of recent development work",
                handler=self.log_my_work,
                input_model=LogMyWorkInput,
            ),
            ToolDefinition(
                name="generate_daily_summary",
                description="Log an end-of-day summary of all development activity",
                handler=self.generate_daily_summary,
                input_model=DailySummaryInput,
            ),
            ToolDefinition(
                name="analyze_conversation",
                description="Track a prompt/response exchange for later summaries",
                handler=self.analyze_conversation,
                input_model=AnalyzeConversationInput,
                category="monitoring",
            ),
            ToolDefinition(
                name="get_monitoring_status",
                description="Get the current monitoring session status",
                handler=self.get_monitoring_status,
                input_model=MonitoringStatusInput,
                category="monitoring",
            ),
            ToolDefinition(
                name="add_daily_log_entry",
                description="Add a professional entry to today's change log",
                handler=self.add_daily_log_entry,
                input_model=AddEntryInput,
            ),
            ToolDefinition(
                name="view_recent_entries",
                description="View recent change log entries",
                handler=self.view_recent_entries,
                input_model=RecentEntriesInput,
            ),
        ]
        for definition in definitions:
            registry.register(definition)
        logger.debug(f"Registered {len(definitions)} change log tools")
        return registry


def build_registry(
    logbook: Logbook, monitor: DevelopmentMonitor, **kwargs
) -> ToolRegistry:
    """Create a registry holding the change log tools."""
    return ChangelogTools(logbook, monitor, **kwargs).register(ToolRegistry())
