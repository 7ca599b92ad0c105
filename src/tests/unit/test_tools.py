"""Tests for the tool registry and change log tools."""

from datetime import date

import pytest
from pydantic import BaseModel

from devlog.core.tools import (
    ChangelogTools,
    ToolDefinition,
    ToolExecutionError,
    ToolInputError,
    ToolNotFoundError,
    ToolRegistry,
    build_registry,
)
from devlog.core.tools.changelog_tools import (
    DAILY_SUMMARY_HEADER,
    WORK_SESSION_HEADER,
)
from devlog.core.types import ToolResult
from devlog.logbook.layout import Logbook

TOOL_NAMES = [
    "log_my_work",
    "generate_daily_summary",
    "analyze_conversation",
    "get_monitoring_status",
    "add_daily_log_entry",
    "view_recent_entries",
]


class EchoInput(BaseModel):
    text: str


@pytest.fixture
def registry(logbook, monitor):
    """Registry with every change log tool."""
    return build_registry(logbook, monitor)


def _today_log(logbook: Logbook) -> str:
    return logbook.path_for(date.today()).read_text(encoding="utf-8")


class TestToolRegistry:
    """Tests for ToolRegistry dispatch."""

    def test_register_and_list(self):
        """Registered tools are listed and filterable by category."""
        registry = ToolRegistry()
        registry.register(
            ToolDefinition(
                name="echo",
                description="Echo text",
                handler=lambda p: ToolResult(content=[p.text]),
                input_model=EchoInput,
                category="misc",
            )
        )

        assert registry.get_tool_names() == ["echo"]
        assert len(registry.list_tools("misc")) == 1
        assert registry.list_tools("changelog") == []

        registry.unregister("echo")
        assert registry.get("echo") is None

    def test_describe_includes_schema(self):
        """Tool listings carry the input model's JSON schema."""
        tool = ToolDefinition(
            name="echo",
            description="Echo text",
            handler=lambda p: ToolResult(content=[p.text]),
            input_model=EchoInput,
        )

        described = tool.describe()

        assert described["name"] == "echo"
        assert described["category"] == "changelog"
        assert "text" in described["input_schema"]["properties"]

    @pytest.mark.asyncio
    async def test_call_sync_handler(self):
        """Plain functions work as handlers."""
        registry = ToolRegistry()
        registry.register(
            ToolDefinition(
                name="echo",
                description="Echo text",
                handler=lambda p: ToolResult(content=[p.text]),
                input_model=EchoInput,
            )
        )

        result = await registry.call("echo", {"text": "hi"})

        assert result.text == "hi"

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        """Unknown names raise ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError, match="Unknown tool: nope"):
            await ToolRegistry().call("nope")

    @pytest.mark.asyncio
    async def test_invalid_arguments(self):
        """Arguments that fail validation raise ToolInputError."""
        registry = ToolRegistry()
        registry.register(
            ToolDefinition(
                name="echo",
                description="Echo text",
                handler=lambda p: ToolResult(content=[p.text]),
                input_model=EchoInput,
            )
        )

        with pytest.raises(ToolInputError):
            await registry.call("echo", {})

    @pytest.mark.asyncio
    async def test_handler_failure_is_wrapped(self):
        """Unexpected handler errors become ToolExecutionError."""

        async def explode(params):
            raise RuntimeError("boom")

        registry = ToolRegistry()
        registry.register(
            ToolDefinition(
                name="explode",
                description="Always fails",
                handler=explode,
                input_model=EchoInput,
            )
        )

        with pytest.raises(ToolExecutionError, match="Tool execution failed: boom"):
            await registry.call("explode", {"text": "x"})


class TestChangelogToolsRegistration:
    """Tests for build_registry()."""

    def test_all_tools_registered(self, registry):
        """Every change log tool is available."""
        assert registry.get_tool_names() == TOOL_NAMES

    def test_monitoring_category(self, registry):
        """Monitoring tools are grouped separately."""
        names = [t.name for t in registry.list_tools("monitoring")]

        assert names == ["analyze_conversation", "get_monitoring_status"]

    def test_camel_case_aliases_in_schema(self, registry):
        """Schemas advertise the camelCase argument names."""
        schema = registry.get("analyze_conversation").input_schema()

        assert "userPrompt" in schema["properties"]
        assert schema["required"] == ["userPrompt"]


class TestAddDailyLogEntry:
    """Tests for the add_daily_log_entry tool."""

    @pytest.mark.asyncio
    async def test_adds_entry(self, registry, logbook):
        """Entries are written to today's log."""
        result = await registry.call(
            "add_daily_log_entry",
            {"header": "bug fix", "notes": "fixed the login bug", "tags": ["auth"]},
        )

        assert result.text.startswith("**Entry Added Successfully**")
        assert "- **Header:** Issue Resolution" in result.text
        assert result.metadata["success"] is True
        assert result.metadata["tags"] == ["auth"]
        assert "## Issue Resolution" in _today_log(logbook)

    @pytest.mark.asyncio
    async def test_unknown_category(self, registry):
        """Categories outside the project's list are rejected."""
        with pytest.raises(ToolInputError, match="Unknown category 'Nonsense'"):
            await registry.call(
                "add_daily_log_entry",
                {"header": "x", "notes": "y", "category": "Nonsense"},
            )

    @pytest.mark.asyncio
    async def test_custom_categories(self, logbook, monitor):
        """The accepted categories can be configured."""
        registry = build_registry(logbook, monitor, categories=["Ops"])

        result = await registry.call(
            "add_daily_log_entry",
            {"header": "Rotate keys", "notes": "rotated", "category": "Ops"},
        )

        assert result.metadata["success"] is True

    @pytest.mark.asyncio
    async def test_empty_header_rejected(self, registry):
        """Header and notes must not be empty."""
        with pytest.raises(ToolInputError):
            await registry.call("add_daily_log_entry", {"header": "", "notes": "x"})

    @pytest.mark.asyncio
    async def test_whitespace_header_rejected(self, registry):
        """A header of only spaces is not a header."""
        with pytest.raises(ToolInputError):
            await registry.call(
                "add_daily_log_entry", {"header": "   ", "notes": "fixed login"}
            )

    @pytest.mark.asyncio
    async def test_write_failure_reported(self, tmp_path, monitor):
        """Write errors are returned as an error message."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        registry = build_registry(Logbook(blocker), monitor)

        result = await registry.call(
            "add_daily_log_entry", {"header": "x", "notes": "y"}
        )

        assert result.text.startswith("**Error Adding Entry**")
        assert result.metadata["success"] is False
        assert result.metadata["error"]


class TestLogMyWork:
    """Tests for the log_my_work tool."""

    @pytest.mark.asyncio
    async def test_logs_monitored_completions(self, registry, logbook, clock):
        """Completed tasks from the session become the entry notes."""
        clock.advance(minutes=5)
        await registry.call(
            "analyze_conversation", {"userPrompt": "I implemented the login api"}
        )

        result = await registry.call("log_my_work", {})

        assert result.text.startswith("**Work Logged Successfully**")
        assert result.metadata["completions_processed"] == 1
        assert "Implemented involving API integration, api." in _today_log(logbook)

    @pytest.mark.asyncio
    async def test_falls_back_without_completions(self, registry, logbook):
        """Without new completions a generic work session is logged."""
        result = await registry.call("log_my_work", {"customHeader": None})

        expected = logbook.formatter.to_professional_header(WORK_SESSION_HEADER)
        assert result.metadata["completions_processed"] == 0
        assert result.metadata["tags"] == ["monitoring", "documentation"]
        assert f"## {expected}" in _today_log(logbook)

    @pytest.mark.asyncio
    async def test_write_failure_reported(self, tmp_path, monitor):
        """Write errors are returned as an error message."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        registry = build_registry(Logbook(blocker), monitor)

        result = await registry.call("log_my_work", {})

        assert result.text.startswith("**Error Logging Work**")
        assert result.metadata["success"] is False


class TestGenerateDailySummary:
    """Tests for the generate_daily_summary tool."""

    @pytest.mark.asyncio
    async def test_finalize_appends_breakdown(self, registry, logbook):
        """Today's entries are summarised per header."""
        await registry.call(
            "add_daily_log_entry", {"header": "bug fix", "notes": "fixed login"}
        )

        result = await registry.call("generate_daily_summary", {})

        assert result.text.startswith("**End-of-Day Summary Generated**")
        assert "**Issue Resolution**: 1 tasks completed" in result.text
        assert result.metadata["tags"] == [
            "daily-summary",
            "professional",
            "client-ready",
        ]

    @pytest.mark.asyncio
    async def test_without_finalize(self, registry, logbook):
        """Without finalize only the session summary is logged."""
        result = await registry.call("generate_daily_summary", {"finalize": False})

        expected = logbook.formatter.to_professional_header(DAILY_SUMMARY_HEADER)
        assert "During this period" not in result.text
        assert f"## {expected}" in _today_log(logbook)

    @pytest.mark.asyncio
    async def test_uses_session_completions(self, registry, clock):
        """Monitored completions replace the generic notes."""
        clock.advance(minutes=1)
        await registry.call("analyze_conversation", {"userPrompt": "fixed the crash"})

        result = await registry.call("generate_daily_summary", {"finalize": False})

        assert "Successfully completed 1 development tasks" in result.text


class TestMonitoringTools:
    """Tests for analyze_conversation and get_monitoring_status."""

    @pytest.mark.asyncio
    async def test_analyze_relevant(self, registry):
        """Development turns are recorded."""
        result = await registry.call(
            "analyze_conversation",
            {
                "userPrompt": "refactor the parser",
                "aiResponse": "done",
                "codeChanges": ["def parse(): ..."],
            },
        )

        assert result.metadata == {
            "relevant": True,
            "category": "refactoring",
            "task_completion": False,
        }
        assert "- Activities tracked: 1" in result.text

    @pytest.mark.asyncio
    async def test_analyze_irrelevant(self, registry):
        """Chit-chat is reported as no activity."""
        result = await registry.call("analyze_conversation", {"userPrompt": "hello"})

        assert "No development activity detected." in result.text
        assert result.metadata["relevant"] is False

    @pytest.mark.asyncio
    async def test_analyze_when_stopped(self, registry, monitor):
        """A stopped monitor records nothing."""
        monitor.stop()

        result = await registry.call(
            "analyze_conversation", {"userPrompt": "fixed the crash"}
        )

        assert "Monitoring is not active" in result.text
        assert result.metadata["category"] is None

    @pytest.mark.asyncio
    async def test_status(self, registry, clock):
        """Status reports session counters."""
        clock.advance(minutes=12)

        result = await registry.call("get_monitoring_status", {})

        assert "- Monitoring: Active" in result.text
        assert "- Session started: 09:00:00" in result.text
        assert "- Duration: 12 minutes" in result.text
        assert "- Last log: Never" in result.text
        assert result.metadata["is_active"] is True

    @pytest.mark.asyncio
    async def test_detailed_status(self, registry, clock):
        """Detailed status breaks completed tasks down by category."""
        clock.advance(minutes=1)
        await registry.call("analyze_conversation", {"userPrompt": "fixed the crash"})

        result = await registry.call("get_monitoring_status", {"detailed": True})

        assert "**Completed Tasks by Category:**\n- bugFix: 1" in result.text

    @pytest.mark.asyncio
    async def test_detailed_status_empty(self, registry):
        """Detailed status without completions says so."""
        result = await registry.call("get_monitoring_status", {"detailed": True})

        assert result.text.endswith("- None yet")


class TestViewRecentEntries:
    """Tests for the view_recent_entries tool."""

    @pytest.mark.asyncio
    async def test_no_entries(self, registry):
        """An empty logbook reports no entries."""
        result = await registry.call("view_recent_entries", {"days": 3})

        assert result.text.startswith("**No Recent Entries Found**")
        assert "last 3 days" in result.text
        assert result.metadata == {"total": 0, "entries": []}

    @pytest.mark.asyncio
    async def test_lists_entries(self, registry):
        """Recent entries are rendered with their tags."""
        await registry.call(
            "add_daily_log_entry",
            {"header": "bug fix", "notes": "fixed login", "tags": ["auth"]},
        )

        result = await registry.call("view_recent_entries", {})

        assert result.text.startswith("**Recent Changelog Entries (Last 7 days)**")
        assert "### Issue Resolution" in result.text
        assert "**Total Entries:** 1" in result.text
        assert result.metadata["total"] == 1
        assert result.metadata["entries"][0]["tags"] == ["auth"]

    @pytest.mark.asyncio
    async def test_negative_days_rejected(self, registry):
        """days must not be negative."""
        with pytest.raises(ToolInputError):
            await registry.call("view_recent_entries", {"days": -1})

    @pytest.mark.asyncio
    async def test_huge_days_rejected(self, registry):
        """Look-back windows are capped."""
        with pytest.raises(ToolInputError):
            await registry.call("view_recent_entries", {"days": 10**9})


def test_tools_bind_logbook_and_monitor(logbook, monitor):
    """ChangelogTools keeps its collaborators."""
    tools = ChangelogTools(logbook, monitor)

    assert tools.logbook is logbook
    assert tools.monitor is monitor
    assert "Bug Fixes" in tools.categories
