"""Tools that coding agents call to read and write the change log."""

from devlog.core.tools.changelog_tools import ChangelogTools, build_registry
from devlog.core.tools.registry import (
    ToolDefinition,
    ToolError,
    ToolExecutionError,
    ToolInputError,
    ToolNotFoundError,
    ToolRegistry,
)

__all__ = [
    "ChangelogTools",
    "ToolDefinition",
    "ToolError",
    "ToolExecutionError",
    "ToolInputError",
    "ToolNotFoundError",
    "ToolRegistry",
    "build_registry",
]
