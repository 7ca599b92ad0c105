"""devlog core library - configuration, shared types, git and deployments."""

from devlog.core.types import (
    Commit,
    DeploymentRecord,
    LogEntry,
    LogResult,
    ToolResult,
)

__all__ = [
    "Commit",
    "DeploymentRecord",
    "LogEntry",
    "LogResult",
    "ToolResult",
]
