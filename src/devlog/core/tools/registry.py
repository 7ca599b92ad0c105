"""Tool registry for routing tool calls."""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from devlog.core.types import ToolResult

logger = logging.getLogger(__name__)


class ToolError(Exception):
    """Base error for tool dispatch."""


class ToolNotFoundError(ToolError):
    """No tool is registered under the requested name."""


class ToolInputError(ToolError):
    """Tool arguments failed validation."""


class ToolExecutionError(ToolError):
    """A tool handler raised while running."""


ToolHandler = Callable[[BaseModel], Awaitable[ToolResult] | ToolResult]


@dataclass
class ToolDefinition:
    """Definition of a tool."""

    name: str
    description: str
    handler: ToolHandler
    input_model: type[BaseModel]
    category: str = "changelog"

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    def describe(self) -> dict[str, Any]:
        """Name, description and JSON schema for listings."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "input_schema": self.input_schema(),
        }


class ToolRegistry:
    """Registry for available tools."""

    def __init__(self):
        """Initialize an empty tool registry."""
        self.tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """Register a tool."""
        self.tools[tool.name] = tool

    def unregister(self, name: str) -> None:
        """Unregister a tool."""
        self.tools.pop(name, None)

    def get(self, name: str) -> ToolDefinition | None:
        """Get a tool by name."""
        return self.tools.get(name)

    def list_tools(self, category: str | None = None) -> list[ToolDefinition]:
        """List all tools, optionally filtered by category."""
        if category is None:
            return list(self.tools.values())
        return [t for t in self.tools.values() if t.category == category]

    def get_tool_names(self) -> list[str]:
        """Get list of tool names."""
        return list(self.tools.keys())

    async def call(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResult:
        """
        Validate arguments and run a tool.

        Args:
            name: Registered tool name
            arguments: Raw arguments for the tool's input model

        Returns:
            The handler's ToolResult

        Raises:
            ToolNotFoundError: Unknown tool name
            ToolInputError: Arguments do not match the input model
            ToolExecutionError: The handler failed
        """
        tool = self.get(name)
        if tool is None:
            raise ToolNotFoundError(f"Unknown tool: {name}")

        try:
            params = tool.input_model.model_validate(arguments or {})
        except ValidationError as e:
            raise ToolInputError(f"Invalid arguments for {name}: {e}") from e

        try:
            result = tool.handler(params)
            if inspect.isawaitable(result):
                result = await result
        except ToolError:
            raise
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            raise ToolExecutionError(f"Tool execution failed: {e}") from e

        return result
