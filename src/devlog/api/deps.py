"""FastAPI dependencies for the tool server."""

from typing import Annotated

from fastapi import Depends, Request

from devlog.core.monitor import DevelopmentMonitor
from devlog.core.tools.registry import ToolRegistry


async def get_registry(request: Request) -> ToolRegistry:
    """Get the tool registry built at startup."""
    return request.app.state.registry


async def get_monitor(request: Request) -> DevelopmentMonitor:
    """Get the session monitor owned by the app."""
    return request.app.state.monitor


RegistryDep = Annotated[ToolRegistry, Depends(get_registry)]
MonitorDep = Annotated[DevelopmentMonitor, Depends(get_monitor)]
