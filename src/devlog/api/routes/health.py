"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter

from devlog.api.deps import MonitorDep, RegistryDep

router = APIRouter()


@router.get("/health")
async def health_check(monitor: MonitorDep, registry: RegistryDep) -> dict[str, Any]:
    """
    Report server status.

    Returns:
        dict with status, monitoring state and registered tool count
    """
    return {
        "status": "healthy",
        "monitoring": monitor.is_active,
        "tools": len(registry.tools),
    }
