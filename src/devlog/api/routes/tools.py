"""Tool listing and invocation endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from devlog.api.deps import RegistryDep
from devlog.core.tools.registry import (
    ToolExecutionError,
    ToolInputError,
    ToolNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tools")
async def list_tools(registry: RegistryDep) -> dict[str, Any]:
    """List registered tools with their input schemas."""
    return {"tools": [tool.describe() for tool in registry.list_tools()]}


@router.post("/tools/{name}")
async def call_tool(
    name: str,
    registry: RegistryDep,
    arguments: dict[str, Any] | None = Body(default=None),
) -> dict[str, Any]:
    """
    Run a tool with JSON arguments.

    Unknown tools return 404, invalid arguments 422 and handler failures 500.
    """
    logger.info(f"Tool call: {name}")
    try:
        result = await registry.call(name, arguments)
    except ToolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ToolInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ToolExecutionError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )
    return result.to_dict()
