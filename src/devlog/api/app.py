"""FastAPI application for the devlog tool server."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from devlog.api.middleware import api_key_middleware
from devlog.api.routes import health, tools
from devlog.core.config import DEVLOG_HOST, DEVLOG_PORT
from devlog.core.monitor import DevelopmentMonitor
from devlog.core.project import Project
from devlog.core.tools import build_registry
from devlog.logbook.layout import Logbook

logger = logging.getLogger(__name__)


def create_app(project: Project | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        project: Project whose change log the tools write to
            (defaults to DEVLOG_ROOT)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        current = project or Project()
        logbook = Logbook.from_project(current)
        monitor = DevelopmentMonitor(formatter=logbook.formatter)

        app.state.project = current
        app.state.monitor = monitor
        app.state.registry = build_registry(
            logbook, monitor, categories=current.load().categories
        )

        monitor.start()
        logger.info(f"devlog tool server starting for {current.root}")
        yield
        monitor.stop()
        logger.info("devlog tool server shutting down")

    app = FastAPI(
        title="devlog",
        description="Change log tools for coding agents",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.middleware("http")(api_key_middleware)

    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(tools.router, prefix="/api/v1", tags=["Tools"])

    return app


# Create the default app instance
app = create_app()


def run_server(host: str | None = None, port: int | None = None):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "devlog.api.app:app",
        host=host or DEVLOG_HOST,
        port=port or DEVLOG_PORT,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
