"""API route modules."""

from devlog.api.routes import health, tools

__all__ = ["health", "tools"]
