"""Configuration management for devlog core."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    value = os.getenv(key)
    if value is None:
        if default is not None:
            logger.debug(f"{key} not set, falling back to default value")
        return default
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{key}={value!r} is not a valid integer, using {default}")
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    logger.warning(f"{key}={value!r} is not a valid boolean, using {default}")
    return default


# Project root: change logs and deployment history live below it
DEVLOG_ROOT = Path(get_env("DEVLOG_ROOT", os.getcwd()) or os.getcwd())

# Base directory for change logs (relative to DEVLOG_ROOT unless absolute)
CHANGE_LOG_DIR = get_env("DEVLOG_CHANGE_LOG_DIR", "change-notes") or "change-notes"

# File name template: YYYY-MM-DD-change-log.md
FILE_FORMAT = get_env("DEVLOG_FILE_FORMAT", "{date}-change-log.md") or (
    "{date}-change-log.md"
)

# Date format for file names
DATE_FORMAT = get_env("DEVLOG_DATE_FORMAT", "YYYY-MM-DD") or "YYYY-MM-DD"

# Deployment history and release notes
DEPLOYMENTS_DIR = get_env("DEVLOG_DEPLOYMENTS_DIR", "deployments") or "deployments"

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"

# Header written once when a day's log file is created
DEFAULT_FILE_HEADER = (
    "# Daily Progress Report - {date}\n\n"
    "## Executive Summary\n\n"
    "This document outlines the development activities and progress made on {date}.\n\n"
    "---\n\n"
)

ENTRY_TEMPLATE = "## {header}\n\n{notes}\n\n**Logged at:** {time}\n\n"

DEFAULT_HEADER = "General Updates"

CATEGORIES = [
    "Feature Implementation",
    "Bug Fixes",
    "Documentation",
    "Refactoring",
    "Testing",
    "DevOps",
    "UI/UX",
    "Performance",
    "Security",
]

# Keyword rules used by suggest_tags()
AUTO_TAG_RULES = {
    "bug": ["fix", "issue", "problem", "error"],
    "feature": ["add", "implement", "create", "new"],
    "docs": ["document", "comment", "readme"],
    "refactor": ["refactor", "restructure", "clean"],
    "test": ["test", "spec", "coverage"],
    "ui": ["design", "layout", "style", "css", "ui", "ux"],
    "perf": ["performance", "optimize", "speed", "fast"],
    "security": ["secure", "auth", "protect"],
}

# Tool server settings
DEVLOG_API_KEY = get_env("DEVLOG_API_KEY")
DEVLOG_HOST = get_env("DEVLOG_HOST", "127.0.0.1") or "127.0.0.1"
DEVLOG_PORT = get_env_int("DEVLOG_PORT", 8421)
DEVLOG_ALLOW_NO_AUTH = get_env_bool("DEVLOG_ALLOW_NO_AUTH", False)


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return logging.getLogger("devlog")
