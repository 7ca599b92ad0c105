"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from devlog.core.monitor import DevelopmentMonitor
from devlog.core.project import Project
from devlog.logbook.layout import Logbook


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def logbook(tmp_path) -> Logbook:
    """Logbook writing to a temporary change-notes directory."""
    return Logbook(tmp_path / "change-notes")


@pytest.fixture
def project(tmp_path) -> Project:
    """Project rooted at a temporary directory without devlog.yaml."""
    return Project(tmp_path)


@pytest.fixture
def june_first() -> date:
    """A fixed day for file naming tests."""
    return date(2024, 6, 1)


class FakeClock:
    """Controllable clock for the development monitor."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at 2024-06-01 09:00."""
    return FakeClock(datetime(2024, 6, 1, 9, 0, 0))


@pytest.fixture
def monitor(clock) -> DevelopmentMonitor:
    """Started monitor driven by the fake clock."""
    monitor = DevelopmentMonitor(clock=clock)
    monitor.start()
    return monitor


@pytest.fixture
def sample_log() -> str:
    """A day's log as written by the entry writer."""
    return (
        "# Daily Progress Report - 2024-06-01\n"
        "\n"
        "## Executive Summary\n"
        "\n"
        "This document outlines the development activities and progress made "
        "on 2024-06-01.\n"
        "\n"
        "---\n"
        "\n"
        "## Fix Login\n"
        "\n"
        "- Resolved the bug.\n"
        "\n"
        "**Logged at:** 10:15:00\n"
        "\n"
        "**Tags:** #auth\n"
        "\n"
        "## Feature Implementation\n"
        "\n"
        "- Integrated search endpoint.\n"
        "- Integrated pagination.\n"
        "\n"
        "**Logged at:** 14:30:00\n"
        "\n"
    )
