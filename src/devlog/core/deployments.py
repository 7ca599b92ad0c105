"""Deployment tracking and release notes.

History is a JSON array in deployments/deployment-history.json. It is read
whole, appended to in memory and written back on every update.
"""

import asyncio
import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from devlog.core.git import (
    GitError,
    format_commits_as_changelog,
    get_commits,
    get_commits_between,
    group_commits_by_type,
)
from devlog.core.types import (
    Commit,
    DeploymentRecord,
    DeploymentResult,
    ReleaseNotes,
)
from devlog.logbook.layout import Logbook
from devlog.logbook.writer import log_work

logger = logging.getLogger(__name__)

HISTORY_FILENAME = "deployment-history.json"
FALLBACK_SINCE = "1 week ago"


class DeploymentError(RuntimeError):
    """Base error for deployment tracking failures."""


class DeploymentNotFoundError(DeploymentError):
    """Raised when no deployment exists for a version."""


def _parse_timestamp(value: str) -> datetime:
    """Parse a history timestamp; values without an offset are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise DeploymentError(f"Invalid deployment timestamp {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _iso_timestamp(value: datetime) -> str:
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class DeploymentTracker:
    """Records deployments and renders release notes."""

    def __init__(self, deployments_dir: Path, logbook: Logbook):
        """
        Initialize deployment tracker.

        Args:
            deployments_dir: Directory for history and release notes
            logbook: Logbook that receives deployment entries
        """
        self.deployments_dir = Path(deployments_dir)
        self.logbook = logbook

    @property
    def history_path(self) -> Path:
        return self.deployments_dir / HISTORY_FILENAME

    def release_notes_path(self, version: str) -> Path:
        return self.deployments_dir / f"release-notes-{version}.md"

    def _read_history(self) -> list[DeploymentRecord]:
        self.deployments_dir.mkdir(parents=True, exist_ok=True)
        if not self.history_path.exists():
            return []
        try:
            raw = json.loads(self.history_path.read_text(encoding="utf-8"))
            return [DeploymentRecord.model_validate(item) for item in raw]
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            raise DeploymentError(
                f"Invalid deployment history in {self.history_path}: {e}"
            ) from e

    def _write_history(self, history: Sequence[DeploymentRecord]) -> None:
        self.deployments_dir.mkdir(parents=True, exist_ok=True)
        data = [record.model_dump(by_alias=True) for record in history]
        self.history_path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    async def load_history(self) -> list[DeploymentRecord]:
        """Load every recorded deployment, oldest first."""
        return await asyncio.to_thread(self._read_history)

    async def save_history(self, history: Sequence[DeploymentRecord]) -> None:
        """Rewrite the history file."""
        await asyncio.to_thread(self._write_history, history)

    async def _collect_commits(
        self, previous_version: str | None, repo_path: Path | str | None
    ) -> list[Commit]:
        if previous_version:
            try:
                return await get_commits_between(previous_version, repo_path)
            except GitError as e:
                logger.warning(f"Could not get commits between versions: {e}")
        return await get_commits(FALLBACK_SINCE, repo_path)

    async def track_deployment(
        self,
        version: str | None,
        environment: str = "production",
        previous_version: str | None = None,
        repo_path: Path | str | None = None,
        changes: Sequence[str] = (),
        now: datetime | None = None,
    ) -> DeploymentResult:
        """
        Record a deployment, write release notes and log it.

        Args:
            version: Version being deployed (required)
            environment: Target environment
            previous_version: Version replaced (defaults to the latest
                deployment to the same environment)
            repo_path: Git repository to read commits from
            changes: Manually listed changes
            now: Deployment time (defaults to now)

        Returns:
            DeploymentResult; unsuccessful with an error message on failure
        """
        if not version:
            return DeploymentResult(success=False, error="Version is required")

        timestamp = now or datetime.now(timezone.utc)
        try:
            history = await self.load_history()

            if not previous_version:
                same_env = [d for d in history if d.environment == environment]
                if same_env:
                    latest = max(same_env, key=lambda d: _parse_timestamp(d.timestamp))
                    previous_version = latest.version

            commits = await self._collect_commits(previous_version, repo_path)

            deployment = DeploymentRecord(
                environment=environment,
                version=version,
                previous_version=previous_version,
                timestamp=_iso_timestamp(timestamp),
                commit_hashes=[c.hash for c in commits],
                manual_changes=list(changes),
            )
            history.append(deployment)
            await self.save_history(history)

            release_notes = await self.generate_release_notes(version)
        except (DeploymentError, OSError) as e:
            logger.error(f"Error tracking deployment: {e}")
            return DeploymentResult(success=False, error=str(e))

        notes = f"## Version {version} deployed to {environment}\n\n"
        notes += f"**Date:** {self.logbook.format_date(timestamp)}\n"
        notes += f"**Previous Version:** {previous_version or 'None'}\n\n"
        if commits:
            notes += format_commits_as_changelog(group_commits_by_type(commits))
        if changes:
            notes += "### Manual Changes\n\n"
            for change in changes:
                notes += f"- {change}\n"

        log_entry = await log_work(
            self.logbook,
            f"Deployment: {version} to {environment}",
            notes,
            "Deployment",
            ["deployment", environment, f"v{version}", "release"],
        )
        logger.info(f"Tracked deployment of {version} to {environment}")

        return DeploymentResult(
            success=True,
            deployment=deployment,
            release_notes=release_notes,
            log_entry=log_entry,
        )

    async def find_deployment(self, version: str) -> DeploymentRecord:
        """
        Find the first recorded deployment of a version.

        Raises:
            DeploymentNotFoundError: If the version was never deployed
        """
        for record in await self.load_history():
            if record.version == version:
                return record
        raise DeploymentNotFoundError(f"Deployment for version {version} not found")

    async def generate_release_notes(self, version: str) -> ReleaseNotes:
        """
        Render and save release notes for a deployed version.

        Raises:
            DeploymentNotFoundError: If the version was never deployed
        """
        deployment = await self.find_deployment(version)
        released = self.logbook.format_date(_parse_timestamp(deployment.timestamp))

        markdown = f"# Release Notes: Version {version}\n\n"
        markdown += f"**Released:** {released}\n\n"
        if deployment.previous_version:
            markdown += f"**Previous Version:** {deployment.previous_version}\n\n"
        if deployment.commit_hashes:
            markdown += "## Changes\n\n"
            markdown += (
                f"This release includes {len(deployment.commit_hashes)} commits.\n\n"
            )
        if deployment.manual_changes:
            markdown += "## Highlighted Changes\n\n"
            for change in deployment.manual_changes:
                markdown += f"- {change}\n"

        path = self.release_notes_path(version)
        await asyncio.to_thread(self._write_text, path, markdown)
        return ReleaseNotes(version=version, markdown=markdown, path=path)

    def _write_text(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    async def list_deployments(
        self, environment: str | None = None, limit: int = 10
    ) -> list[DeploymentRecord]:
        """List deployments newest first, optionally for one environment."""
        history = await self.load_history()
        if environment:
            history = [d for d in history if d.environment == environment]
        history.sort(key=lambda d: _parse_timestamp(d.timestamp), reverse=True)
        return history[:limit]
