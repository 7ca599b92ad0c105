"""Git integration: turn commit history into changelog entries.

Commands run with an explicit working directory. Failures reading history
are logged and degrade to empty results so callers can keep going.
"""

import asyncio
import logging
import os
import re
from collections.abc import Sequence
from pathlib import Path

from devlog.core.types import Commit, LogResult
from devlog.logbook.layout import Logbook
from devlog.logbook.writer import log_work

logger = logging.getLogger(__name__)

LOG_FORMAT = "%h|%s|%an|%ad|%ae"

COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

TYPE_LABELS = {
    "feat": "New Features",
    "fix": "Bug Fixes",
    "docs": "Documentation",
    "style": "Code Style",
    "refactor": "Refactoring",
    "perf": "Performance",
    "test": "Testing",
    "build": "Build System",
    "ci": "CI/CD",
    "chore": "Chores",
    "revert": "Reverts",
    "other": "Other Changes",
}

_CONVENTIONAL = re.compile(rf"^({'|'.join(COMMIT_TYPES)})(\(.+\))?:\s(.+)$")


class GitError(RuntimeError):
    """Raised when a git command fails."""


async def run_git(args: Sequence[str], repo_path: Path | str | None = None) -> str:
    """
    Run a git command and return its stdout.

    Args:
        args: Arguments after "git"
        repo_path: Working directory (defaults to the current directory)

    Raises:
        GitError: If git is missing or exits non-zero
    """
    cwd = str(repo_path) if repo_path else os.getcwd()
    try:
        process = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise GitError(f"Could not run git: {e}") from e

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        message = stderr.decode("utf-8", errors="replace").strip()
        raise GitError(message or f"git {args[0]} exited with {process.returncode}")
    return stdout.decode("utf-8", errors="replace")


def parse_log_output(output: str) -> list[Commit]:
    """Parse `git log --pretty=format:%h|%s|%an|%ad|%ae` output."""
    commits = []
    for line in output.strip().split("\n"):
        if not line.strip():
            continue
        parts = line.split("|")
        if len(parts) < 5:
            commits.append(Commit(hash=parts[0], subject="|".join(parts[1:])))
            continue
        # Subjects may contain "|"; the trailing three fields never do.
        commits.append(
            Commit(
                hash=parts[0],
                subject="|".join(parts[1:-3]),
                author=parts[-3],
                date=parts[-2],
                email=parts[-1],
            )
        )
    return commits


async def get_commits(
    since: str = "1 day ago", repo_path: Path | str | None = None
) -> list[Commit]:
    """
    Get commits made since a git date expression.

    Returns:
        Commits, newest first; empty if the log cannot be read
    """
    try:
        output = await run_git(
            ["log", f"--since={since}", f"--pretty=format:{LOG_FORMAT}"], repo_path
        )
    except GitError as e:
        logger.warning(f"Error reading git commits: {e}")
        return []
    return parse_log_output(output)


async def get_commits_between(
    previous: str, repo_path: Path | str | None = None
) -> list[Commit]:
    """
    Get commits between a revision and HEAD.

    Raises:
        GitError: If the revision is not usable or the range cannot be resolved
    """
    if not previous or previous.startswith("-"):
        raise GitError(f"Invalid revision: {previous!r}")
    output = await run_git(
        ["log", f"{previous}..HEAD", f"--pretty=format:{LOG_FORMAT}"], repo_path
    )
    return parse_log_output(output)


async def get_current_branch(repo_path: Path | str | None = None) -> str:
    """Get the checked-out branch name, or "unknown"."""
    try:
        output = await run_git(["rev-parse", "--abbrev-ref", "HEAD"], repo_path)
    except GitError as e:
        logger.warning(f"Error getting current branch: {e}")
        return "unknown"
    return output.strip()


def group_commits_by_type(commits: Sequence[Commit]) -> dict[str, list[Commit]]:
    """
    Group commits by conventional-commit type.

    Matching commits get parsed_type, parsed_scope and parsed_subject set.
    """
    groups: dict[str, list[Commit]] = {label: [] for label in TYPE_LABELS}
    for commit in commits:
        match = _CONVENTIONAL.match(commit.subject)
        if match:
            commit.parsed_type = match.group(1)
            commit.parsed_scope = re.sub(r"[()]", "", match.group(2) or "")
            commit.parsed_subject = match.group(3)
            groups[commit.parsed_type].append(commit)
        else:
            groups["other"].append(commit)
    return groups


def format_commits_as_changelog(grouped: dict[str, list[Commit]]) -> str:
    """Render grouped commits as markdown sections with commit links."""
    changelog = ""
    for commit_type, commits in grouped.items():
        if not commits:
            continue
        changelog += f"### {TYPE_LABELS[commit_type]}\n\n"
        for commit in commits:
            scope = f"**{commit.parsed_scope}:** " if commit.parsed_scope else ""
            subject = commit.parsed_subject or commit.subject
            changelog += (
                f"- {scope}{subject} ([{commit.hash[:7]}](commit/{commit.hash}))\n"
            )
        changelog += "\n"
    return changelog


async def generate_changelog_from_git(
    logbook: Logbook,
    since: str = "1 day ago",
    repo_path: Path | str | None = None,
    header: str = "Git Commit Summary",
    category: str = "Development",
    tags: Sequence[str] = ("git", "automated"),
) -> LogResult:
    """
    Summarize recent commits into today's change log.

    Returns:
        LogResult; unsuccessful when there are no commits in range
    """
    commits = await get_commits(since, repo_path)
    if not commits:
        logger.warning("No commits found in the specified time range.")
        return LogResult.failure("No commits found")

    changelog = format_commits_as_changelog(group_commits_by_type(commits))
    changelog = (
        f"Generated from {len(commits)} git commits since {since}.\n\n{changelog}"
    )
    return await log_work(logbook, header, changelog, category, list(tags))
