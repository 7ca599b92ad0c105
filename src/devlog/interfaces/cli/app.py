"""CLI application for devlog using Rich and Typer."""

import asyncio
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from devlog.core.config import setup_logging
from devlog.core.deployments import DeploymentError, DeploymentTracker
from devlog.core.formatter import suggest_tags
from devlog.core.git import generate_changelog_from_git
from devlog.core.project import ConfigError, Project
from devlog.logbook.layout import Logbook
from devlog.logbook.report import DEFAULT_REPORT_TITLE, generate_markdown_report
from devlog.logbook.summary import get_entries_in_range
from devlog.logbook.writer import log_work

app = typer.Typer(
    name="devlog",
    help="devlog - Professional daily change logs",
    no_args_is_help=True,
)

console = Console()


def _project(ctx: typer.Context) -> Project:
    project: Project = ctx.obj["project"]
    try:
        project.load()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    return project


def _logbook(ctx: typer.Context) -> Logbook:
    return Logbook.from_project(_project(ctx))


def _tracker(ctx: typer.Context) -> DeploymentTracker:
    project = _project(ctx)
    return DeploymentTracker(project.deployments_dir, Logbook.from_project(project))


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value else None


@app.command()
def add(
    ctx: typer.Context,
    header: str = typer.Argument(..., help="Entry header"),
    notes: str = typer.Argument(..., help="Notes, one per line (\\n allowed)"),
    category: Optional[str] = typer.Argument(None, help="Entry category"),
    tags: Optional[str] = typer.Argument(None, help="Comma separated tags"),
    on: Optional[datetime] = typer.Option(
        None, "--date", formats=["%Y-%m-%d"], help="Log for another day"
    ),
    auto_tag: bool = typer.Option(
        False, "--auto-tag", help="Add tags suggested from the notes"
    ),
):
    """Add an entry to the change log."""
    tag_list = [tag.strip() for tag in tags.split(",")] if tags else []
    if auto_tag:
        for tag in suggest_tags(f"{header} {notes}"):
            if tag not in tag_list:
                tag_list.append(tag)

    result = asyncio.run(
        log_work(
            _logbook(ctx),
            header,
            notes,
            category or "General",
            tag_list,
            target_date=_as_date(on),
        )
    )
    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    console.print("[green]Entry added to change log[/green]")
    console.print(f"[cyan]File: {result.path}[/cyan]")
    console.print(f"[cyan]Header: {result.header}[/cyan]")
    if result.tags:
        console.print(f"[cyan]Tags: {', '.join(result.tags)}[/cyan]")


@app.command("git-log")
def git_log(
    ctx: typer.Context,
    since: str = typer.Argument("1 day ago", help="Git date expression"),
    repo: Optional[Path] = typer.Argument(None, help="Repository path"),
    header: str = typer.Argument("Git Commit Summary", help="Entry header"),
    category: str = typer.Argument("Development", help="Entry category"),
    tags: Optional[str] = typer.Argument(None, help="Comma separated tags"),
):
    """Summarize recent git commits into today's change log."""
    tag_list = tags.split(",") if tags else ["git", "automated"]
    console.print(
        f"[blue]Generating changelog from git commits since {since}...[/blue]"
    )

    result = asyncio.run(
        generate_changelog_from_git(
            _logbook(ctx),
            since=since,
            repo_path=repo,
            header=header,
            category=category,
            tags=tag_list,
        )
    )
    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    console.print("[green]Changelog generated and added to daily log[/green]")
    console.print(f"[cyan]File: {result.path}[/cyan]")
    console.print(f"[cyan]Header: {result.header}[/cyan]")


@app.command()
def deploy(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Version being deployed"),
    environment: str = typer.Argument("production", help="Target environment"),
    previous: Optional[str] = typer.Argument(None, help="Version being replaced"),
    repo: Optional[Path] = typer.Argument(None, help="Repository path"),
    changes: Optional[List[str]] = typer.Argument(None, help="Manual changes"),
):
    """Track a deployment and write its release notes."""
    console.print(
        f"[blue]Tracking deployment of version {version} to {environment}...[/blue]"
    )
    result = asyncio.run(
        _tracker(ctx).track_deployment(
            version,
            environment=environment,
            previous_version=previous,
            repo_path=repo,
            changes=changes or [],
        )
    )
    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    console.print("[green]Deployment tracked successfully[/green]")
    console.print(f"[cyan]Release notes saved to: {result.release_notes.path}[/cyan]")
    if result.log_entry and result.log_entry.success:
        console.print(f"[cyan]Changelog entry added to: {result.log_entry.path}[/cyan]")


@app.command()
def deployments(
    ctx: typer.Context,
    environment: Optional[str] = typer.Argument(None, help="Only this environment"),
    limit: int = typer.Argument(10, help="Maximum deployments to show"),
):
    """List recent deployments."""
    try:
        records = asyncio.run(_tracker(ctx).list_deployments(environment, limit))
    except DeploymentError as e:
        console.print(f"[red]Error listing deployments: {e}[/red]")
        raise typer.Exit(1)

    if not records:
        console.print("[yellow]No deployments found.[/yellow]")
        return

    table = Table(title=f"Deployments ({len(records)})", show_header=True)
    table.add_column("Version", style="green")
    table.add_column("Environment", style="cyan")
    table.add_column("Previous")
    table.add_column("Timestamp", style="dim")
    table.add_column("Commits")

    for record in records:
        table.add_row(
            record.version,
            record.environment,
            record.previous_version or "-",
            record.timestamp,
            str(len(record.commit_hashes)),
        )

    console.print(table)


@app.command("release-notes")
def release_notes(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Deployed version"),
):
    """Regenerate release notes for a deployed version."""
    try:
        notes = asyncio.run(_tracker(ctx).generate_release_notes(version))
    except DeploymentError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(Markdown(notes.markdown))
    console.print(f"[dim]Saved to {notes.path}[/dim]")


@app.command()
def recent(
    ctx: typer.Context,
    days: int = typer.Option(7, "--days", "-n", help="Days to look back"),
):
    """Show recent change log entries."""
    end = date.today()
    start = end - timedelta(days=days)
    entries = asyncio.run(get_entries_in_range(_logbook(ctx), start, end))

    if not entries:
        console.print(
            f"[dim]No changelog entries found for the last {days} days.[/dim]"
        )
        return

    table = Table(title=f"Recent entries ({len(entries)})", show_header=True)
    table.add_column("Date", style="dim")
    table.add_column("Header", style="cyan")
    table.add_column("Notes")
    table.add_column("Tags", style="green")

    for entry in entries:
        table.add_row(
            entry.date, entry.header, "\n".join(entry.notes), ", ".join(entry.tags)
        )

    console.print(table)


@app.command()
def report(
    ctx: typer.Context,
    start: Optional[datetime] = typer.Option(
        None, "--start", formats=["%Y-%m-%d"], help="First day (default: a week ago)"
    ),
    end: Optional[datetime] = typer.Option(
        None, "--end", formats=["%Y-%m-%d"], help="Last day (default: today)"
    ),
    title: str = typer.Option(DEFAULT_REPORT_TITLE, "--title", help="Report title"),
    stats: bool = typer.Option(True, "--stats/--no-stats", help="Include totals"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to a file"
    ),
):
    """Render a markdown report for a date range."""
    markdown = asyncio.run(
        generate_markdown_report(
            _logbook(ctx),
            start=_as_date(start),
            end=_as_date(end),
            title=title,
            include_stats=stats,
        )
    )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markdown, encoding="utf-8")
        console.print(f"[green]Report written to {output}[/green]")
    else:
        console.print(Markdown(markdown))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Host to bind"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to bind"),
):
    """Run the HTTP tool server."""
    from devlog.api.app import run_server

    run_server(host=host, port=port)


@app.callback()
def main(
    ctx: typer.Context,
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Project root (default: $DEVLOG_ROOT or the current directory)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """devlog - Professional daily change logs."""
    if debug:
        setup_logging("DEBUG")
        console.print("[dim]Debug logging enabled[/dim]")
    ctx.obj = {"project": Project(root)}


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
