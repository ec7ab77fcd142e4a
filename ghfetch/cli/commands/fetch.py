"""The fetch command: clone or update every repo of an organization."""

from __future__ import annotations

from pathlib import Path

import typer

from ghfetch import __version__
from ghfetch.cli.context import build_context
from ghfetch.core.config import MAX_JOBS_LIMIT, CloneProtocol
from ghfetch.core.errors import ErrorCode
from ghfetch.services.sync import (
    GhRepoLister,
    GitCli,
    ProcessStatus,
    SyncService,
    parse_filters,
)

_EXIT_CODES: dict[ProcessStatus, ErrorCode] = {
    ProcessStatus.SUCCESS: ErrorCode.OK,
    ProcessStatus.PARTIAL_FAILURE: ErrorCode.SYNC_ERROR,
    ProcessStatus.FAILURE: ErrorCode.DISCOVERY_ERROR,
}


def exit_code_for(status: ProcessStatus) -> ErrorCode:
    return _EXIT_CODES[status]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def fetch(
    github_org: str | None = typer.Option(
        None,
        "--github-org",
        "-g",
        help="GitHub organization (or user). [default: chimbosonic]",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Perform a dry run without making any changes."
    ),
    filters: str | None = typer.Option(
        None,
        "--filters",
        "-f",
        help="Comma-separated repo name substrings to exclude.",
    ),
    max_jobs: int | None = typer.Option(
        None,
        "--max-jobs",
        "--max-threads",
        "-m",
        help=f"Concurrent clone/fetch jobs (1-{MAX_JOBS_LIMIT}). [default: 5]",
    ),
    https: bool = typer.Option(False, "--https", help="Clone over https rather than ssh."),
    limit: int | None = typer.Option(
        None, "--limit", "-L", help="Max repos to list. [default: 1000]"
    ),
    directory: Path | None = typer.Option(
        None,
        "--directory",
        "-C",
        help="Directory holding the local clones. [default: current directory]",
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to a config.toml."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Clone missing repos and fetch existing ones for a GitHub organization."""
    ctx = build_context(config)
    cfg = ctx.config

    jobs = max_jobs if max_jobs is not None else cfg.sync.max_jobs
    if not 1 <= jobs <= MAX_JOBS_LIMIT:
        ctx.console.error(f"--max-jobs must be between 1 and {MAX_JOBS_LIMIT}, got {jobs}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    list_limit = limit if limit is not None else cfg.gh.limit
    if list_limit <= 0:
        ctx.console.error(f"--limit must be positive, got {list_limit}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    try:
        base_dir = (directory or Path.cwd()).expanduser().resolve()
    except OSError as e:
        ctx.console.error(f"invalid --directory: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    protocol: CloneProtocol = "https" if https else cfg.sync.protocol
    org = github_org if github_org is not None else cfg.sync.org
    filter_set = parse_filters(filters) if filters is not None else cfg.sync.filters

    service = SyncService(
        lister=GhRepoLister(
            cwd=Path.cwd(),
            limit=list_limit,
            timeout=cfg.gh.timeout,
            retry_attempts=cfg.gh.retry_attempts,
        ),
        git=GitCli(protocol=protocol, timeout=cfg.sync.git_timeout),
        console=ctx.console,
        base_dir=base_dir,
        max_jobs=jobs,
    )
    result = service.run(org, filter_set, dry_run=dry_run)

    code = exit_code_for(result.status)
    if not code.is_success:
        raise typer.Exit(code=int(code))
