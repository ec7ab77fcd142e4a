"""Concurrent execution of a sync plan.

Every Clone/Fetch entry is an independent job on a bounded thread pool.
Jobs share nothing but the immutable collaborator; a failing job becomes a
Failed outcome and never cancels or delays its siblings. Results flow back
to the calling thread through `as_completed`, which is the only place the
report is appended to and the only place that prints.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Protocol

from ghfetch.core.config import DEFAULT_MAX_JOBS
from ghfetch.core.result import Err, Result
from ghfetch.output.console import ConsoleProtocol, Style
from ghfetch.platform.process import ProcessError
from ghfetch.services.sync.errors import INVALID_NAME_DETAIL
from ghfetch.services.sync.model import (
    Clone,
    Failed,
    Fetch,
    Invalid,
    PlannedRepo,
    RemoteRepo,
    ReportEntry,
    RunReport,
    Skip,
    Skipped,
    Succeeded,
)
from ghfetch.services.sync.planner import validate_name

__all__ = ["CloneFetchExecutor", "SyncExecutor"]


class CloneFetchExecutor(Protocol):
    """Performs the actual clone/fetch. Must be safe to call concurrently."""

    def clone(self, repo: RemoteRepo, base_dir: Path) -> Result[None, ProcessError]: ...

    def fetch(self, repo: RemoteRepo, base_dir: Path) -> Result[None, ProcessError]: ...


class SyncExecutor:
    def __init__(
        self,
        *,
        git: CloneFetchExecutor,
        console: ConsoleProtocol,
        base_dir: Path,
        max_jobs: int = DEFAULT_MAX_JOBS,
    ) -> None:
        self._git = git
        self._console = console
        self._base_dir = base_dir
        self._max_jobs = max(1, max_jobs)

    def execute(self, planned: Sequence[PlannedRepo], *, dry_run: bool) -> RunReport:
        """Run (or simulate) every planned entry and wait for all of them.

        Skip and Invalid entries are recorded first, without touching git.
        In dry-run mode Clone/Fetch entries are reported as simulated
        successes in plan order and nothing on disk or on the network is
        touched.
        """
        entries: list[ReportEntry] = []
        jobs: list[PlannedRepo] = []

        for item in planned:
            match item.action:
                case Skip(reason=reason):
                    self._console.print(f"skip {item.name} ({reason})", Style.DIM)
                    entries.append(ReportEntry(item.name, item.action, Skipped(reason)))
                case Invalid(reason=reason):
                    entries.append(self._reject(item, reason))
                case Clone() | Fetch():
                    if validate_name(item.name) is not None:
                        entries.append(self._reject(item, INVALID_NAME_DETAIL))
                    else:
                        jobs.append(item)

        if dry_run:
            for item in jobs:
                self._console.print(f"would {item.action} {item.name}", Style.INFO)
                entries.append(ReportEntry(item.name, item.action, Succeeded(simulated=True)))
            return RunReport(entries=tuple(entries), dry_run=True)

        entries.extend(self._run_jobs(jobs))
        return RunReport(entries=tuple(entries), dry_run=False)

    def _reject(self, item: PlannedRepo, reason: str) -> ReportEntry:
        self._console.warning(f"reject {item.name!r}: {reason}")
        return ReportEntry(item.name, item.action, Failed(reason))

    def _run_jobs(self, jobs: list[PlannedRepo]) -> list[ReportEntry]:
        if not jobs:
            return []

        total = len(jobs)
        workers = min(self._max_jobs, total)
        self._console.info(f"processing {total} repos with up to {workers} concurrent jobs")

        done: list[ReportEntry] = []
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ghfetch") as pool:
            futures = [pool.submit(self._run_one, item) for item in jobs]
            try:
                for future in as_completed(futures):
                    entry = future.result()
                    done.append(entry)
                    self._print_progress(len(done), total, entry)
            except KeyboardInterrupt:
                # Queued jobs never start; running git processes receive the
                # same SIGINT. Nothing is reported for them.
                pool.shutdown(wait=False, cancel_futures=True)
                raise

        return done

    def _run_one(self, item: PlannedRepo) -> ReportEntry:
        try:
            if isinstance(item.action, Clone):
                result = self._git.clone(item.repo, self._base_dir)
            else:
                result = self._git.fetch(item.repo, self._base_dir)
        except Exception as e:  # noqa: BLE001
            return ReportEntry(item.name, item.action, Failed(f"{type(e).__name__}: {e}"))

        if isinstance(result, Err):
            return ReportEntry(item.name, item.action, Failed(result.error.detail))
        return ReportEntry(item.name, item.action, Succeeded())

    def _print_progress(self, index: int, total: int, entry: ReportEntry) -> None:
        prefix = f"[{index}/{total}] {entry.action} {entry.name}"
        match entry.outcome:
            case Failed(detail=detail):
                self._console.error(f"{prefix} failed")
                for line in detail.splitlines():
                    self._console.print(f"  {line}", Style.DIM)
            case _:
                self._console.success(prefix)
