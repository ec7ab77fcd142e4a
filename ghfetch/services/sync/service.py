from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ghfetch.core.result import Err
from ghfetch.output.console import ConsoleProtocol, Style
from ghfetch.services.sync.executor import CloneFetchExecutor, SyncExecutor
from ghfetch.services.sync.gh import RepoLister
from ghfetch.services.sync.model import (
    Failed,
    ProcessStatus,
    RunReport,
    RunResult,
)
from ghfetch.services.sync.planner import plan


def status_for(report: RunReport) -> ProcessStatus:
    """Map a completed report to the process status.

    Discovery failures never get here; they are FAILURE by construction.
    """
    if report.failed:
        return ProcessStatus.PARTIAL_FAILURE
    return ProcessStatus.SUCCESS


class SyncService:
    """Clone or fetch every repository of an organization.

    Policy:
    - Discovery failure aborts the run before anything is planned.
    - Missing directories are cloned, existing ones fetched.
    - A failed repository is reported once; there is no automatic retry.
      Re-running is safe because local state is probed fresh every time.
    """

    def __init__(
        self,
        *,
        lister: RepoLister,
        git: CloneFetchExecutor,
        console: ConsoleProtocol,
        base_dir: Path,
        max_jobs: int,
    ) -> None:
        self._lister = lister
        self._console = console
        self._base_dir = base_dir
        self._executor = SyncExecutor(
            git=git,
            console=console,
            base_dir=base_dir,
            max_jobs=max_jobs,
        )

    def run(self, org: str, filters: Iterable[str], *, dry_run: bool = False) -> RunResult:
        self._console.print(f"fetching list of repos for {org}...", Style.DIM)
        listed = self._lister.list_repos(org)
        if isinstance(listed, Err):
            error = listed.error
            self._console.error(error.message)
            if error.hint:
                self._console.print(f"hint: {error.hint}", Style.DIM)
            return RunResult(
                status=ProcessStatus.FAILURE,
                report=RunReport(dry_run=dry_run),
                error=error,
            )

        planned = plan(listed.value, filters, self._base_dir)
        if dry_run:
            self._console.header("Dry run: no changes will be made")

        report = self._executor.execute(planned, dry_run=dry_run)
        self._print_summary(report)
        return RunResult(status=status_for(report), report=report)

    def _print_summary(self, report: RunReport) -> None:
        summary = (
            f"{report.planned} repos: {report.succeeded} succeeded, "
            f"{report.failed} failed, {report.skipped} skipped"
        )
        if report.dry_run:
            summary = f"dry run: {summary}"

        self._console.newline()
        if report.failed:
            self._console.error(summary)
            for entry in report.failures:
                match entry.outcome:
                    case Failed(detail=detail):
                        first_line = detail.splitlines()[0] if detail else ""
                        self._console.print(
                            f"  {entry.action} {entry.name!r}: {first_line}", Style.DIM
                        )
                    case _:
                        pass
        else:
            self._console.success(summary)
