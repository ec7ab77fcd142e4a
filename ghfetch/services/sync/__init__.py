"""Bulk clone/fetch of an organization's repositories."""

from ghfetch.services.sync.executor import CloneFetchExecutor, SyncExecutor
from ghfetch.services.sync.filters import is_excluded, parse_filters
from ghfetch.services.sync.gh import GhRepoLister, RepoLister
from ghfetch.services.sync.git import GitCli
from ghfetch.services.sync.model import (
    Action,
    Clone,
    Failed,
    Fetch,
    Invalid,
    LocalState,
    Outcome,
    PlannedRepo,
    ProcessStatus,
    RemoteRepo,
    ReportEntry,
    RunReport,
    RunResult,
    Skip,
    Skipped,
    Succeeded,
)
from ghfetch.services.sync.planner import plan
from ghfetch.services.sync.probe import probe
from ghfetch.services.sync.service import SyncService

__all__ = [
    "Action",
    "Clone",
    "CloneFetchExecutor",
    "Failed",
    "Fetch",
    "GhRepoLister",
    "GitCli",
    "Invalid",
    "LocalState",
    "Outcome",
    "PlannedRepo",
    "ProcessStatus",
    "RemoteRepo",
    "RepoLister",
    "ReportEntry",
    "RunReport",
    "RunResult",
    "Skip",
    "Skipped",
    "Succeeded",
    "SyncExecutor",
    "SyncService",
    "is_excluded",
    "parse_filters",
    "plan",
    "probe",
]
