from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from ghfetch.core.config import CloneProtocol
from ghfetch.services.sync.errors import SyncError

# -----------------------------------------------------------------------------
# Discovery
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RemoteRepo:
    """A repository as listed by discovery. `name` is the local directory name."""

    name: str
    ssh_url: str = ""
    https_url: str = ""

    def clone_url(self, protocol: CloneProtocol) -> str:
        return self.https_url if protocol == "https" else self.ssh_url


def repo_name_from_url(url: str) -> str:
    """Last path segment of a clone URL, without a trailing `.git`.

    Works for both `git@github.com:org/name.git` and
    `https://github.com/org/name.git`.
    """
    tail = url.rstrip("/").replace(":", "/").rsplit("/", 1)[-1]
    return tail.removesuffix(".git")


# -----------------------------------------------------------------------------
# Planning
# -----------------------------------------------------------------------------


class LocalState(Enum):
    PRESENT = auto()
    ABSENT = auto()


@dataclass(frozen=True, slots=True)
class Skip:
    reason: str

    def __str__(self) -> str:
        return "skip"


@dataclass(frozen=True, slots=True)
class Clone:
    def __str__(self) -> str:
        return "clone"


@dataclass(frozen=True, slots=True)
class Fetch:
    def __str__(self) -> str:
        return "fetch"


@dataclass(frozen=True, slots=True)
class Invalid:
    """Name rejected at plan time; never dispatched to git."""

    reason: str

    def __str__(self) -> str:
        return "reject"


Action = Skip | Clone | Fetch | Invalid


@dataclass(frozen=True, slots=True)
class PlannedRepo:
    repo: RemoteRepo
    action: Action

    @property
    def name(self) -> str:
        return self.repo.name


# -----------------------------------------------------------------------------
# Execution
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Succeeded:
    simulated: bool = False


@dataclass(frozen=True, slots=True)
class Failed:
    detail: str


@dataclass(frozen=True, slots=True)
class Skipped:
    reason: str


Outcome = Succeeded | Failed | Skipped


@dataclass(frozen=True, slots=True)
class ReportEntry:
    name: str
    action: Action
    outcome: Outcome


@dataclass(frozen=True, slots=True)
class RunReport:
    """Outcomes of one run, in completion order.

    The counts are derived from the entries, so they do not depend on the
    order in which units finished.
    """

    entries: tuple[ReportEntry, ...] = ()
    dry_run: bool = False

    @property
    def planned(self) -> int:
        return len(self.entries)

    @property
    def succeeded(self) -> int:
        return sum(1 for e in self.entries if isinstance(e.outcome, Succeeded))

    @property
    def failed(self) -> int:
        return sum(1 for e in self.entries if isinstance(e.outcome, Failed))

    @property
    def skipped(self) -> int:
        return sum(1 for e in self.entries if isinstance(e.outcome, Skipped))

    @property
    def failures(self) -> list[ReportEntry]:
        return [e for e in self.entries if isinstance(e.outcome, Failed)]

    def outcome_of(self, name: str) -> Outcome | None:
        for entry in self.entries:
            if entry.name == name:
                return entry.outcome
        return None


class ProcessStatus(Enum):
    SUCCESS = auto()
    PARTIAL_FAILURE = auto()
    FAILURE = auto()


@dataclass(frozen=True, slots=True)
class RunResult:
    status: ProcessStatus
    report: RunReport = field(default_factory=RunReport)
    error: SyncError | None = None
