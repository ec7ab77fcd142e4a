"""Action planning.

The planner turns the discovered repository list into exactly one action
per repository, in discovery order:

    invalid name     -> Invalid   (never probed, never dispatched)
    filter match     -> Skip("filtered")
    path exists      -> Fetch
    path missing     -> Clone

Clone is only ever chosen for a missing path and Fetch for an existing one,
so the executor does not need to re-check the filesystem.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ghfetch.services.sync.errors import INVALID_NAME_DETAIL
from ghfetch.services.sync.filters import is_excluded
from ghfetch.services.sync.model import (
    Action,
    Clone,
    Fetch,
    Invalid,
    LocalState,
    PlannedRepo,
    RemoteRepo,
    Skip,
)
from ghfetch.services.sync.probe import probe

__all__ = ["FILTERED", "plan", "validate_name"]

FILTERED = "filtered"


def validate_name(name: str) -> str | None:
    """Return a rejection reason for names unsafe to pass to git, else None."""
    if not name.strip():
        return "empty name"
    if name in (".", ".."):
        return "relative path component"
    if "/" in name or "\\" in name:
        return "contains a path separator"
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in name):
        return "contains a control character"
    if name.startswith("-"):
        return "starts with '-'"
    return None


def _choose(repo: RemoteRepo, filters: tuple[str, ...], base_dir: Path) -> Action:
    if validate_name(repo.name) is not None:
        return Invalid(INVALID_NAME_DETAIL)
    if is_excluded(repo.name, filters):
        return Skip(FILTERED)
    match probe(repo.name, base_dir):
        case LocalState.PRESENT:
            return Fetch()
        case LocalState.ABSENT:
            return Clone()


def plan(
    repos: Iterable[RemoteRepo],
    filters: Iterable[str],
    base_dir: Path,
) -> list[PlannedRepo]:
    """Plan one action per repository, preserving input order.

    Each name is probed at most once; nothing is cached between calls, so
    re-running the tool always sees fresh filesystem state.
    """
    filter_set = tuple(filters)
    return [PlannedRepo(repo=repo, action=_choose(repo, filter_set, base_dir)) for repo in repos]
