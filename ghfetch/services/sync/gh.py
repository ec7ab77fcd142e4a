"""Repository discovery through the GitHub CLI."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from time import sleep
from typing import Protocol

from ghfetch.core.config import DEFAULT_LIST_LIMIT, GH_READ_RETRY_ATTEMPTS, GH_TIMEOUT_SECONDS
from ghfetch.core.result import Err, Ok, Result
from ghfetch.core.structured import as_obj_list, as_str_dict, get_str
from ghfetch.platform.process import ProcessError
from ghfetch.platform.process import run as run_process
from ghfetch.services.sync.errors import SyncError
from ghfetch.services.sync.model import RemoteRepo, repo_name_from_url

__all__ = ["GhRepoLister", "RepoLister", "parse_repo_list"]

GH_READ_RETRY_DELAY_SECONDS = 1.0


class RepoLister(Protocol):
    def list_repos(self, org: str) -> Result[list[RemoteRepo], SyncError]: ...


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "tls handshake timeout",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def _is_auth_error(error: ProcessError) -> bool:
    text = error.stderr.lower()
    return "gh auth login" in text or "not logged in" in text


def _repo_from_item(item: dict[str, object]) -> RemoteRepo:
    ssh_url = get_str(item, "sshUrl") or ""
    web_url = get_str(item, "url") or ""
    https_url = web_url if not web_url or web_url.endswith(".git") else f"{web_url}.git"

    raw_name = item.get("name")
    if isinstance(raw_name, str):
        name = raw_name
    elif ssh_url:
        name = repo_name_from_url(ssh_url)
    else:
        name = ""

    return RemoteRepo(name=name, ssh_url=ssh_url, https_url=https_url)


def parse_repo_list(output: str) -> Result[list[RemoteRepo], SyncError]:
    """Parse `gh repo list --json name,sshUrl,url` output.

    Order is preserved. Names are kept verbatim, including empty ones, so the
    planner can reject them explicitly.
    """
    try:
        payload: object = json.loads(output)
    except json.JSONDecodeError as e:
        return Err(
            SyncError(
                kind="invalid_payload",
                message=f"gh repo list returned invalid JSON: {e}",
            )
        )

    items = as_obj_list(payload)
    if items is None:
        return Err(
            SyncError(
                kind="invalid_payload",
                message="gh repo list returned an unexpected payload (expected a list)",
            )
        )

    repos: list[RemoteRepo] = []
    for obj in items:
        item = as_str_dict(obj)
        if item is None:
            continue
        repos.append(_repo_from_item(item))
    return Ok(repos)


class GhRepoLister:
    """List an organization's repositories with `gh repo list`.

    Idempotent reads are retried on transient network errors; anything else
    is reported once as a SyncError.
    """

    def __init__(
        self,
        *,
        cwd: Path,
        limit: int = DEFAULT_LIST_LIMIT,
        timeout: float = GH_TIMEOUT_SECONDS,
        retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
    ) -> None:
        self._cwd = cwd
        self._limit = limit
        self._timeout = timeout
        self._retry_attempts = max(1, retry_attempts)

    def list_repos(self, org: str) -> Result[list[RemoteRepo], SyncError]:
        if not org.strip():
            return Err(SyncError(kind="discovery_failed", message="organization name is empty"))

        if shutil.which("gh") is None:
            return Err(
                SyncError(
                    kind="gh_missing",
                    message="gh: missing",
                    hint="Install GitHub CLI: https://cli.github.com/",
                )
            )

        cmd = [
            "gh",
            "repo",
            "list",
            org,
            "--json",
            "name,sshUrl,url",
            "--limit",
            str(self._limit),
        ]
        result = self._run_read(cmd)
        if isinstance(result, Err):
            error = result.error
            if _is_auth_error(error):
                return Err(
                    SyncError(
                        kind="gh_auth_required",
                        message="gh auth required",
                        hint="Run: gh auth login",
                    )
                )
            return Err(
                SyncError(
                    kind="discovery_failed",
                    message=f"gh repo list failed for {org}",
                    hint=error.stderr.strip() or str(error),
                )
            )

        return parse_repo_list(result.value)

    def _run_read(self, cmd: list[str]) -> Result[str, ProcessError]:
        result: Result[str, ProcessError] = Err(
            ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr="not run")
        )
        for attempt in range(self._retry_attempts):
            result = run_process(cmd, cwd=self._cwd, timeout=self._timeout)
            if isinstance(result, Ok):
                return result
            if attempt < self._retry_attempts - 1 and _is_transient_gh_error(result.error):
                sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt + 1))
                continue
            return result
        return result
