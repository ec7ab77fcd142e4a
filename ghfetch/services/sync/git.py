from __future__ import annotations

import os
from pathlib import Path

from ghfetch.core.config import CloneProtocol
from ghfetch.core.result import Err, Result
from ghfetch.platform.process import ProcessError
from ghfetch.platform.process import run as run_process
from ghfetch.services.sync.model import RemoteRepo


class GitCli:
    """Clone/fetch through the `git` executable.

    Holds only immutable settings, so one instance is shared by all
    concurrent jobs. Credential prompts are disabled: a job that would need
    interactive input fails instead of blocking the terminal.
    """

    def __init__(self, *, protocol: CloneProtocol = "ssh", timeout: float | None = None) -> None:
        self._protocol: CloneProtocol = protocol
        self._timeout = timeout
        self._env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

    @property
    def protocol(self) -> CloneProtocol:
        return self._protocol

    def clone(self, repo: RemoteRepo, base_dir: Path) -> Result[None, ProcessError]:
        url = repo.clone_url(self._protocol)
        if not url:
            return Err(
                ProcessError(
                    command=("git", "clone"),
                    returncode=-1,
                    stdout="",
                    stderr=f"no {self._protocol} clone URL for {repo.name}",
                )
            )

        try:
            base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(
                ProcessError(
                    command=("git", "clone", url),
                    returncode=-1,
                    stdout="",
                    stderr=f"cannot create {base_dir}: {e}",
                )
            )

        # "--" keeps a URL or name starting with "-" from being read as an option.
        result = run_process(
            ["git", "clone", "--", url, repo.name],
            cwd=base_dir,
            env=self._env,
            timeout=self._timeout,
        )
        return result.map(lambda _: None)

    def fetch(self, repo: RemoteRepo, base_dir: Path) -> Result[None, ProcessError]:
        # Stop repository discovery at base_dir so a plain directory never
        # resolves to an enclosing working tree.
        env = {**self._env, "GIT_CEILING_DIRECTORIES": str(base_dir.resolve())}
        result = run_process(
            ["git", "-C", str(base_dir / repo.name), "fetch", "--all"],
            cwd=base_dir,
            env=env,
            timeout=self._timeout,
        )
        return result.map(lambda _: None)
