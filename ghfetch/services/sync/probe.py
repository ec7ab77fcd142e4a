from __future__ import annotations

from pathlib import Path

from ghfetch.services.sync.model import LocalState


def probe(name: str, base_dir: Path) -> LocalState:
    """Report whether `name` already exists directly under `base_dir`.

    Existence alone decides. The directory is not checked for being a clone
    of the expected remote; if it is unrelated or broken, the fetch that the
    planner chooses will fail and be reported like any other failure. An
    existing plain file also counts as present, since a clone into it would
    fail too.
    """
    path = base_dir / name
    if path.exists() or path.is_symlink():
        return LocalState.PRESENT
    return LocalState.ABSENT
