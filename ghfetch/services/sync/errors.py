from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# Failed outcome detail for names rejected before any command runs.
INVALID_NAME_DETAIL = "invalid repository name"


@dataclass(frozen=True, slots=True)
class SyncError:
    """Discovery error; fatal to the whole run."""

    kind: Literal[
        "gh_missing",
        "gh_auth_required",
        "discovery_failed",
        "invalid_payload",
    ]
    message: str
    hint: str | None = None
