"""Process exit codes.

The values are part of the command line contract and should remain stable:
- 0: Every planned repository synced (or there was nothing to do)
- 1: User error (bad option value, unreadable or invalid config)
- 2: Usage error reported by the argument parser itself
- 3: Discovery failed, nothing was planned or executed
- 4: Discovery succeeded but at least one repository failed
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ghfetch command."""

    OK = 0
    USER_ERROR = 1
    USAGE_ERROR = 2
    DISCOVERY_ERROR = 3
    SYNC_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
