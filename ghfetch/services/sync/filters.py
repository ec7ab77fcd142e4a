"""Name-based exclusion filters.

A repository is excluded when any filter is a literal, case-sensitive
substring of its name: "test" excludes both "testing-repo" and "mytest123".
There is no globbing, regex or prefix matching.
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["is_excluded", "parse_filters"]


def is_excluded(name: str, filters: Iterable[str]) -> bool:
    """Return True if some non-empty filter occurs in `name`."""
    return any(f and f in name for f in filters)


def parse_filters(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated option value into filters.

    Surrounding whitespace is stripped and empty items are dropped:
    "test, archive,," -> ("test", "archive").
    """
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())
