from __future__ import annotations

from typing import Any, Mapping


def first_present(row: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None (API/DB aliases)."""
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None
