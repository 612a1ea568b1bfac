"""Runtime helpers available to generated render functions."""

from __future__ import annotations

from typing import Any


def str_safe(value: Any) -> str:
    """Convert value to string, treating None as empty string.

    Used for ``<%= %>`` output so that expressions evaluating to None
    produce empty output rather than the literal string 'None'.
    """
    if value is None:
        return ""
    return str(value)
