"""
Where: `common.env`
What: small typed parsers for environment variables.
Why: keeps `os.getenv` plus fallback/bounds guarding out of the settings code.
"""

from __future__ import annotations

import os
from typing import Optional


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """Read an integer environment variable (missing/invalid -> default).

    Parameters
    ----------
    name : str
        Variable name.
    default : Optional[int]
        Value returned when unset or unparsable.
    min_value : Optional[int]
        Lower bound; parsed values below it are raised to it.

    Returns
    -------
    Optional[int]
        Parsed value, or `default`.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_float(
    name: str, default: float, *, min_value: Optional[float] = None
) -> float:
    """Read a float environment variable (missing/invalid -> default)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    if val != val:  # NaN
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_str(name: str, default: str) -> str:
    """Read a string environment variable; blank values count as unset."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


__all__ = ["env_int", "env_float", "env_str"]
