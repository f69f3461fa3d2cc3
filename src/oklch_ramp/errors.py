from __future__ import annotations

"""Exception types raised by the palette engine.

Only structural misconfiguration raises. Runtime data problems (an
unparsable background, a contrast target that cannot be reached) are
reported as :class:`oklch_ramp.diagnostics.Diagnostic` values instead.
"""


class PaletteError(Exception):
    """Base class for engine errors."""


class PaletteConfigError(PaletteError, ValueError):
    """Controls or settings are structurally invalid (programming/config error)."""


def enum_from_value(enum_cls, value, label: str):
    """Look up ``value`` in ``enum_cls``; case-insensitive, ``_`` reads as ``-``."""
    if isinstance(value, enum_cls):
        return value
    s = str(value).strip().lower().replace("_", "-")
    for member in enum_cls:
        if member.value.lower() == s:
            return member
    raise PaletteConfigError(f"Unknown {label}: {value!r}")


__all__ = ["PaletteError", "PaletteConfigError", "enum_from_value"]
