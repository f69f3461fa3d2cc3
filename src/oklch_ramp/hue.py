from __future__ import annotations

"""Hue drift across the palette.

Steps up to the anchor move linearly from ``base + light_drift`` at the
lightest step to ``base`` at the anchor; steps after it move from
``base`` to ``base + dark_drift`` at the darkest step.
"""

from .steps import ANCHOR_STEP, FIRST_CORE_STEP, LAST_CORE_STEP


def wrap_hue(h: float) -> float:
    """Wrap a hue into [0, 360)."""
    wrapped = h % 360.0
    if wrapped < 0.0:
        wrapped += 360.0
    # -1e-15 % 360 yields 360.0 in floating point.
    return 0.0 if wrapped >= 360.0 else wrapped


def resolve_hue(
    step: float,
    base_hue: float,
    light_drift: float,
    dark_drift: float,
    *,
    anchor: float = ANCHOR_STEP,
    first: float = FIRST_CORE_STEP,
    last: float = LAST_CORE_STEP,
) -> float:
    """Absolute hue for ``step``.

    Parameters
    ----------
    step:
        Step position; ``first`` is the lightest, ``last`` the darkest.
    base_hue:
        Hue at the anchor step.
    light_drift, dark_drift:
        Offsets reached at the lightest / darkest step.
    anchor, first, last:
        Anchor (middle) step and the extremes of the core range.
    """
    if step <= anchor:
        span = anchor - first
        progress = (anchor - step) / span if span > 0 else 0.0
        hue = base_hue + progress * light_drift
    else:
        span = last - anchor
        progress = (step - anchor) / span if span > 0 else 0.0
        hue = base_hue + progress * dark_drift
    return wrap_hue(hue)


def shortest_hue_delta(h_from: float, h_to: float) -> float:
    """Signed difference along the shorter arc, in (-180, 180]."""
    d = (h_to - h_from + 180.0) % 360.0 - 180.0
    return 180.0 if d == -180.0 else d


__all__ = ["wrap_hue", "resolve_hue", "shortest_hue_delta"]
