from __future__ import annotations

"""Chroma distribution curves.

This module defines :class:`CurveType` and :class:`Easing` and maps a
step's distance from the chroma peak to a weighting factor in [0, 1].
Every curve except ``FLAT`` is zero at distance 0.5 and beyond, so the
chroma falls back to the configured minimum toward the palette ends.
"""

import math
from enum import Enum
from typing import Callable, Dict

import numpy as np
from numpy.typing import NDArray

from .errors import enum_from_value


class CurveType(Enum):
    """Shape of the chroma distribution around the peak."""

    FLAT = "flat"
    GAUSSIAN = "gaussian"
    LINEAR = "linear"
    SINE = "sine"
    CUBIC = "cubic"
    QUARTIC = "quartic"

    @classmethod
    def from_value(cls, value: "CurveType | str") -> "CurveType":
        return enum_from_value(cls, value, "chroma curve type")


class Easing(Enum):
    """Monotone reparameterization applied to the curve factor."""

    NONE = "none"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"

    @classmethod
    def from_value(cls, value: "Easing | str | None") -> "Easing":
        if value is None:
            return cls.NONE
        return enum_from_value(cls, value, "chroma easing")


# Width of the Gaussian bell; re-based so that it reaches 0 at d = 0.5.
GAUSSIAN_WIDTH = 0.15
CURVE_CUTOFF = 0.5


def _flat(distance: float) -> float:
    return 1.0


def _gaussian(distance: float) -> float:
    if distance >= CURVE_CUTOFF:
        return 0.0
    raw = math.exp(-(distance**2) / GAUSSIAN_WIDTH)
    floor = math.exp(-(CURVE_CUTOFF**2) / GAUSSIAN_WIDTH)
    return (raw - floor) / (1.0 - floor)


def _linear(distance: float) -> float:
    return max(0.0, 1.0 - distance * 2.0)


def _sine(distance: float) -> float:
    return math.cos(distance * math.pi) if distance <= CURVE_CUTOFF else 0.0


def _cubic(distance: float) -> float:
    return (1.0 - distance * 2.0) ** 3 if distance <= CURVE_CUTOFF else 0.0


def _quartic(distance: float) -> float:
    return (1.0 - distance * 2.0) ** 4 if distance <= CURVE_CUTOFF else 0.0


_CURVES: Dict[CurveType, Callable[[float], float]] = {
    CurveType.FLAT: _flat,
    CurveType.GAUSSIAN: _gaussian,
    CurveType.LINEAR: _linear,
    CurveType.SINE: _sine,
    CurveType.CUBIC: _cubic,
    CurveType.QUARTIC: _quartic,
}


def apply_easing(factor: float, easing: Easing = Easing.NONE) -> float:
    """Reshape a factor in [0, 1] with the given easing."""
    if easing == Easing.EASE_IN:
        return factor * factor
    if easing == Easing.EASE_OUT:
        return 1.0 - (1.0 - factor) ** 2
    if easing == Easing.EASE_IN_OUT:
        if factor < 0.5:
            return 2.0 * factor * factor
        return 1.0 - (-2.0 * factor + 2.0) ** 2 / 2.0
    return factor


def chroma_factor(
    distance: float,
    curve: CurveType = CurveType.GAUSSIAN,
    easing: Easing = Easing.NONE,
) -> float:
    """Weighting factor in [0, 1] for a step at ``distance`` from the peak."""
    distance = abs(distance)
    base = _CURVES[CurveType.from_value(curve)](distance)
    base = max(0.0, min(1.0, base))
    return max(0.0, min(1.0, apply_easing(base, Easing.from_value(easing))))


def curve_chroma(
    normalized_step: float,
    min_chroma: float,
    max_chroma: float,
    peak: float,
    curve: CurveType = CurveType.GAUSSIAN,
    easing: Easing = Easing.NONE,
) -> float:
    """Chroma for a normalized step position (0 = lightest, 1 = darkest)."""
    factor = chroma_factor(abs(normalized_step - peak), curve, easing)
    return min_chroma + (max_chroma - min_chroma) * factor


def sample_chroma_curve(
    n_samples: int,
    min_chroma: float,
    max_chroma: float,
    peak: float,
    curve: CurveType = CurveType.GAUSSIAN,
    easing: Easing = Easing.NONE,
) -> NDArray[np.float64]:
    """Sample the chroma curve at ``n_samples`` evenly spaced positions.

    Returns an (n, 2) array of (position, chroma) rows, used for curve
    previews.
    """
    if n_samples < 2:
        raise ValueError("n_samples must be at least 2.")
    positions = np.linspace(0.0, 1.0, n_samples)
    chroma = np.array(
        [curve_chroma(float(t), min_chroma, max_chroma, peak, curve, easing) for t in positions],
        dtype=np.float64,
    )
    return np.stack([positions, chroma], axis=1)


__all__ = [
    "CurveType",
    "Easing",
    "GAUSSIAN_WIDTH",
    "apply_easing",
    "chroma_factor",
    "curve_chroma",
    "sample_chroma_curve",
]
