from __future__ import annotations

"""Gamut handling for OKLCH colors.

This module brings an OKLCH color inside a target display gamut by
reducing chroma at fixed lightness and hue. The same bisection is used
for every gamut; only the membership test differs.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from common import settings

from .color_types import OKLCH, Gamut
from .engine import ColorEngine, default_engine


@dataclass(frozen=True)
class ClampResult:
    """Outcome of :func:`clamp_to_gamut`."""

    lightness: float
    chroma: float
    hue: float
    clamped: bool

    @property
    def oklch(self) -> OKLCH:
        return (self.lightness, self.chroma, self.hue)


def clamp_to_gamut(
    lch: OKLCH,
    gamut: Gamut,
    engine: Optional[ColorEngine] = None,
    iterations: Optional[int] = None,
) -> ClampResult:
    """Return the color unchanged if inside ``gamut``, else its max in-gamut chroma.

    Bisects chroma over [0, C] for a fixed number of iterations (20 by
    default), holding L and h fixed. The returned chroma is always the
    lower bracket, i.e. a value that tested inside the gamut (or 0).
    """
    if engine is None:
        engine = default_engine()
    if iterations is None:
        iterations = settings.get().CLAMP_ITERATIONS

    L, C, h = lch
    C = max(0.0, C)
    if engine.in_gamut((L, C, h), gamut):
        return ClampResult(L, C, h, clamped=False)

    lo, hi = 0.0, C
    for _ in range(iterations):
        mid = (lo + hi) / 2.0
        if engine.in_gamut((L, mid, h), gamut):
            lo = mid
        else:
            hi = mid
    return ClampResult(L, lo, h, clamped=True)


# Upper chroma bound used by editors and as the search ceiling below.
MAX_CHROMA_BY_GAMUT: Dict[Gamut, float] = {
    Gamut.SRGB: 0.37,
    Gamut.P3: 0.50,
    Gamut.REC2020: 0.55,
}


def max_chroma_for_gamut(gamut: Gamut) -> float:
    return MAX_CHROMA_BY_GAMUT[Gamut.from_value(gamut)]


def max_chroma_in_gamut(
    lightness: float,
    hue: float,
    gamut: Gamut,
    engine: Optional[ColorEngine] = None,
) -> float:
    """Largest chroma representable at (lightness, hue) in ``gamut``."""
    ceiling = max_chroma_for_gamut(gamut)
    return clamp_to_gamut((lightness, ceiling, hue), gamut, engine).chroma


__all__ = [
    "ClampResult",
    "MAX_CHROMA_BY_GAMUT",
    "clamp_to_gamut",
    "max_chroma_for_gamut",
    "max_chroma_in_gamut",
]
