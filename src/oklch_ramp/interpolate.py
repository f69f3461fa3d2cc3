from __future__ import annotations

"""Interpolated (non-core) steps.

Fractional steps are blended between the two neighbouring core steps in
OKLCH, taking hue along the shorter arc. The contrast of a blended
swatch is the linear blend of its neighbours' contrast values. That is
an approximation that can differ from the true contrast of the blended
color; it is kept intentionally. Only a manual lightness override
triggers an exact recomputation against the background.
"""

from typing import Optional

from .color_types import DEFAULT_PRECISION, OKLCH, Gamut, PaletteColor, Precision
from .engine import ColorEngine, ColorLike, default_engine
from .hue import shortest_hue_delta, wrap_hue
from .swatch import make_palette_color, quantize_in_gamut


def interpolate_oklch(a: OKLCH, b: OKLCH, ratio: float) -> OKLCH:
    """Blend two (L, C, h) triples; hue follows the shorter arc."""
    L1, C1, h1 = a
    L2, C2, h2 = b
    L = L1 + (L2 - L1) * ratio
    C = C1 + (C2 - C1) * ratio
    h = wrap_hue(h1 + shortest_hue_delta(h1, h2) * ratio)
    return (L, C, h)


def interpolate_colors(
    lower: PaletteColor,
    upper: PaletteColor,
    ratio: float,
    step: float,
    token_name: str,
    gamut: Gamut = Gamut.SRGB,
    engine: Optional[ColorEngine] = None,
    precision: Precision = DEFAULT_PRECISION,
) -> PaletteColor:
    """Swatch at ``ratio`` between ``lower`` (0) and ``upper`` (1)."""
    if engine is None:
        engine = default_engine()
    ratio = max(0.0, min(1.0, ratio))
    lch = quantize_in_gamut(
        interpolate_oklch(lower.to_oklch(), upper.to_oklch(), ratio), gamut, engine, precision
    )
    contrast = lower.contrast + (upper.contrast - lower.contrast) * ratio
    return make_palette_color(step, token_name, lch, engine, contrast=contrast)


def apply_lightness_override(
    color: PaletteColor,
    lightness: float,
    background: ColorLike,
    gamut: Gamut = Gamut.SRGB,
    engine: Optional[ColorEngine] = None,
    precision: Precision = DEFAULT_PRECISION,
) -> PaletteColor:
    """Replace the lightness of ``color``, keeping its chroma and hue.

    The contrast is recomputed exactly against ``background``.
    """
    if engine is None:
        engine = default_engine()
    lch = quantize_in_gamut((lightness, color.chroma, color.hue), gamut, engine, precision)
    return make_palette_color(color.step, color.token_name, lch, engine, background=background)


def interpolation_ratio(step: float, lower_step: float, upper_step: float) -> float:
    span = upper_step - lower_step
    if span <= 0:
        return 0.0
    return (step - lower_step) / span


__all__ = [
    "interpolate_oklch",
    "interpolate_colors",
    "apply_lightness_override",
    "interpolation_ratio",
]
