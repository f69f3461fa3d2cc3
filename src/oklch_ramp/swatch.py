from __future__ import annotations

"""Final rounding and formatting of generated swatches."""

from typing import Optional

from .color_types import DEFAULT_PRECISION, OKLCH, Gamut, PaletteColor, Precision, round_contrast
from .engine import ColorEngine, ColorLike, default_engine
from .gamut import clamp_to_gamut
from .hue import wrap_hue

# Extra single-step chroma reductions tried after rounding.
_MAX_ROUNDING_BACKOFF = 5


def quantize_in_gamut(
    lch: OKLCH,
    gamut: Gamut,
    engine: Optional[ColorEngine] = None,
    precision: Precision = DEFAULT_PRECISION,
) -> OKLCH:
    """Round (L, C, h) to the precision grid without leaving ``gamut``.

    Lightness and hue are rounded first; chroma is then clamped at the
    rounded coordinates and rounded, falling back to rounding down.
    """
    if engine is None:
        engine = default_engine()
    L, C, h = lch
    L = precision.lightness.quantize(max(0.0, min(1.0, L)))
    h = wrap_hue(precision.hue.quantize(wrap_hue(h)))

    clamped = clamp_to_gamut((L, C, h), gamut, engine)
    c = precision.chroma.quantize(clamped.chroma)
    if engine.in_gamut((L, c, h), gamut):
        return (L, c, h)
    c = precision.chroma.quantize_down(clamped.chroma)
    for _ in range(_MAX_ROUNDING_BACKOFF):
        if c <= 0.0 or engine.in_gamut((L, c, h), gamut):
            break
        c = precision.chroma.quantize_down(c - precision.chroma.step)
    return (L, max(0.0, c), h)


def make_palette_color(
    step: float,
    token_name: str,
    lch: OKLCH,
    engine: Optional[ColorEngine] = None,
    *,
    background: Optional[ColorLike] = None,
    contrast: Optional[float] = None,
) -> PaletteColor:
    """Format an already-rounded (L, C, h) into a PaletteColor.

    The contrast is computed against ``background`` unless an explicit
    ``contrast`` is given.
    """
    if engine is None:
        engine = default_engine()
    if contrast is None:
        contrast = engine.contrast_ratio(lch, background) if background is not None else 1.0
    L, C, h = lch
    return PaletteColor(
        step=float(step),
        token_name=token_name,
        lightness=L,
        chroma=C,
        hue=h,
        oklch=engine.to_oklch_string(lch),
        css=engine.to_hex(lch),
        contrast=round_contrast(contrast),
    )


__all__ = ["quantize_in_gamut", "make_palette_color"]
