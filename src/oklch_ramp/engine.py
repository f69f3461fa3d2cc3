from __future__ import annotations

"""Color conversion engine for OKLCH, display gamuts and WCAG contrast.

This module defines the :class:`ColorEngine` protocol consumed by the
solver modules and a default implementation backed by ``coloraide``.
All coordinates cross this boundary as plain ``(L, C, h)`` tuples with
L in [0, 1] and h in degrees; the library's ``Color`` objects stay
internal to the engine.
"""

import logging
import math
from functools import lru_cache
from typing import Optional, Protocol, Tuple, Union

from coloraide import Color as _LibColor

from .color_types import DEFAULT_PRECISION, OKLCH, RGB, Gamut, Precision

logger = logging.getLogger(__name__)

ColorLike = Union[str, OKLCH]

FALLBACK_HEX = "#000000"
FALLBACK_RGB = "rgb(0, 0, 0)"
FALLBACK_HSL = "hsl(0, 0%, 0%)"
FALLBACK_OKLCH = "oklch(0.00% 0.000 0.00)"


class ColorEngine(Protocol):
    """Protocol abstracting the color-space primitives the engine needs."""

    def normalize_hue(self, h: float) -> float: ...

    def parse(self, text: str) -> Optional[OKLCH]: ...

    def to_gamut_rgb(self, lch: OKLCH, gamut: Gamut) -> Optional[RGB]: ...

    def in_gamut(self, lch: OKLCH, gamut: Gamut) -> bool: ...

    def to_hex(self, lch: OKLCH) -> str: ...

    def to_rgb_string(self, lch: OKLCH) -> str: ...

    def to_hsl_string(self, lch: OKLCH) -> str: ...

    def to_oklch_string(self, lch: OKLCH) -> str: ...

    def luminance(self, color: ColorLike) -> float: ...

    def contrast_ratio(self, a: ColorLike, b: ColorLike) -> float: ...


class DefaultColorEngine:
    """Default implementation based on coloraide's OKLCH and RGB spaces."""

    def __init__(self, precision: Precision = DEFAULT_PRECISION) -> None:
        self.precision = precision

    # -- encode / decode -------------------------------------------------

    def normalize_hue(self, h: float) -> float:
        """Normalize hue angle into [0, 360)."""
        if math.isnan(h):
            return 0.0
        return (h % 360.0 + 360.0) % 360.0

    def decode(self, lch: OKLCH) -> _LibColor:
        """Build a library color from an (L, C, h) triple."""
        L, C, h = lch
        return _LibColor("oklch", [L, max(0.0, C), self.normalize_hue(h)])

    def encode(self, color: _LibColor) -> OKLCH:
        """Library color -> (L, C, h); achromatic hues come back as 0."""
        ok = color.convert("oklch")
        L = float(ok["lightness"])
        C = float(ok["chroma"])
        h = float(ok["hue"])
        if math.isnan(C):
            C = 0.0
        return (L, C, self.normalize_hue(h))

    def parse(self, text: str) -> Optional[OKLCH]:
        """Parse any CSS color string; None when it is not a color."""
        if not isinstance(text, str):
            return None
        color = _parse_cached(text.strip())
        if color is None:
            return None
        lch = self.encode(color)
        if math.isnan(lch[0]):
            return None
        return lch

    def is_valid(self, text: str) -> bool:
        return self.parse(text) is not None

    # -- gamut -----------------------------------------------------------

    def to_gamut_rgb(self, lch: OKLCH, gamut: Gamut) -> Optional[RGB]:
        """Return the (r, g, b) triple in the gamut's RGB cube, or None if outside."""
        rgb = self.decode(lch).convert(gamut.space)
        if not rgb.in_gamut():
            return None
        return (
            _clip01(rgb["red"]),
            _clip01(rgb["green"]),
            _clip01(rgb["blue"]),
        )

    def in_gamut(self, lch: OKLCH, gamut: Gamut) -> bool:
        return self.to_gamut_rgb(lch, gamut) is not None

    # -- formatting ------------------------------------------------------

    def to_hex(self, lch: OKLCH) -> str:
        try:
            return self.decode(lch).convert("srgb").to_string(hex=True)
        except (ValueError, TypeError, ZeroDivisionError):
            logger.debug("hex conversion failed for %r", lch)
            return FALLBACK_HEX

    def to_rgb_string(self, lch: OKLCH) -> str:
        hex_value = self.to_hex(lch)
        try:
            return _LibColor(hex_value).to_string(comma=True)
        except (ValueError, TypeError):
            return FALLBACK_RGB

    def to_hsl_string(self, lch: OKLCH) -> str:
        hex_value = self.to_hex(lch)
        try:
            return _LibColor(hex_value).convert("hsl").to_string(comma=True, precision=4)
        except (ValueError, TypeError):
            return FALLBACK_HSL

    def to_oklch_string(self, lch: OKLCH) -> str:
        """Format as "oklch(L% C h)" at the configured display precision."""
        L, C, h = lch
        if any(math.isnan(v) or math.isinf(v) for v in (L, C, h)):
            return FALLBACK_OKLCH
        p = self.precision
        return (
            f"oklch({L * 100:.{p.lightness.display_decimals}f}% "
            f"{C:.{p.chroma.display_decimals}f} "
            f"{self.normalize_hue(h):.{p.hue.display_decimals}f})"
        )

    # -- contrast --------------------------------------------------------

    def luminance(self, color: ColorLike) -> float:
        """WCAG relative luminance; 0.0 for unparsable input."""
        lib = self._to_lib(color)
        if lib is None:
            return 0.0
        return float(lib.luminance())

    def contrast_ratio(self, a: ColorLike, b: ColorLike) -> float:
        """WCAG 2.1 contrast ratio (>= 1); 1.0 when either color is unparsable."""
        ca = self._to_lib(a)
        cb = self._to_lib(b)
        if ca is None or cb is None:
            return 1.0
        ratio = float(ca.contrast(cb, method="wcag21"))
        if math.isnan(ratio) or ratio < 1.0:
            return 1.0
        return ratio

    def _to_lib(self, color: ColorLike) -> Optional[_LibColor]:
        if isinstance(color, str):
            lch = self.parse(color)
            if lch is None:
                return None
            return self.decode(lch)
        return self.decode(color)


@lru_cache(maxsize=256)
def _parse_cached(text: str) -> Optional[_LibColor]:
    # cached colors are only ever converted, never modified in place
    if not text:
        return None
    try:
        return _LibColor(text)
    except (ValueError, TypeError):
        return None


def _clip01(x: float) -> float:
    return max(0.0, min(1.0, float(x)))


_default_engine: Optional[DefaultColorEngine] = None


def default_engine() -> DefaultColorEngine:
    """Shared stateless default engine."""
    global _default_engine
    if _default_engine is None:
        _default_engine = DefaultColorEngine()
    return _default_engine


__all__ = [
    "ColorLike",
    "ColorEngine",
    "DefaultColorEngine",
    "default_engine",
    "FALLBACK_HEX",
    "FALLBACK_RGB",
    "FALLBACK_HSL",
    "FALLBACK_OKLCH",
]
