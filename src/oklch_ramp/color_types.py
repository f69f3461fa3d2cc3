from __future__ import annotations

"""Core value types shared by the engine.

This module defines the OKLCH triple alias, the target gamut enum, the
rounding precision table and the immutable :class:`PaletteColor` emitted
for every requested step.
"""

import math
from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Tuple

from .errors import PaletteConfigError


OKLCH = Tuple[float, float, float]
RGB = Tuple[float, float, float]


class Gamut(Enum):
    """Display gamut targets. Values are the user-facing names."""

    SRGB = "sRGB"
    P3 = "P3"
    REC2020 = "Rec2020"

    @property
    def space(self) -> str:
        """Color space identifier understood by the color library."""
        return _GAMUT_SPACES[self]

    @classmethod
    def from_value(cls, value: "Gamut | str") -> "Gamut":
        if isinstance(value, Gamut):
            return value
        for g in cls:
            if g.value.lower() == str(value).strip().lower():
                return g
        raise PaletteConfigError(f"Unknown gamut: {value!r}")


_GAMUT_SPACES: Dict[Gamut, str] = {
    Gamut.SRGB: "srgb",
    Gamut.P3: "display-p3",
    Gamut.REC2020: "rec2020",
}


@dataclass(frozen=True)
class ChannelPrecision:
    """Rounding step and display decimals for one OKLCH channel."""

    step: float
    display_decimals: int

    @property
    def decimals(self) -> int:
        """Decimal places implied by the rounding step (0.001 -> 3)."""
        exponent = Decimal(str(self.step)).normalize().as_tuple().exponent
        return max(0, -int(exponent))

    def quantize(self, value: float) -> float:
        """Round to the nearest multiple of the step; ties go up."""
        n = math.floor(value / self.step + 0.5)
        return round(n * self.step, self.decimals)

    def quantize_down(self, value: float) -> float:
        """Round down to a multiple of the step (never increases the value)."""
        n = math.floor(value / self.step + 1e-9)
        q = round(n * self.step, self.decimals)
        # Guard against the epsilon pushing one step above value.
        if q > value:
            q = round((n - 1) * self.step, self.decimals)
        return q


@dataclass(frozen=True)
class Precision:
    lightness: ChannelPrecision
    chroma: ChannelPrecision
    hue: ChannelPrecision


DEFAULT_PRECISION = Precision(
    lightness=ChannelPrecision(step=0.0001, display_decimals=2),
    chroma=ChannelPrecision(step=0.001, display_decimals=3),
    hue=ChannelPrecision(step=0.1, display_decimals=2),
)


def round_contrast(ratio: float) -> float:
    """Contrast ratios are reported at 2 decimals, ties rounding up."""
    return math.floor(ratio * 100.0 + 0.5) / 100.0


@dataclass(frozen=True)
class PaletteColor:
    """One generated palette swatch.

    Attributes
    ----------
    step:
        Step position (1..11 core, 0/12 endpoints, fractional for
        interpolated swatches).
    token_name:
        Display label used for design tokens.
    lightness, chroma, hue:
        Rounded OKLCH coordinates. Lightness is in [0, 1], hue in [0, 360).
    oklch:
        Formatted perceptual string, e.g. "oklch(56.00% 0.150 247.00)".
    css:
        Hex representation "#rrggbb".
    contrast:
        Contrast ratio against the resolved background, at 2 decimals.
    """

    step: float
    token_name: str
    lightness: float
    chroma: float
    hue: float
    oklch: str
    css: str
    contrast: float

    def to_oklch(self) -> OKLCH:
        """Return (L, C, h)."""
        return (self.lightness, self.chroma, self.hue)

    def to_hex(self) -> str:
        return self.css

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["tokenName"] = data.pop("token_name")
        return data


__all__ = [
    "OKLCH",
    "RGB",
    "Gamut",
    "ChannelPrecision",
    "Precision",
    "DEFAULT_PRECISION",
    "round_contrast",
    "PaletteColor",
]
