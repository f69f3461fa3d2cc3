from __future__ import annotations

"""Export helpers for generated palettes.

`export_palette` converts a palette into a plain list of colors in one
format; `css_variables` and `tailwind_config` render ready-to-paste
snippets keyed by token name.
"""

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .color_types import DEFAULT_PRECISION, Gamut, PaletteColor, Precision
from .engine import ColorEngine, default_engine
from .errors import PaletteConfigError


class ExportFormat(Enum):
    """Supported output formats for exported color lists."""

    HEX = "hex"
    RGB = "rgb"
    HSL = "hsl"
    OKLCH = "oklch"
    CSS = "css"
    SRGB_01 = "srgb_01"
    SRGB_255 = "srgb_255"

    @classmethod
    def from_value(cls, value: str) -> "ExportFormat":
        for fmt in cls:
            if fmt.value == str(value).lower():
                return fmt
        raise PaletteConfigError(f"Unknown export format: {value}")


@dataclass(frozen=True)
class ColorFormats:
    hex: str
    rgb: str
    hsl: str
    oklch: str


def color_formats(color: PaletteColor, engine: Optional[ColorEngine] = None) -> ColorFormats:
    """Every string representation of one swatch."""
    if engine is None:
        engine = default_engine()
    lch = color.to_oklch()
    return ColorFormats(
        hex=engine.to_hex(lch),
        rgb=engine.to_rgb_string(lch),
        hsl=engine.to_hsl_string(lch),
        oklch=color.oklch,
    )


def export_palette(
    palette: Iterable[PaletteColor],
    fmt: ExportFormat | str,
    name: str = "palette",
    engine: Optional[ColorEngine] = None,
) -> List[object]:
    """Convert a palette to a list of colors in the desired format."""
    export_fmt = fmt if isinstance(fmt, ExportFormat) else ExportFormat.from_value(fmt)
    if engine is None:
        engine = default_engine()
    colors = list(palette)
    if export_fmt == ExportFormat.HEX:
        return [c.css for c in colors]
    if export_fmt == ExportFormat.RGB:
        return [engine.to_rgb_string(c.to_oklch()) for c in colors]
    if export_fmt == ExportFormat.HSL:
        return [engine.to_hsl_string(c.to_oklch()) for c in colors]
    if export_fmt == ExportFormat.OKLCH:
        return [c.oklch for c in colors]
    if export_fmt == ExportFormat.CSS:
        return [_css_declaration(c, name) for c in colors]
    srgb = [engine.to_gamut_rgb(c.to_oklch(), Gamut.SRGB) or (0.0, 0.0, 0.0) for c in colors]
    if export_fmt == ExportFormat.SRGB_01:
        return srgb
    if export_fmt == ExportFormat.SRGB_255:
        return [(int(round(r * 255)), int(round(g * 255)), int(round(b * 255))) for r, g, b in srgb]
    raise PaletteConfigError(f"Unsupported export format: {fmt}")


def css_variables(palette: Iterable[PaletteColor], name: str = "palette") -> str:
    """CSS custom properties inside a ``:root`` block."""
    body = "\n".join(f"  {_css_declaration(c, name)}" for c in palette)
    return f":root {{\n{body}\n}}"


def tailwind_config(palette: Iterable[PaletteColor], name: str = "custom") -> str:
    """Colors snippet for a tailwind.config.js ``colors`` section."""
    colors: Dict[str, str] = {c.token_name: c.css for c in palette}
    return (
        "// Add to your tailwind.config.js colors section\n"
        "colors: {\n"
        f"  {name}: {json.dumps(colors, indent=4)}\n"
        "}"
    )


def convert_to_luminance(
    color: PaletteColor,
    engine: Optional[ColorEngine] = None,
    precision: Precision = DEFAULT_PRECISION,
) -> PaletteColor:
    """Drop the chroma of ``color``, keeping lightness and the rounded hue."""
    if engine is None:
        engine = default_engine()
    hue = precision.hue.quantize(color.hue)
    lch = (color.lightness, 0.0, hue)
    return replace(
        color,
        chroma=0.0,
        hue=hue,
        css=engine.to_hex(lch),
        oklch=engine.to_oklch_string(lch),
    )


def convert_palette_to_luminance(
    palette: Iterable[PaletteColor], engine: Optional[ColorEngine] = None
) -> List[PaletteColor]:
    return [convert_to_luminance(c, engine) for c in palette]


def _css_declaration(color: PaletteColor, name: str) -> str:
    return f"--{name}-{color.token_name}: {color.css};"


__all__ = [
    "ExportFormat",
    "ColorFormats",
    "color_formats",
    "export_palette",
    "css_variables",
    "tailwind_config",
    "convert_to_luminance",
    "convert_palette_to_luminance",
]
