from __future__ import annotations

"""Container type for generated palettes.

This module defines :class:`Palette`, the ordered, immutable result of a
generation call. It behaves as a sequence of
:class:`oklch_ramp.color_types.PaletteColor` and also carries the
resolved background and the diagnostics produced on the way.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, overload

from .color_types import Gamut, PaletteColor
from .controls import LightnessMode
from .diagnostics import Diagnostic, DiagnosticKind


@dataclass(frozen=True)
class Palette(Sequence):
    """Generated palette.

    Attributes
    ----------
    colors:
        Swatches in ascending step order.
    background:
        Absolute background color the contrasts were computed against.
    gamut:
        Gamut every non-endpoint swatch lies in.
    lightness_mode:
        Lightness mode the palette was generated with.
    diagnostics:
        Recovered problems, in the order they were encountered.
    """

    colors: Tuple[PaletteColor, ...]
    background: str
    gamut: Gamut
    lightness_mode: LightnessMode
    diagnostics: Tuple[Diagnostic, ...] = ()

    @overload
    def __getitem__(self, index: int) -> PaletteColor: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[PaletteColor, ...]: ...

    def __getitem__(self, index):
        return self.colors[index]

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[PaletteColor]:
        return iter(self.colors)

    @property
    def steps(self) -> Tuple[float, ...]:
        return tuple(c.step for c in self.colors)

    def by_step(self, step: float) -> Optional[PaletteColor]:
        for color in self.colors:
            if color.step == step:
                return color
        return None

    def hex(self) -> List[str]:
        return [c.css for c in self.colors]

    def diagnostics_of(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]


__all__ = ["Palette"]
