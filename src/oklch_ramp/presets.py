from __future__ import annotations

"""Named, versioned palette presets.

Presets are produced by a pure lookup: every call builds a fresh
:class:`PaletteControls`, so callers can never mutate shared defaults.
"""

from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from .controls import PaletteControls
from .steps import DEFAULT_STEPS

PRESET_VERSION = 1
DEFAULT_PRESET = "blue"

# Contrast ladder shared by all presets; 6 meets WCAG AA and 8 AAA on white.
DEFAULT_CONTRAST_TARGETS: Tuple[float, ...] = (
    1.1, 1.3, 1.7, 2.3, 3.2, 4.5, 6.7, 9.3, 13.1, 15.2, 17.2,
)


def _by_step(values: Sequence[Any]) -> Dict[float, Any]:
    """Map a list of 11 values onto core steps 1..11."""
    return {float(i + 1): v for i, v in enumerate(values)}


def _controls(
    *,
    base_hue: float,
    chroma_values: Sequence[float],
    lightness_values: Sequence[float],
    min_chroma: float,
    max_chroma: float,
    chroma_peak: float,
    light_hue_drift: float,
    dark_hue_drift: float,
    lightness_min: float = 0.95,
    lightness_max: float = 0.15,
    chroma_mode: str = "curve",
) -> PaletteControls:
    return PaletteControls(
        base_hue=base_hue,
        lightness_min=lightness_min,
        lightness_max=lightness_max,
        chroma_mode=chroma_mode,
        chroma_values=_by_step(chroma_values),
        min_chroma=min_chroma,
        max_chroma=max_chroma,
        chroma_peak=chroma_peak,
        chroma_curve_type="gaussian",
        chroma_easing="none",
        light_hue_drift=light_hue_drift,
        dark_hue_drift=dark_hue_drift,
        background_color="#ffffff",
        contrast_targets=_by_step(DEFAULT_CONTRAST_TARGETS),
        lightness_values=_by_step(lightness_values),
        lightness_overrides=_by_step([False] * len(DEFAULT_STEPS)),
        steps=DEFAULT_STEPS,
    )


def _blue() -> PaletteControls:
    return _controls(
        base_hue=247,
        chroma_values=(0.01, 0.05, 0.08, 0.11, 0.13, 0.15, 0.16, 0.14, 0.12, 0.10, 0.08),
        lightness_values=(0.97, 0.91, 0.83, 0.73, 0.65, 0.56, 0.49, 0.41, 0.32, 0.26, 0.22),
        min_chroma=0.02,
        max_chroma=0.24,
        chroma_peak=0.55,
        light_hue_drift=-5,
        dark_hue_drift=5,
    )


def _purple() -> PaletteControls:
    return _controls(
        base_hue=302,
        chroma_values=(0.01, 0.04, 0.08, 0.11, 0.13, 0.15, 0.16, 0.14, 0.12, 0.09, 0.07),
        lightness_values=(0.97, 0.91, 0.83, 0.76, 0.67, 0.59, 0.5, 0.42, 0.32, 0.27, 0.23),
        min_chroma=0.01,
        max_chroma=0.24,
        chroma_peak=0.48,
        light_hue_drift=0,
        dark_hue_drift=15,
        lightness_min=0.97,
    )


def _error() -> PaletteControls:
    return _controls(
        base_hue=30,
        chroma_values=(0.02, 0.05, 0.08, 0.11, 0.13, 0.15, 0.16, 0.14, 0.12, 0.10, 0.08),
        lightness_values=(0.97, 0.92, 0.84, 0.75, 0.67, 0.59, 0.5, 0.41, 0.32, 0.27, 0.23),
        min_chroma=0.015,
        max_chroma=0.23,
        chroma_peak=0.44,
        light_hue_drift=-5,
        dark_hue_drift=5,
    )


def _success() -> PaletteControls:
    return _controls(
        base_hue=151,
        chroma_mode="manual",
        chroma_values=(0.052, 0.098, 0.137, 0.169, 0.191, 0.189, 0.189, 0.112, 0.09, 0.079, 0.055),
        lightness_values=(0.95, 0.9, 0.82, 0.72, 0.63, 0.55, 0.46, 0.39, 0.3, 0.26, 0.22),
        min_chroma=0.03,
        max_chroma=0.37,
        chroma_peak=0.51,
        light_hue_drift=-5,
        dark_hue_drift=5,
    )


def _warning() -> PaletteControls:
    return _controls(
        base_hue=60,
        chroma_values=(0.02, 0.05, 0.08, 0.11, 0.13, 0.15, 0.16, 0.14, 0.12, 0.10, 0.08),
        lightness_values=(0.9671, 0.9117, 0.828, 0.75, 0.66, 0.58, 0.48, 0.41, 0.32, 0.27, 0.23),
        min_chroma=0.02,
        max_chroma=0.28,
        chroma_peak=0.5,
        light_hue_drift=20,
        dark_hue_drift=-20,
    )


_PRESETS: Mapping[int, Mapping[str, Callable[[], PaletteControls]]] = {
    1: {
        "blue": _blue,
        "purple": _purple,
        "error": _error,
        "success": _success,
        "warning": _warning,
    },
}


def get_preset(name: str, version: int = PRESET_VERSION) -> PaletteControls:
    """Return a fresh copy of preset ``name``. Raises KeyError when unknown."""
    try:
        table = _PRESETS[version]
    except KeyError:
        raise KeyError(f"Unknown preset version: {version!r}") from None
    key = name.strip().lower()
    if key not in table:
        raise KeyError(f"Unknown preset: {name!r} (available: {', '.join(sorted(table))})")
    return table[key]()


def list_presets(version: int = PRESET_VERSION) -> List[str]:
    return sorted(_PRESETS[version])


def default_controls() -> PaletteControls:
    return get_preset(DEFAULT_PRESET)


__all__ = [
    "PRESET_VERSION",
    "DEFAULT_PRESET",
    "DEFAULT_CONTRAST_TARGETS",
    "get_preset",
    "list_presets",
    "default_controls",
]
