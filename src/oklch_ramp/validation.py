from __future__ import annotations

"""Gamut detection, contrast accuracy badges and WCAG analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .api import coerce_gamut, coerce_lightness_mode
from .color_types import Gamut, PaletteColor, round_contrast
from .controls import GamutSettings, LightnessMode, LightnessSettings, PaletteControls
from .engine import ColorEngine, default_engine
from .errors import PaletteConfigError

# Accuracy badge thresholds on |achieved - target|.
GOOD_DELTA = 0.3
OK_DELTA = 0.8

# WCAG 2.1 minimum ratios.
AA_NORMAL = 4.5
AAA_NORMAL = 7.0
AA_LARGE = 3.0
AAA_LARGE = 4.5


class DetectedGamut(Enum):
    """Smallest gamut containing a color, ordered sRGB < P3 < Rec2020 < Wide."""

    SRGB = "sRGB"
    P3 = "P3"
    REC2020 = "Rec2020"
    WIDE = "Wide"

    @property
    def level(self) -> int:
        return _GAMUT_ORDER.index(self)

    @classmethod
    def from_value(cls, value: Union["DetectedGamut", Gamut, str]) -> "DetectedGamut":
        if isinstance(value, cls):
            return value
        if isinstance(value, Gamut):
            return cls(value.value)
        for g in cls:
            if str(value).lower() == g.value.lower():
                return g
        raise PaletteConfigError(f"Unknown gamut: {value!r}")


_GAMUT_ORDER = [DetectedGamut.SRGB, DetectedGamut.P3, DetectedGamut.REC2020, DetectedGamut.WIDE]


class ContrastAccuracy(Enum):
    GOOD = "GOOD"
    OK = "OK"
    POOR = "POOR"


class ComplianceLevel(Enum):
    """Highest WCAG level a ratio meets for the chosen text size."""

    AAA = "AAA"
    AA = "AA"
    FAIL = "FAIL"


class TextSize(Enum):
    NORMAL = "normal"
    LARGE = "large"

    @classmethod
    def from_value(cls, value: Union["TextSize", str]) -> "TextSize":
        if isinstance(value, cls):
            return value
        for size in cls:
            if size.value == str(value).lower():
                return size
        raise PaletteConfigError(f"Unknown text size: {value!r}")


@dataclass(frozen=True)
class GamutValidation:
    within_gamut: bool
    detected_gamut: Optional[DetectedGamut]
    requires_gamut: Optional[DetectedGamut]


@dataclass(frozen=True)
class ColorValidation:
    """Per-swatch validation summary.

    ``contrast_accuracy`` and ``contrast_delta`` are None outside contrast
    mode or when the step has no contrast target.
    """

    in_gamut: bool
    gamut: Optional[DetectedGamut]
    gamut_validation: GamutValidation
    contrast_accuracy: Optional[ContrastAccuracy] = None
    contrast_delta: Optional[float] = None
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ContrastResult:
    ratio: float
    wcag_aa: bool
    wcag_aaa: bool
    wcag_aa_large: bool
    wcag_aaa_large: bool


def detect_color_gamut(
    color: PaletteColor, engine: Optional[ColorEngine] = None
) -> Optional[DetectedGamut]:
    """Smallest gamut beyond sRGB that holds ``color``; None when sRGB suffices."""
    if engine is None:
        engine = default_engine()
    lch = color.to_oklch()
    if engine.in_gamut(lch, Gamut.SRGB):
        return None
    if engine.in_gamut(lch, Gamut.P3):
        return DetectedGamut.P3
    if engine.in_gamut(lch, Gamut.REC2020):
        return DetectedGamut.REC2020
    return DetectedGamut.WIDE


def validate_color_gamut(
    color: PaletteColor,
    target: Union[DetectedGamut, Gamut, str],
    engine: Optional[ColorEngine] = None,
) -> GamutValidation:
    target_gamut = DetectedGamut.from_value(target)
    detected = detect_color_gamut(color, engine)
    detected_level = detected.level if detected is not None else 0
    within = detected_level <= target_gamut.level
    return GamutValidation(
        within_gamut=within,
        detected_gamut=detected,
        requires_gamut=None if within else detected,
    )


def contrast_accuracy(delta: float) -> ContrastAccuracy:
    delta = abs(delta)
    if delta < GOOD_DELTA:
        return ContrastAccuracy.GOOD
    if delta < OK_DELTA:
        return ContrastAccuracy.OK
    return ContrastAccuracy.POOR


def validate_color(
    color: PaletteColor,
    controls: PaletteControls,
    gamut_settings: Union[GamutSettings, Gamut, str, None] = None,
    lightness_settings: Union[LightnessSettings, LightnessMode, str, None] = None,
    engine: Optional[ColorEngine] = None,
) -> ColorValidation:
    """Check ``color`` against its target gamut and contrast target."""
    gamut = coerce_gamut(gamut_settings)
    mode = coerce_lightness_mode(lightness_settings)
    gamut_validation = validate_color_gamut(color, gamut, engine)

    warnings: List[str] = []
    accuracy: Optional[ContrastAccuracy] = None
    delta: Optional[float] = None
    if mode == LightnessMode.CONTRAST:
        target = controls.contrast_targets.get(color.step)
        if target:
            delta = abs(color.contrast - target)
            accuracy = contrast_accuracy(delta)
            if accuracy == ContrastAccuracy.POOR:
                warnings.append(
                    f"Contrast ratio {color.contrast:.1f} is far from target {target}"
                )
    return ColorValidation(
        in_gamut=gamut_validation.within_gamut,
        gamut=gamut_validation.detected_gamut,
        gamut_validation=gamut_validation,
        contrast_accuracy=accuracy,
        contrast_delta=delta,
        warnings=warnings,
    )


def analyze_contrast(
    color: PaletteColor,
    background: str,
    text_size: Union[TextSize, str] = TextSize.NORMAL,
    engine: Optional[ColorEngine] = None,
) -> ContrastResult:
    """WCAG 2.1 AA/AAA compliance of ``color`` against ``background``."""
    if engine is None:
        engine = default_engine()
    size = TextSize.from_value(text_size)
    ratio = engine.contrast_ratio(color.to_oklch(), background)
    normal_aa, normal_aaa = ratio >= AA_NORMAL, ratio >= AAA_NORMAL
    large_aa, large_aaa = ratio >= AA_LARGE, ratio >= AAA_LARGE
    large = size == TextSize.LARGE
    return ContrastResult(
        ratio=round_contrast(ratio),
        wcag_aa=large_aa if large else normal_aa,
        wcag_aaa=large_aaa if large else normal_aaa,
        wcag_aa_large=large_aa,
        wcag_aaa_large=large_aaa,
    )


def compliance_level(result: ContrastResult) -> ComplianceLevel:
    if result.wcag_aaa:
        return ComplianceLevel.AAA
    if result.wcag_aa:
        return ComplianceLevel.AA
    return ComplianceLevel.FAIL


def contrast_label(result: ContrastResult, show_compliance: bool = True) -> str:
    """Badge text such as "AA 4.56", or just the ratio."""
    if show_compliance:
        return f"{compliance_level(result).value} {result.ratio}"
    return f"{result.ratio}"


def text_color_for_background(color: PaletteColor, engine: Optional[ColorEngine] = None) -> str:
    """Return "#ffffff" or "#000000", whichever reads better on ``color``."""
    if engine is None:
        engine = default_engine()
    lch = color.to_oklch()
    on_white = engine.contrast_ratio(lch, "#ffffff")
    on_black = engine.contrast_ratio(lch, "#000000")
    return "#ffffff" if on_white > on_black else "#000000"


__all__ = [
    "DetectedGamut",
    "ContrastAccuracy",
    "ComplianceLevel",
    "TextSize",
    "GamutValidation",
    "ColorValidation",
    "ContrastResult",
    "detect_color_gamut",
    "validate_color_gamut",
    "contrast_accuracy",
    "validate_color",
    "analyze_contrast",
    "compliance_level",
    "contrast_label",
    "text_color_for_background",
]
