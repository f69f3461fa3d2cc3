from __future__ import annotations

"""Palette control structure and generation settings.

:class:`PaletteControls` is the caller-owned input of a generation call.
It is immutable; edits produce a new copy via
:meth:`PaletteControls.with_changes`. Structural problems (inverted
chroma bounds, empty steps, unknown enum values) raise
:class:`oklch_ramp.errors.PaletteConfigError` at construction time.
"""

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .color_types import Gamut
from .curves import CurveType, Easing
from .errors import PaletteConfigError, enum_from_value
from .steps import MAX_STEP, MIN_STEP, DEFAULT_STEPS, parse_step, step_key

SCHEMA_VERSION = 2

MAX_HUE_DRIFT = 60.0


class ChromaMode(Enum):
    MANUAL = "manual"
    CURVE = "curve"

    @classmethod
    def from_value(cls, value: "ChromaMode | str") -> "ChromaMode":
        return enum_from_value(cls, value, "chroma mode")


class LightnessMode(Enum):
    CONTRAST = "contrast"
    RANGE = "range"

    @classmethod
    def from_value(cls, value: "LightnessMode | str") -> "LightnessMode":
        return enum_from_value(cls, value, "lightness mode")


class SelfReferencePolicy(Enum):
    """How a background referencing the palette's own step is resolved.

    FALLBACK:
        Generate once with the fallback background and accept the result.
    SINGLE_PASS:
        Generate once with the fallback, resolve the reference against
        that candidate, regenerate exactly once and stop.
    """

    FALLBACK = "fallback"
    SINGLE_PASS = "single-pass"

    @classmethod
    def from_value(cls, value: "SelfReferencePolicy | str") -> "SelfReferencePolicy":
        return enum_from_value(cls, value, "self-reference policy")


@dataclass(frozen=True)
class GamutSettings:
    gamut_mode: Gamut = Gamut.SRGB

    def __post_init__(self) -> None:
        object.__setattr__(self, "gamut_mode", Gamut.from_value(self.gamut_mode))


@dataclass(frozen=True)
class LightnessSettings:
    mode: LightnessMode = LightnessMode.CONTRAST

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", LightnessMode.from_value(self.mode))


@dataclass(frozen=True)
class PaletteControls:
    """Design parameters of one palette.

    Attributes
    ----------
    base_hue:
        Hue at the anchor step, in [0, 360).
    light_hue_drift, dark_hue_drift:
        Hue offsets reached at the lightest / darkest step, in [-60, 60].
    chroma_mode:
        MANUAL reads ``chroma_values``; CURVE derives chroma from
        ``min_chroma``, ``max_chroma``, ``chroma_peak`` and the curve.
    lightness_min, lightness_max:
        Linear sweep used in range lightness mode (lightest to darkest).
    contrast_targets:
        Per-step contrast ratios used in contrast lightness mode.
    lightness_values, lightness_overrides:
        Manual lightness per step; a value is used only when its override
        flag is set.
    background_color:
        Absolute color or a "palette-N" reference to a step of this palette.
    steps:
        Requested step positions (ascending, unique).
    token_names:
        Custom design-token names per step.
    """

    base_hue: float = 247.0
    lightness_min: float = 0.95
    lightness_max: float = 0.15
    chroma_mode: ChromaMode = ChromaMode.CURVE
    chroma_values: Dict[float, float] = field(default_factory=dict)
    min_chroma: float = 0.02
    max_chroma: float = 0.24
    chroma_peak: float = 0.55
    chroma_curve_type: CurveType = CurveType.GAUSSIAN
    chroma_easing: Easing = Easing.NONE
    light_hue_drift: float = 0.0
    dark_hue_drift: float = 0.0
    background_color: str = "#ffffff"
    contrast_targets: Dict[float, float] = field(default_factory=dict)
    lightness_values: Dict[float, float] = field(default_factory=dict)
    lightness_overrides: Dict[float, bool] = field(default_factory=dict)
    steps: Tuple[float, ...] = DEFAULT_STEPS
    token_names: Dict[float, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        set_ = object.__setattr__
        set_(self, "chroma_mode", ChromaMode.from_value(self.chroma_mode))
        set_(self, "chroma_curve_type", CurveType.from_value(self.chroma_curve_type))
        set_(self, "chroma_easing", Easing.from_value(self.chroma_easing))
        set_(self, "chroma_values", _step_map(self.chroma_values, float, "chromaValues"))
        set_(self, "contrast_targets", _step_map(self.contrast_targets, float, "contrastTargets"))
        set_(self, "lightness_values", _step_map(self.lightness_values, float, "lightnessValues"))
        set_(self, "lightness_overrides", _step_map(self.lightness_overrides, _as_bool, "lightnessOverrides"))
        set_(self, "token_names", _step_map(self.token_names, str, "tokenNames"))
        set_(self, "steps", _normalize_steps(self.steps))
        self._validate()

    def _validate(self) -> None:
        for name in (
            "base_hue",
            "lightness_min",
            "lightness_max",
            "min_chroma",
            "max_chroma",
            "chroma_peak",
            "light_hue_drift",
            "dark_hue_drift",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise PaletteConfigError(f"{name} must be a finite number, got {value!r}")

        if not 0.0 <= self.base_hue < 360.0:
            raise PaletteConfigError(f"base_hue must be in [0, 360), got {self.base_hue}")
        for name in ("light_hue_drift", "dark_hue_drift"):
            if abs(getattr(self, name)) > MAX_HUE_DRIFT:
                raise PaletteConfigError(f"{name} must be in [-60, 60], got {getattr(self, name)}")
        if self.min_chroma < 0.0:
            raise PaletteConfigError(f"min_chroma must be non-negative, got {self.min_chroma}")
        if self.min_chroma > self.max_chroma:
            raise PaletteConfigError(
                f"min_chroma ({self.min_chroma}) must not exceed max_chroma ({self.max_chroma})"
            )
        if not 0.0 <= self.chroma_peak <= 1.0:
            raise PaletteConfigError(f"chroma_peak must be in [0, 1], got {self.chroma_peak}")
        for name in ("lightness_min", "lightness_max"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise PaletteConfigError(f"{name} must be in [0, 1], got {getattr(self, name)}")
        for step, value in self.contrast_targets.items():
            if not (math.isfinite(value) and value >= 1.0):
                raise PaletteConfigError(f"contrast target for step {step_key(step)} must be finite and >= 1, got {value}")
        for step, value in self.chroma_values.items():
            if not (math.isfinite(value) and value >= 0.0):
                raise PaletteConfigError(f"chroma for step {step_key(step)} must be finite and non-negative, got {value}")
        for step, value in self.lightness_values.items():
            if not 0.0 <= value <= 1.0:
                raise PaletteConfigError(f"lightness for step {step_key(step)} must be in [0, 1], got {value}")
        if not isinstance(self.background_color, str):
            raise PaletteConfigError("background_color must be a string")

    # -- copies ----------------------------------------------------------

    def with_changes(self, **changes: Any) -> "PaletteControls":
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)

    def is_overridden(self, step: float) -> bool:
        return bool(self.lightness_overrides.get(float(step), False))

    # -- serialization ---------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible mapping (camelCase keys, string step keys)."""
        return {
            "schemaVersion": SCHEMA_VERSION,
            "baseHue": self.base_hue,
            "lightnessMin": self.lightness_min,
            "lightnessMax": self.lightness_max,
            "chromaMode": self.chroma_mode.value,
            "chromaValues": _dump_step_map(self.chroma_values),
            "minChroma": self.min_chroma,
            "maxChroma": self.max_chroma,
            "chromaPeak": self.chroma_peak,
            "chromaCurveType": self.chroma_curve_type.value,
            "chromaEasing": self.chroma_easing.value,
            "lightHueDrift": self.light_hue_drift,
            "darkHueDrift": self.dark_hue_drift,
            "backgroundColor": self.background_color,
            "contrastTargets": _dump_step_map(self.contrast_targets),
            "lightnessValues": _dump_step_map(self.lightness_values),
            "lightnessOverrides": _dump_step_map(self.lightness_overrides),
            "steps": list(self.steps),
            "tokenNames": _dump_step_map(self.token_names),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaletteControls":
        """Inverse of :meth:`to_dict` for current-schema data.

        Older or partial shapes must go through
        :func:`oklch_ramp.migration.load_controls` first.
        """
        version = data.get("schemaVersion")
        if version != SCHEMA_VERSION:
            raise PaletteConfigError(
                f"Unsupported schemaVersion {version!r}; migrate the data first"
            )
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            key = FIELD_KEYS[f.name]
            if key in data:
                kwargs[f.name] = data[key]
        if "steps" in kwargs:
            kwargs["steps"] = tuple(kwargs["steps"])
        return cls(**kwargs)


# Dataclass field -> serialized key.
FIELD_KEYS: Dict[str, str] = {
    "base_hue": "baseHue",
    "lightness_min": "lightnessMin",
    "lightness_max": "lightnessMax",
    "chroma_mode": "chromaMode",
    "chroma_values": "chromaValues",
    "min_chroma": "minChroma",
    "max_chroma": "maxChroma",
    "chroma_peak": "chromaPeak",
    "chroma_curve_type": "chromaCurveType",
    "chroma_easing": "chromaEasing",
    "light_hue_drift": "lightHueDrift",
    "dark_hue_drift": "darkHueDrift",
    "background_color": "backgroundColor",
    "contrast_targets": "contrastTargets",
    "lightness_values": "lightnessValues",
    "lightness_overrides": "lightnessOverrides",
    "steps": "steps",
    "token_names": "tokenNames",
}


def _step_map(raw: Optional[Mapping[Any, Any]], cast, label: str) -> Dict[float, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise PaletteConfigError(f"{label} must be a mapping, got {type(raw).__name__}")
    out: Dict[float, Any] = {}
    for key, value in raw.items():
        try:
            step = parse_step(key)
        except (TypeError, ValueError) as exc:
            raise PaletteConfigError(f"{label}: invalid step key {key!r}") from exc
        if value is None:
            continue
        try:
            out[step] = cast(value)
        except (TypeError, ValueError) as exc:
            raise PaletteConfigError(f"{label}: invalid value {value!r} for step {key!r}") from exc
    return out


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "on"}
    return bool(value)


def _dump_step_map(mapping: Mapping[float, Any]) -> Dict[str, Any]:
    return {step_key(step): value for step, value in sorted(mapping.items())}


def _normalize_steps(steps: Any) -> Tuple[float, ...]:
    if steps is None:
        raise PaletteConfigError("steps must not be empty")
    try:
        values = [parse_step(s) for s in steps]
    except (TypeError, ValueError) as exc:
        raise PaletteConfigError(f"steps contain a non-numeric position: {steps!r}") from exc
    if not values:
        raise PaletteConfigError("steps must not be empty")
    for value in values:
        if not MIN_STEP <= value <= MAX_STEP:
            raise PaletteConfigError(
                f"step {step_key(value)} is outside [{step_key(MIN_STEP)}, {step_key(MAX_STEP)}]"
            )
    return tuple(sorted(set(values)))


__all__ = [
    "SCHEMA_VERSION",
    "ChromaMode",
    "LightnessMode",
    "SelfReferencePolicy",
    "GamutSettings",
    "LightnessSettings",
    "PaletteControls",
    "FIELD_KEYS",
]
