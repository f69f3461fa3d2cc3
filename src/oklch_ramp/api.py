from __future__ import annotations

"""High-level public API for generating palettes.

This module provides :func:`generate_palette`, which resolves the
background, generates the core steps (curve chroma, hue drift,
contrast-solved or ranged lightness, gamut clamping), interpolates the
fractional steps and assembles the ordered :class:`Palette`.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from common import settings

from .background import BackgroundResolution, is_self_reference, resolve_background
from .color_types import DEFAULT_PRECISION, Gamut, PaletteColor, Precision, round_contrast
from .contrast import solve_lightness_for_contrast
from .controls import (
    ChromaMode,
    GamutSettings,
    LightnessMode,
    LightnessSettings,
    PaletteControls,
    SelfReferencePolicy,
)
from .curves import curve_chroma
from .diagnostics import Diagnostic, DiagnosticKind
from .engine import ColorEngine, DefaultColorEngine, default_engine
from .errors import PaletteConfigError
from .hue import resolve_hue
from .interpolate import apply_lightness_override, interpolate_colors, interpolation_ratio
from .palette import Palette
from .steps import BLACK_STEP, WHITE_STEP, is_core_color_step, normalized_position, step_key, token_name_for_step
from .swatch import make_palette_color, quantize_in_gamut

logger = logging.getLogger(__name__)

DEFAULT_CONTRAST_TARGET = 4.5
DEFAULT_MANUAL_CHROMA = 0.1

# Placeholder for a fractional step whose neighbours were not generated.
PLACEHOLDER_LIGHTNESS = 0.5
PLACEHOLDER_CHROMA = 0.1
PLACEHOLDER_HEX = "#808080"

GamutLike = Union[GamutSettings, Gamut, str, None]
LightnessLike = Union[LightnessSettings, LightnessMode, str, None]


def generate_palette(
    controls: PaletteControls,
    gamut_settings: GamutLike = None,
    lightness_settings: LightnessLike = None,
    existing_palette: Optional[Iterable[PaletteColor]] = None,
    *,
    engine: Optional[ColorEngine] = None,
    precision: Precision = DEFAULT_PRECISION,
    self_reference_policy: Union[SelfReferencePolicy, str, None] = None,
    fallback_background: Optional[str] = None,
) -> Palette:
    """Generate the ordered palette described by ``controls``.

    Parameters
    ----------
    controls:
        Palette design parameters.
    gamut_settings:
        Target gamut (sRGB by default).
    lightness_settings:
        CONTRAST (default) solves each step's lightness for its contrast
        target; RANGE sweeps linearly from ``lightness_min`` to
        ``lightness_max``.
    existing_palette:
        Previously generated colors used to resolve a "palette-N"
        background. When the background references the palette itself and
        this is None, ``self_reference_policy`` decides how the cycle is
        broken.
    engine:
        Optional ColorEngine; a DefaultColorEngine formatting at
        ``precision`` is used if None.
    precision:
        Rounding steps and display decimals of the emitted swatches.
    self_reference_policy, fallback_background:
        Override the corresponding values in ``common.settings``.

    Returns
    -------
    Palette
        Swatches in ascending step order plus diagnostics.

    Raises
    ------
    PaletteConfigError
        If ``controls`` or the settings are structurally invalid. Bad
        background data never raises.
    """
    if not isinstance(controls, PaletteControls):
        raise PaletteConfigError(
            f"controls must be PaletteControls, got {type(controls).__name__}"
        )
    if engine is None:
        engine = default_engine() if precision == DEFAULT_PRECISION else DefaultColorEngine(precision)
    cfg = settings.get()
    gamut = coerce_gamut(gamut_settings)
    mode = coerce_lightness_mode(lightness_settings)
    policy = SelfReferencePolicy.from_value(
        self_reference_policy if self_reference_policy is not None else cfg.SELF_REFERENCE_POLICY
    )
    fallback = fallback_background if fallback_background is not None else cfg.FALLBACK_BACKGROUND

    background_spec = controls.background_color
    existing = list(existing_palette) if existing_palette is not None else None

    if is_self_reference(background_spec) and not existing:
        message = (
            f"Palette reference {background_spec!r} requires an existing palette. "
            f"Using fallback: {fallback}"
        )
        logger.warning(message)
        self_ref = Diagnostic(DiagnosticKind.SELF_REFERENCE, message)
        candidate = _generate(
            controls, BackgroundResolution(fallback), gamut, mode, engine, precision
        )
        if policy == SelfReferencePolicy.FALLBACK:
            return _with_diagnostics(candidate, [self_ref])

        # SINGLE_PASS: resolve against the candidate, regenerate once, stop.
        resolution = resolve_background(background_spec, candidate, fallback, engine)
        final = _generate(controls, resolution, gamut, mode, engine, precision)
        return _with_diagnostics(final, [self_ref])

    resolution = resolve_background(background_spec, existing, fallback, engine)
    return _generate(controls, resolution, gamut, mode, engine, precision)


def _generate(
    controls: PaletteControls,
    resolution: BackgroundResolution,
    gamut: Gamut,
    mode: LightnessMode,
    engine: ColorEngine,
    precision: Precision,
) -> Palette:
    """ResolveBackground -> GenerateCoreSteps -> InterpolateCustomSteps -> Assemble."""
    diagnostics: List[Diagnostic] = []
    if resolution.diagnostic is not None:
        diagnostics.append(resolution.diagnostic)
    background = resolution.color

    core: Dict[float, PaletteColor] = {}
    for step in controls.steps:
        if step == WHITE_STEP:
            core[step] = _endpoint(step, 1.0, "#ffffff", controls, background, engine)
        elif step == BLACK_STEP:
            core[step] = _endpoint(step, 0.0, "#000000", controls, background, engine)
        elif is_core_color_step(step):
            try:
                core[step] = _core_step(
                    step, controls, gamut, mode, background, engine, precision, diagnostics
                )
            except ArithmeticError as exc:
                message = f"Step {step_key(step)} failed ({exc}); using placeholder color"
                logger.warning(message)
                diagnostics.append(Diagnostic(DiagnosticKind.STEP_FAILED, message, step=step))
                core[step] = _placeholder(step, controls, engine)

    colors: List[PaletteColor] = []
    for step in controls.steps:
        if step in core:
            colors.append(core[step])
            continue
        colors.append(
            _interpolated_step(step, core, controls, gamut, background, engine, precision, diagnostics)
        )

    logger.debug("generated %d swatches against %s in %s", len(colors), background, gamut.value)
    return Palette(
        colors=tuple(colors),
        background=background,
        gamut=gamut,
        lightness_mode=mode,
        diagnostics=tuple(diagnostics),
    )


def step_chroma(step: float, controls: PaletteControls) -> float:
    """Requested (pre-clamp) chroma of a core step."""
    if controls.chroma_mode == ChromaMode.MANUAL:
        return controls.chroma_values.get(float(step), DEFAULT_MANUAL_CHROMA)
    return curve_chroma(
        normalized_position(step),
        controls.min_chroma,
        controls.max_chroma,
        controls.chroma_peak,
        controls.chroma_curve_type,
        controls.chroma_easing,
    )


def step_hue(step: float, controls: PaletteControls) -> float:
    return resolve_hue(step, controls.base_hue, controls.light_hue_drift, controls.dark_hue_drift)


def _core_step(
    step: float,
    controls: PaletteControls,
    gamut: Gamut,
    mode: LightnessMode,
    background: str,
    engine: ColorEngine,
    precision: Precision,
    diagnostics: List[Diagnostic],
) -> PaletteColor:
    chroma = step_chroma(step, controls)
    hue = step_hue(step, controls)

    lightness: Optional[float] = None
    if mode == LightnessMode.CONTRAST:
        if controls.is_overridden(step):
            lightness = controls.lightness_values.get(float(step))
            if lightness is None:
                diagnostics.append(_missing_lightness(step))
        if lightness is None:
            target = controls.contrast_targets.get(float(step), DEFAULT_CONTRAST_TARGET)
            solution = solve_lightness_for_contrast(
                target, background, chroma, hue, gamut, engine, precision=precision
            )
            lightness = solution.lightness
            if not solution.converged:
                message = (
                    f"Step {step_key(step)}: contrast target {target} not reached; "
                    f"closest achievable is {solution.contrast:.2f}"
                )
                logger.debug(message)
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.NON_CONVERGENCE,
                        message,
                        step=step,
                        target=target,
                        achieved=round_contrast(solution.contrast),
                    )
                )
    else:
        t = normalized_position(step)
        lightness = controls.lightness_min + t * (controls.lightness_max - controls.lightness_min)

    lch = quantize_in_gamut((lightness, chroma, hue), gamut, engine, precision)
    return make_palette_color(
        step, token_name_for_step(step, controls.token_names), lch, engine, background=background
    )


def _interpolated_step(
    step: float,
    core: Dict[float, PaletteColor],
    controls: PaletteControls,
    gamut: Gamut,
    background: str,
    engine: ColorEngine,
    precision: Precision,
    diagnostics: List[Diagnostic],
) -> PaletteColor:
    lower_step = float(int(step))
    upper_step = lower_step + 1.0
    lower = core.get(lower_step)
    upper = core.get(upper_step)
    name = token_name_for_step(step, controls.token_names)

    if lower is None or upper is None:
        message = (
            f"Cannot interpolate step {step_key(step)}: missing adjacent core steps "
            f"{step_key(lower_step)} or {step_key(upper_step)}"
        )
        logger.warning(message)
        diagnostics.append(Diagnostic(DiagnosticKind.MISSING_NEIGHBOR, message, step=step))
        return _placeholder(step, controls, engine)

    ratio = interpolation_ratio(step, lower_step, upper_step)
    color = interpolate_colors(lower, upper, ratio, step, name, gamut, engine, precision)

    if controls.is_overridden(step):
        override = controls.lightness_values.get(float(step))
        if override is None:
            diagnostics.append(_missing_lightness(step))
        else:
            color = apply_lightness_override(color, override, background, gamut, engine, precision)
    return color


def _endpoint(
    step: float,
    lightness: float,
    css: str,
    controls: PaletteControls,
    background: str,
    engine: ColorEngine,
) -> PaletteColor:
    # The base hue keeps interpolation toward white/black on the palette's hue.
    lch = (lightness, 0.0, controls.base_hue)
    return PaletteColor(
        step=float(step),
        token_name=token_name_for_step(step, controls.token_names),
        lightness=lightness,
        chroma=0.0,
        hue=controls.base_hue,
        oklch=engine.to_oklch_string(lch),
        css=css,
        contrast=round_contrast(engine.contrast_ratio(css, background)),
    )


def _placeholder(step: float, controls: PaletteControls, engine: ColorEngine) -> PaletteColor:
    return PaletteColor(
        step=float(step),
        token_name=token_name_for_step(step, controls.token_names),
        lightness=PLACEHOLDER_LIGHTNESS,
        chroma=PLACEHOLDER_CHROMA,
        hue=controls.base_hue,
        oklch=engine.to_oklch_string((PLACEHOLDER_LIGHTNESS, PLACEHOLDER_CHROMA, controls.base_hue)),
        css=PLACEHOLDER_HEX,
        contrast=1.0,
    )


def _missing_lightness(step: float) -> Diagnostic:
    message = (
        f"Step {step_key(step)} is marked as manually overridden but has no lightness value; "
        "using the calculated lightness"
    )
    logger.warning(message)
    return Diagnostic(DiagnosticKind.MISSING_LIGHTNESS_VALUE, message, step=step)


def _with_diagnostics(palette: Palette, leading: List[Diagnostic]) -> Palette:
    return Palette(
        colors=palette.colors,
        background=palette.background,
        gamut=palette.gamut,
        lightness_mode=palette.lightness_mode,
        diagnostics=tuple(leading) + palette.diagnostics,
    )


def coerce_gamut(value: GamutLike) -> Gamut:
    if value is None:
        return Gamut.SRGB
    if isinstance(value, GamutSettings):
        return value.gamut_mode
    return Gamut.from_value(value)


def coerce_lightness_mode(value: LightnessLike) -> LightnessMode:
    if value is None:
        return LightnessMode.CONTRAST
    if isinstance(value, LightnessSettings):
        return value.mode
    return LightnessMode.from_value(value)


__all__ = [
    "DEFAULT_CONTRAST_TARGET",
    "DEFAULT_MANUAL_CHROMA",
    "coerce_gamut",
    "coerce_lightness_mode",
    "generate_palette",
    "step_chroma",
    "step_hue",
]
