from __future__ import annotations

"""Contrast-driven lightness solving.

Finds the OKLCH lightness whose gamut-clamped color reaches a target
WCAG contrast ratio against a background. The chroma and hue are
re-clamped at every candidate lightness, so the solver converges on the
contrast that will actually be displayed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from common import settings

from .color_types import DEFAULT_PRECISION, Gamut, Precision
from .engine import ColorEngine, ColorLike, default_engine
from .errors import PaletteConfigError
from .gamut import clamp_to_gamut

logger = logging.getLogger(__name__)

# Backgrounds brighter than this count as "light": foregrounds get darker
# to gain contrast.
LIGHT_BACKGROUND_LUMINANCE = 0.18

# Below this chroma the achromatic closed form is used as-is.
NEGLIGIBLE_CHROMA = 0.001


@dataclass(frozen=True)
class ContrastSolution:
    """Result of :func:`solve_lightness_for_contrast`.

    Attributes
    ----------
    lightness:
        Solved OKLCH lightness, rounded to the lightness precision.
    contrast:
        Contrast achieved by the best candidate (after gamut clamping).
    target:
        Requested contrast ratio.
    iterations:
        Number of search iterations performed (0 for the closed form).
    converged:
        True when ``|contrast - target| <= tolerance``.
    """

    lightness: float
    contrast: float
    target: float
    iterations: int
    converged: bool

    @property
    def delta(self) -> float:
        return abs(self.contrast - self.target)


def is_light_background(luminance: float) -> bool:
    return luminance > LIGHT_BACKGROUND_LUMINANCE


def target_luminance(target: float, background_luminance: float) -> float:
    """Foreground luminance that yields ``target`` against the background."""
    if is_light_background(background_luminance):
        y = (background_luminance + 0.05) / target - 0.05
    else:
        y = target * (background_luminance + 0.05) - 0.05
    return max(0.0, min(1.0, y))


def estimate_lightness_for_contrast(
    target: float,
    background: ColorLike,
    engine: Optional[ColorEngine] = None,
    precision: Precision = DEFAULT_PRECISION,
) -> float:
    """Closed-form lightness for an achromatic foreground.

    For neutral colors OKLab lightness is the cube root of relative
    luminance, so the WCAG relation can be inverted directly.
    """
    if engine is None:
        engine = default_engine()
    _check_target(target)
    y = target_luminance(target, engine.luminance(background))
    return precision.lightness.quantize(y ** (1.0 / 3.0))


def solve_lightness_for_contrast(
    target: float,
    background: ColorLike,
    chroma: float,
    hue: float,
    gamut: Gamut = Gamut.SRGB,
    engine: Optional[ColorEngine] = None,
    tolerance: Optional[float] = None,
    max_iterations: Optional[int] = None,
    precision: Precision = DEFAULT_PRECISION,
) -> ContrastSolution:
    """Find the lightness reaching ``target`` contrast against ``background``.

    Parameters
    ----------
    target:
        Contrast ratio to reach (>= 1).
    background:
        Resolved background as a color string or an OKLCH triple.
    chroma, hue:
        Requested chroma and hue of the foreground; both are clamped to
        ``gamut`` at every candidate lightness.
    gamut:
        Target gamut.
    tolerance, max_iterations:
        Convergence criteria; default to the values in ``common.settings``.

    Returns
    -------
    ContrastSolution
        Best candidate found. Never raises on non-convergence.
    """
    if engine is None:
        engine = default_engine()
    cfg = settings.get()
    if tolerance is None:
        tolerance = cfg.SOLVER_TOLERANCE
    if max_iterations is None:
        max_iterations = cfg.SOLVER_MAX_ITER
    _check_target(target)

    lightness = estimate_lightness_for_contrast(target, background, engine, precision)

    if chroma < NEGLIGIBLE_CHROMA:
        clamped = clamp_to_gamut((lightness, chroma, hue), gamut, engine)
        actual = engine.contrast_ratio(clamped.oklch, background)
        return ContrastSolution(
            lightness=lightness,
            contrast=actual,
            target=target,
            iterations=0,
            converged=abs(actual - target) <= tolerance,
        )

    light_background = is_light_background(engine.luminance(background))
    lower, upper = 0.0, 1.0
    best_lightness = lightness
    best_contrast = 1.0
    best_delta = float("inf")

    for iteration in range(1, max_iterations + 1):
        candidate = max(0.0, min(1.0, lightness))
        clamped = clamp_to_gamut((candidate, chroma, hue), gamut, engine)
        actual = engine.contrast_ratio(clamped.oklch, background)
        delta = abs(actual - target)
        if delta < best_delta:
            best_lightness, best_contrast, best_delta = candidate, actual, delta

        if delta <= tolerance:
            return ContrastSolution(
                lightness=precision.lightness.quantize(candidate),
                contrast=actual,
                target=target,
                iterations=iteration,
                converged=True,
            )

        # Too much contrast moves toward the background, too little away from it.
        move_lighter = (actual > target) == light_background
        if move_lighter:
            lower = lightness
            lightness = (lightness + upper) / 2.0
        else:
            upper = lightness
            lightness = (lower + lightness) / 2.0

    logger.debug(
        "contrast solver did not converge: target=%.3f best=%.3f after %d iterations",
        target,
        best_contrast,
        max_iterations,
    )
    return ContrastSolution(
        lightness=precision.lightness.quantize(best_lightness),
        contrast=best_contrast,
        target=target,
        iterations=max_iterations,
        converged=False,
    )


def _check_target(target: float) -> None:
    if not target >= 1.0:
        raise PaletteConfigError(f"Contrast target must be >= 1, got {target!r}")


__all__ = [
    "LIGHT_BACKGROUND_LUMINANCE",
    "NEGLIGIBLE_CHROMA",
    "ContrastSolution",
    "is_light_background",
    "target_luminance",
    "estimate_lightness_for_contrast",
    "solve_lightness_for_contrast",
]
