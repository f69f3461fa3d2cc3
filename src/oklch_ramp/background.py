from __future__ import annotations

"""Background color resolution.

A background is either an absolute CSS color or a relative reference
``"palette-N"`` to core step N of a palette. Every failure resolves to a
fallback color and carries a distinct :class:`Diagnostic`; nothing here
raises for bad data.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from common import settings

from .color_types import PaletteColor
from .diagnostics import Diagnostic, DiagnosticKind
from .engine import ColorEngine, default_engine
from .steps import FIRST_CORE_STEP, LAST_CORE_STEP

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "palette-"
_REFERENCE_RE = re.compile(r"^palette-(\d+)$")


@dataclass(frozen=True)
class BackgroundResolution:
    """Resolved absolute background plus the diagnostic of any fallback."""

    color: str
    diagnostic: Optional[Diagnostic] = None

    @property
    def used_fallback(self) -> bool:
        return self.diagnostic is not None


def is_palette_reference(spec: str) -> bool:
    """True for anything using the relative "palette-" prefix, valid or not."""
    return isinstance(spec, str) and spec.startswith(REFERENCE_PREFIX)


def reference_step(spec: str) -> Optional[int]:
    """Step number of a well-formed "palette-N" reference, else None."""
    m = _REFERENCE_RE.match(spec) if isinstance(spec, str) else None
    return int(m.group(1)) if m else None


def is_self_reference(spec: str) -> bool:
    """True for a well-formed "palette-N" whose N is a core step."""
    step = reference_step(spec)
    return step is not None and FIRST_CORE_STEP <= step <= LAST_CORE_STEP


def palette_reference(step: int) -> str:
    return f"{REFERENCE_PREFIX}{step}"


def resolve_background(
    spec: str,
    palette: Optional[Iterable[PaletteColor]] = None,
    fallback: Optional[str] = None,
    engine: Optional[ColorEngine] = None,
) -> BackgroundResolution:
    """Resolve ``spec`` to an absolute color.

    Parameters
    ----------
    spec:
        Absolute color or "palette-N".
    palette:
        Already-generated colors used to resolve relative references.
    fallback:
        Color used on any failure; defaults to ``FALLBACK_BACKGROUND``
        from ``common.settings``.
    """
    if engine is None:
        engine = default_engine()
    if fallback is None:
        fallback = settings.get().FALLBACK_BACKGROUND

    def _fail(kind: DiagnosticKind, message: str, step: Optional[int] = None) -> BackgroundResolution:
        text = f"{message}. Using fallback: {fallback}"
        logger.warning(text)
        return BackgroundResolution(fallback, Diagnostic(kind, text, step=step))

    if not is_palette_reference(spec):
        if not isinstance(spec, str) or engine.parse(spec) is None:
            return _fail(DiagnosticKind.INVALID_COLOR, f"Invalid color format: {spec!r}")
        return BackgroundResolution(spec)

    step = reference_step(spec)
    if step is None:
        return _fail(DiagnosticKind.MALFORMED_REFERENCE, f"Invalid palette reference format: {spec!r}")
    if not FIRST_CORE_STEP <= step <= LAST_CORE_STEP:
        return _fail(
            DiagnosticKind.STEP_OUT_OF_RANGE,
            f"Invalid step number {step} in {spec!r}; must be {FIRST_CORE_STEP}-{LAST_CORE_STEP}",
            step,
        )

    colors = list(palette) if palette is not None else []
    if not colors:
        return _fail(DiagnosticKind.MISSING_PALETTE, f"No palette available to resolve {spec!r}", step)

    target = next((c for c in colors if c.step == step), None)
    if target is None:
        return _fail(DiagnosticKind.STEP_NOT_FOUND, f"Step {step} not found in palette for {spec!r}", step)

    if engine.parse(target.css) is None:
        return _fail(
            DiagnosticKind.INVALID_RESOLVED_COLOR,
            f"Resolved color {target.css!r} for {spec!r} is invalid",
            step,
        )
    return BackgroundResolution(target.css)


__all__ = [
    "REFERENCE_PREFIX",
    "BackgroundResolution",
    "is_palette_reference",
    "reference_step",
    "is_self_reference",
    "palette_reference",
    "resolve_background",
]
