from __future__ import annotations

"""Typed diagnostics returned alongside generated values.

Data errors never abort generation. Each recovery produces a
:class:`Diagnostic` so callers can decide whether to surface, log or
ignore it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DiagnosticKind(Enum):
    """Failure modes that are recovered locally with a fallback value."""

    INVALID_COLOR = "invalid_color"
    MALFORMED_REFERENCE = "malformed_reference"
    STEP_OUT_OF_RANGE = "step_out_of_range"
    MISSING_PALETTE = "missing_palette"
    STEP_NOT_FOUND = "step_not_found"
    INVALID_RESOLVED_COLOR = "invalid_resolved_color"
    SELF_REFERENCE = "self_reference"
    NON_CONVERGENCE = "non_convergence"
    MISSING_LIGHTNESS_VALUE = "missing_lightness_value"
    MISSING_NEIGHBOR = "missing_neighbor"
    STEP_FAILED = "step_failed"


@dataclass(frozen=True)
class Diagnostic:
    """A single recovered problem.

    Attributes
    ----------
    kind:
        Failure mode.
    message:
        Human-readable description including the fallback that was used.
    step:
        Step the problem applies to, or None for palette-wide problems.
    target, achieved:
        Target and achieved contrast for NON_CONVERGENCE.
    """

    kind: DiagnosticKind
    message: str
    step: Optional[float] = None
    target: Optional[float] = None
    achieved: Optional[float] = None

    @property
    def delta(self) -> Optional[float]:
        if self.target is None or self.achieved is None:
            return None
        return abs(self.achieved - self.target)


__all__ = ["DiagnosticKind", "Diagnostic"]
