from __future__ import annotations

"""Step positions, step keys and design-token names.

Core color steps are the integers 1..11 with step 6 as the anchor
(middle) step. Step 0 is the pure-white sentinel and step 12 the
pure-black sentinel. Fractional positions are interpolated swatches.
"""

import math
from typing import Mapping, Optional, Tuple

WHITE_STEP = 0.0
BLACK_STEP = 12.0
FIRST_CORE_STEP = 1
LAST_CORE_STEP = 11
ANCHOR_STEP = 6

MIN_STEP = WHITE_STEP
MAX_STEP = BLACK_STEP

DEFAULT_STEPS: Tuple[float, ...] = tuple(
    float(s) for s in range(FIRST_CORE_STEP, LAST_CORE_STEP + 1)
)

STEP_TOKEN_NAMES: Mapping[int, str] = {
    0: "100",
    1: "95",
    2: "90",
    3: "80",
    4: "70",
    5: "60",
    6: "50",
    7: "40",
    8: "30",
    9: "20",
    10: "15",
    11: "10",
    12: "0",
}


def step_key(step: float) -> str:
    """Serialized key of a step: "6" for integral steps, "6.5" otherwise."""
    value = float(step)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def parse_step(key: object) -> float:
    """Parse a numeric-or-string step key. Raises ValueError when not numeric."""
    if isinstance(key, bool):
        raise ValueError(f"invalid step key: {key!r}")
    value = float(key)  # type: ignore[arg-type]
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"invalid step key: {key!r}")
    return value


def is_core_color_step(step: float) -> bool:
    """True for integral steps 1..11 (not the white/black endpoints)."""
    return float(step).is_integer() and FIRST_CORE_STEP <= step <= LAST_CORE_STEP


def normalized_position(step: float) -> float:
    """Map core step 1..11 onto 0..1."""
    return (float(step) - FIRST_CORE_STEP) / (LAST_CORE_STEP - FIRST_CORE_STEP)


def token_name_for_step(
    step: float, custom_names: Optional[Mapping[float, str]] = None
) -> str:
    """Display token for a step.

    Custom names win; core steps use the standard table; fractional
    steps are named after their neighbours ("50-40" for 6.5).
    """
    if custom_names:
        name = custom_names.get(float(step))
        if name:
            return name
    value = float(step)
    if value.is_integer() and int(value) in STEP_TOKEN_NAMES:
        return STEP_TOKEN_NAMES[int(value)]
    floor = math.floor(value)
    ceil = math.ceil(value)
    if floor == ceil:
        return f"step-{step_key(value)}"
    floor_token = STEP_TOKEN_NAMES.get(floor, str(floor))
    ceil_token = STEP_TOKEN_NAMES.get(ceil, str(ceil))
    return f"{floor_token}-{ceil_token}"


__all__ = [
    "WHITE_STEP",
    "BLACK_STEP",
    "FIRST_CORE_STEP",
    "LAST_CORE_STEP",
    "ANCHOR_STEP",
    "MIN_STEP",
    "MAX_STEP",
    "DEFAULT_STEPS",
    "STEP_TOKEN_NAMES",
    "step_key",
    "parse_step",
    "is_core_color_step",
    "normalized_position",
    "token_name_for_step",
]
