from __future__ import annotations

"""Upgrading stored palette controls to the current schema.

Stored controls come in three shapes:

- v0: no ``steps`` field; numeric or string record keys.
- v1: ``steps`` is a list of ``{"position": ..., "tokenName": ...}``.
- v2: the current shape written by :meth:`PaletteControls.to_dict`.

:func:`migrate_controls` turns any of them into a v2 mapping in a single
pass; :func:`load_controls` also builds the :class:`PaletteControls`.
"""

import logging
import math
from typing import Any, Dict, List, Mapping

from .controls import FIELD_KEYS, SCHEMA_VERSION, PaletteControls
from .errors import PaletteConfigError
from .presets import default_controls
from .steps import parse_step, step_key

logger = logging.getLogger(__name__)

_RECORD_KEYS = (
    "chromaValues",
    "contrastTargets",
    "lightnessValues",
    "lightnessOverrides",
    "tokenNames",
)

# Keys of earlier schemas that no longer carry meaning.
_DROPPED_KEYS = ("lightnessMode",)

_LEGACY_CURVES = {"vibrant": "flat"}

_SNAKE_TO_CAMEL: Dict[str, str] = dict(FIELD_KEYS, schema_version="schemaVersion")


def detect_schema_version(raw: Mapping[str, Any]) -> int:
    """Schema version of ``raw``, inferred from its shape when not stated."""
    version = raw.get("schemaVersion", raw.get("schema_version"))
    if version is not None:
        try:
            return int(version)
        except (TypeError, ValueError) as exc:
            raise PaletteConfigError(f"Invalid schemaVersion: {version!r}") from exc
    steps = raw.get("steps")
    if steps is None:
        return 0
    if isinstance(steps, (list, tuple)) and any(isinstance(s, Mapping) for s in steps):
        return 1
    return SCHEMA_VERSION


def migrate_controls(raw: Any) -> Dict[str, Any]:
    """Return a current-schema mapping for stored controls ``raw``.

    Missing fields are filled from the default preset. Raises
    :class:`PaletteConfigError` when ``raw`` is not a mapping or declares a
    newer schema than this library understands.
    """
    if not isinstance(raw, Mapping):
        raise PaletteConfigError(f"Palette controls must be a mapping, got {type(raw).__name__}")

    version = detect_schema_version(raw)
    if version > SCHEMA_VERSION:
        raise PaletteConfigError(
            f"schemaVersion {version} is newer than supported version {SCHEMA_VERSION}"
        )

    data = _camel_keys(raw)
    for key in _DROPPED_KEYS:
        if data.pop(key, None) is not None:
            logger.debug("dropping legacy field %s", key)

    result = default_controls().to_dict()
    for key in list(data):
        if key not in result:
            logger.debug("ignoring unknown field %s", key)
            del data[key]
    result.update(data)

    if version == 0 and "steps" not in data:
        result["steps"] = list(default_controls().steps)
    elif version == 1:
        steps, names = _split_v1_steps(data.get("steps", result["steps"]))
        result["steps"] = steps
        result["tokenNames"] = {**names, **_record(data.get("tokenNames"), "tokenNames")}

    for key in _RECORD_KEYS:
        result[key] = _record(result.get(key), key)

    curve = result.get("chromaCurveType")
    if isinstance(curve, str) and curve.lower() in _LEGACY_CURVES:
        result["chromaCurveType"] = _LEGACY_CURVES[curve.lower()]
    if result.get("chromaEasing") is None:
        result["chromaEasing"] = "none"

    hue = result.get("baseHue")
    if isinstance(hue, (int, float)) and not isinstance(hue, bool) and math.isfinite(hue):
        result["baseHue"] = float(hue) % 360.0

    result["schemaVersion"] = SCHEMA_VERSION
    return result


def load_controls(raw: Any) -> PaletteControls:
    """Migrate ``raw`` and build validated :class:`PaletteControls`."""
    return PaletteControls.from_dict(migrate_controls(raw))


def _camel_keys(raw: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in raw.items():
        camel = _SNAKE_TO_CAMEL.get(key, key)
        # camelCase wins when both spellings are present
        if camel != key and camel in raw:
            continue
        out[camel] = value
    out.pop("schemaVersion", None)
    return out


def _split_v1_steps(steps: Any) -> tuple[List[float], Dict[str, str]]:
    positions: List[float] = []
    names: Dict[str, str] = {}
    if not isinstance(steps, (list, tuple)):
        raise PaletteConfigError(f"steps must be a list, got {type(steps).__name__}")
    for entry in steps:
        if isinstance(entry, Mapping):
            if "position" not in entry:
                raise PaletteConfigError(f"step entry without position: {entry!r}")
            position = entry["position"]
            token = entry.get("tokenName", entry.get("token_name"))
        else:
            position, token = entry, None
        try:
            value = parse_step(position)
        except (TypeError, ValueError) as exc:
            raise PaletteConfigError(f"invalid step position: {position!r}") from exc
        positions.append(value)
        if token:
            names[step_key(value)] = str(token)
    return positions, names


def _record(record: Any, label: str) -> Dict[str, Any]:
    """Normalize numeric-or-string step keys; unparsable keys are dropped."""
    if not record:
        return {}
    if not isinstance(record, Mapping):
        raise PaletteConfigError(f"{label} must be a mapping, got {type(record).__name__}")
    out: Dict[str, Any] = {}
    for key, value in record.items():
        try:
            out[step_key(parse_step(key))] = value
        except (TypeError, ValueError):
            logger.warning("%s: dropping entry with invalid step key %r", label, key)
    return out


__all__ = ["detect_schema_version", "migrate_controls", "load_controls"]
