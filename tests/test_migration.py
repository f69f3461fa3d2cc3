from __future__ import annotations

"""Upgrading stored controls to the current schema."""

import pytest

from oklch_ramp.controls import SCHEMA_VERSION, PaletteControls
from oklch_ramp.curves import CurveType
from oklch_ramp.errors import PaletteConfigError
from oklch_ramp.migration import detect_schema_version, load_controls, migrate_controls
from oklch_ramp.presets import default_controls


def test_detect_schema_version():
    assert detect_schema_version({}) == 0
    assert detect_schema_version({"steps": [{"position": 1}]}) == 1
    assert detect_schema_version({"steps": [1, 2]}) == SCHEMA_VERSION
    assert detect_schema_version({"schemaVersion": 2}) == 2
    with pytest.raises(PaletteConfigError):
        detect_schema_version({"schemaVersion": "two"})


def test_v0_gets_default_steps_and_normalized_keys():
    data = migrate_controls(
        {"baseHue": 400, "chromaValues": {"1": 0.1, 2: 0.2}, "contrastTargets": {3.0: 2.0}}
    )
    assert data["schemaVersion"] == SCHEMA_VERSION
    assert data["steps"] == [float(s) for s in range(1, 12)]
    assert data["baseHue"] == pytest.approx(40.0)
    assert data["chromaValues"] == {"1": 0.1, "2": 0.2}
    assert data["contrastTargets"] == {"3": 2.0}


def test_v1_steps_become_positions_and_token_names():
    controls = load_controls(
        {
            "baseHue": 120,
            "steps": [
                {"position": 1, "tokenName": "lightest"},
                {"position": 6.5, "tokenName": "mid"},
                {"position": 11},
            ],
        }
    )
    assert controls.steps == (1.0, 6.5, 11.0)
    assert controls.token_names == {1.0: "lightest", 6.5: "mid"}


def test_legacy_values():
    controls = load_controls({"chromaCurveType": "vibrant", "lightnessMode": "auto", "chromaEasing": None})
    assert controls.chroma_curve_type is CurveType.FLAT
    assert controls.chroma_easing.value == "none"


def test_missing_fields_come_from_default_preset():
    assert load_controls({}) == default_controls()


def test_snake_case_aliases():
    controls = load_controls({"base_hue": 10, "light_hue_drift": 5, "lightHueDrift": 7})
    assert controls.base_hue == 10
    assert controls.light_hue_drift == 7


def test_unknown_fields_are_ignored():
    assert load_controls({"paletteName": "x"}) == default_controls()


def test_bad_record_keys_are_dropped():
    controls = load_controls({"chromaValues": {"abc": 0.3, "6": 0.2}})
    assert controls.chroma_values == {6.0: 0.2}


def test_current_schema_round_trip():
    c = default_controls().with_changes(base_hue=12.5, steps=(1, 6, 6.5))
    assert load_controls(c.to_dict()) == c


@pytest.mark.parametrize("raw", [None, [], "controls", 3])
def test_non_mapping_raises(raw):
    with pytest.raises(PaletteConfigError):
        migrate_controls(raw)


def test_future_schema_raises():
    with pytest.raises(PaletteConfigError):
        migrate_controls({"schemaVersion": SCHEMA_VERSION + 1})


def test_result_is_valid_controls():
    assert isinstance(load_controls({"steps": [1, 2, 3]}), PaletteControls)
