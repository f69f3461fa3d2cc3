from __future__ import annotations

"""End-to-end palette generation."""

import pytest

from oklch_ramp import (
    DiagnosticKind,
    Gamut,
    GamutSettings,
    LightnessMode,
    LightnessSettings,
    PaletteConfigError,
    SelfReferencePolicy,
    generate_palette,
    get_preset,
    list_presets,
)
from oklch_ramp.api import step_chroma
from oklch_ramp.color_types import ChannelPrecision, Precision


def test_default_palette_shape(blue_palette):
    assert len(blue_palette) == 11
    assert blue_palette.steps == tuple(float(s) for s in range(1, 12))
    assert [c.token_name for c in blue_palette] == [
        "95", "90", "80", "70", "60", "50", "40", "30", "20", "15", "10",
    ]
    assert blue_palette.background == "#ffffff"
    assert blue_palette.gamut is Gamut.SRGB
    assert blue_palette.lightness_mode is LightnessMode.CONTRAST


def test_anchor_step_meets_target(blue_palette):
    step6 = blue_palette.by_step(6)
    assert 4.45 <= step6.contrast <= 4.55
    assert step6.chroma <= 0.24


def test_contrast_targets_are_met_on_white(blue, blue_palette):
    for color in blue_palette:
        target = blue.contrast_targets[color.step]
        assert color.contrast == pytest.approx(target, abs=0.05), color.step


def test_lightness_decreases_on_white(blue_palette):
    values = [c.lightness for c in blue_palette]
    assert values == sorted(values, reverse=True)


@pytest.mark.parametrize("name", list_presets())
@pytest.mark.parametrize("gamut", [Gamut.SRGB, Gamut.P3, Gamut.REC2020])
def test_every_swatch_is_inside_target_gamut(engine, name, gamut):
    palette = generate_palette(get_preset(name), GamutSettings(gamut))
    for color in palette:
        assert engine.in_gamut(color.to_oklch(), gamut), (name, color)
        assert color.css.startswith("#") and len(color.css) == 7


def test_generation_is_deterministic(blue):
    assert generate_palette(blue) == generate_palette(blue)


def test_regenerating_with_existing_palette_is_idempotent(blue, blue_palette):
    again = generate_palette(blue, existing_palette=blue_palette)
    assert again == blue_palette


def test_range_mode_is_linear_and_monotone(blue):
    palette = generate_palette(blue, lightness_settings=LightnessSettings("range"))
    values = [c.lightness for c in palette]
    assert values[0] == pytest.approx(0.95)
    assert values[-1] == pytest.approx(0.15)
    assert values[5] == pytest.approx(0.55)
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_range_mode_ignores_overrides(blue):
    controls = blue.with_changes(lightness_overrides={6: True}, lightness_values={6: 0.3})
    palette = generate_palette(controls, lightness_settings="range")
    assert palette.by_step(6).lightness == pytest.approx(0.55)


def test_hue_drift_applies_per_step():
    controls = get_preset("blue").with_changes(base_hue=350.0, light_hue_drift=30.0, dark_hue_drift=0.0)
    palette = generate_palette(controls, lightness_settings="range")
    assert palette.by_step(1).hue == pytest.approx(20.0, abs=0.05)
    assert palette.by_step(6).hue == pytest.approx(350.0, abs=0.05)


def test_manual_chroma_mode():
    controls = get_preset("success")
    assert step_chroma(6, controls) == pytest.approx(0.189)
    assert step_chroma(6, controls.with_changes(chroma_values={})) == pytest.approx(0.1)


def test_missing_contrast_target_defaults_to_aa(blue):
    controls = blue.with_changes(contrast_targets={})
    palette = generate_palette(controls)
    for color in palette:
        assert color.contrast == pytest.approx(4.5, abs=0.05)


def test_lightness_override(blue):
    controls = blue.with_changes(lightness_overrides={6: True})
    palette = generate_palette(controls)
    assert palette.by_step(6).lightness == pytest.approx(blue.lightness_values[6.0])


def test_override_without_value_uses_solver(blue, blue_palette):
    controls = blue.with_changes(lightness_overrides={6: True}, lightness_values={})
    palette = generate_palette(controls)
    assert palette.by_step(6) == blue_palette.by_step(6)
    kinds = [d.kind for d in palette.diagnostics]
    assert kinds == [DiagnosticKind.MISSING_LIGHTNESS_VALUE]
    assert palette.diagnostics[0].step == 6.0


def test_interpolated_step(blue):
    steps = tuple(float(s) for s in range(1, 12)) + (6.6,)
    palette = generate_palette(blue.with_changes(steps=steps))
    assert len(palette) == 12
    assert palette.steps == tuple(sorted(steps))
    low, mid, high = palette.by_step(6), palette.by_step(6.6), palette.by_step(7)
    assert mid.token_name == "50-40"
    assert mid.lightness == pytest.approx(low.lightness + 0.6 * (high.lightness - low.lightness), abs=2e-4)
    assert mid.contrast == pytest.approx(low.contrast + 0.6 * (high.contrast - low.contrast), abs=0.006)
    assert low.contrast < mid.contrast < high.contrast


def test_interpolated_step_with_override(blue, engine):
    controls = blue.with_changes(
        steps=(6.0, 6.5, 7.0),
        lightness_overrides={6.5: True},
        lightness_values={6.5: 0.5},
    )
    palette = generate_palette(controls)
    mid = palette.by_step(6.5)
    assert mid.lightness == 0.5
    assert mid.contrast == pytest.approx(engine.contrast_ratio(mid.to_oklch(), "#ffffff"), abs=0.006)


def test_missing_neighbor_uses_placeholder(blue):
    palette = generate_palette(blue.with_changes(steps=(6.5,)))
    color = palette[0]
    assert color.css == "#808080"
    assert color.lightness == 0.5
    assert color.chroma == 0.1
    assert color.contrast == 1.0
    assert [d.kind for d in palette.diagnostics] == [DiagnosticKind.MISSING_NEIGHBOR]


def test_endpoints(blue):
    palette = generate_palette(blue.with_changes(steps=(0, 6, 12)))
    white, black = palette.by_step(0), palette.by_step(12)
    assert white.css == "#ffffff" and white.lightness == 1.0 and white.chroma == 0.0
    assert black.css == "#000000" and black.lightness == 0.0
    assert white.hue == black.hue == blue.base_hue
    assert white.token_name == "100" and black.token_name == "0"
    assert white.contrast == pytest.approx(1.0)
    assert black.contrast == pytest.approx(21.0)


def test_interpolation_toward_endpoint(blue):
    palette = generate_palette(blue.with_changes(steps=(0, 0.5, 1)))
    mid = palette.by_step(0.5)
    assert palette.by_step(1).lightness < mid.lightness < 1.0
    assert mid.token_name == "100-95"


def test_custom_token_names(blue):
    palette = generate_palette(blue.with_changes(token_names={6: "primary"}))
    assert palette.by_step(6).token_name == "primary"


def test_invalid_background_falls_back(blue):
    palette = generate_palette(blue.with_changes(background_color="notacolor"))
    assert palette.background == "#ffffff"
    assert palette.diagnostics_of(DiagnosticKind.INVALID_COLOR)
    assert palette.colors == generate_palette(blue).colors


def test_explicit_fallback_background(blue):
    palette = generate_palette(
        blue.with_changes(background_color="notacolor"), fallback_background="#000000"
    )
    assert palette.background == "#000000"


def test_dark_background_inverts_ramp(blue):
    palette = generate_palette(blue.with_changes(background_color="#000000"))
    values = [c.lightness for c in palette]
    assert values == sorted(values)
    assert palette.by_step(6).contrast == pytest.approx(4.5, abs=0.05)


def test_self_reference_fallback_policy(blue, blue_palette):
    controls = blue.with_changes(background_color="palette-6")
    palette = generate_palette(controls)
    assert palette.background == "#ffffff"
    assert palette.diagnostics[0].kind is DiagnosticKind.SELF_REFERENCE
    assert palette.colors == blue_palette.colors


def test_self_reference_single_pass_policy(blue, blue_palette):
    controls = blue.with_changes(background_color="palette-6")
    palette = generate_palette(controls, self_reference_policy=SelfReferencePolicy.SINGLE_PASS)
    assert palette.background == blue_palette.by_step(6).css
    assert palette.diagnostics[0].kind is DiagnosticKind.SELF_REFERENCE
    assert len(palette) == 11


def test_self_reference_policy_from_settings(blue, blue_palette):
    from common import settings

    settings.get().SELF_REFERENCE_POLICY = "single-pass"
    palette = generate_palette(blue.with_changes(background_color="palette-6"))
    assert palette.background == blue_palette.by_step(6).css


def test_reference_against_existing_palette(blue, blue_palette):
    controls = blue.with_changes(background_color="palette-11")
    palette = generate_palette(controls, existing_palette=blue_palette)
    assert palette.background == blue_palette.by_step(11).css
    assert not palette.diagnostics_of(DiagnosticKind.SELF_REFERENCE)


@pytest.mark.parametrize(
    "reference,kind",
    [
        ("palette-abc", DiagnosticKind.MALFORMED_REFERENCE),
        ("palette-99", DiagnosticKind.STEP_OUT_OF_RANGE),
        ("palette-0", DiagnosticKind.STEP_OUT_OF_RANGE),
    ],
)
def test_bad_reference_keeps_its_own_diagnostic(blue, blue_palette, reference, kind):
    palette = generate_palette(blue.with_changes(background_color=reference))
    assert palette.background == "#ffffff"
    assert palette.diagnostics[0].kind is kind
    assert not palette.diagnostics_of(DiagnosticKind.SELF_REFERENCE)
    assert palette.colors == blue_palette.colors


def test_unreachable_target_reports_non_convergence(blue):
    controls = blue.with_changes(steps=(6,), contrast_targets={6: 25.0})
    palette = generate_palette(controls)
    (diag,) = palette.diagnostics_of(DiagnosticKind.NON_CONVERGENCE)
    assert diag.step == 6.0
    assert diag.target == 25.0
    assert diag.achieved < 25.0
    assert diag.delta == pytest.approx(25.0 - diag.achieved)


def test_settings_arguments_accept_strings_and_enums(blue):
    a = generate_palette(blue, "P3", "contrast")
    b = generate_palette(blue, Gamut.P3, LightnessMode.CONTRAST)
    c = generate_palette(blue, GamutSettings("P3"), LightnessSettings("contrast"))
    assert a == b == c
    assert a.gamut is Gamut.P3


def test_structural_errors_raise(blue):
    with pytest.raises(PaletteConfigError):
        generate_palette({"baseHue": 10})  # type: ignore[arg-type]
    with pytest.raises(PaletteConfigError):
        generate_palette(blue, "adobe-rgb")
    with pytest.raises(PaletteConfigError):
        generate_palette(blue, lightness_settings="auto")
    with pytest.raises(PaletteConfigError):
        generate_palette(blue, self_reference_policy="forever")


def test_palette_sequence_protocol(blue_palette):
    assert blue_palette[0].step == 1.0
    assert len(blue_palette[2:4]) == 2
    assert blue_palette.hex() == [c.css for c in blue_palette]
    assert blue_palette.by_step(6.5) is None


def test_custom_precision_reaches_rounding_and_strings(blue):
    coarse = Precision(
        lightness=ChannelPrecision(step=0.01, display_decimals=0),
        chroma=ChannelPrecision(step=0.01, display_decimals=2),
        hue=ChannelPrecision(step=1.0, display_decimals=0),
    )
    palette = generate_palette(blue.with_changes(steps=(3, 6)), precision=coarse)
    for color in palette:
        assert color.chroma == round(color.chroma, 2)
        assert color.hue == round(color.hue)
        assert color.oklch == f"oklch({color.lightness * 100:.0f}% {color.chroma:.2f} {color.hue:.0f})"
