from __future__ import annotations

"""Gamut detection, accuracy badges, WCAG analysis and export helpers."""

import json

import pytest

from oklch_ramp.color_types import Gamut
from oklch_ramp.contrast import estimate_lightness_for_contrast
from oklch_ramp.errors import PaletteConfigError
from oklch_ramp.export import (
    ExportFormat,
    color_formats,
    convert_palette_to_luminance,
    convert_to_luminance,
    css_variables,
    export_palette,
    tailwind_config,
)
from oklch_ramp.gamut import clamp_to_gamut
from oklch_ramp.swatch import make_palette_color
from oklch_ramp.validation import (
    ComplianceLevel,
    ContrastAccuracy,
    ContrastResult,
    DetectedGamut,
    TextSize,
    analyze_contrast,
    compliance_level,
    contrast_label,
    contrast_accuracy,
    detect_color_gamut,
    text_color_for_background,
    validate_color,
    validate_color_gamut,
)


def _swatch(engine, lch, step=6.0, token="50", contrast=1.0):
    return make_palette_color(step, token, lch, engine, contrast=contrast)


@pytest.fixture()
def p3_only(engine):
    srgb = clamp_to_gamut((0.7, 0.4, 145.0), Gamut.SRGB, engine).chroma
    p3 = clamp_to_gamut((0.7, 0.4, 145.0), Gamut.P3, engine).chroma
    assert p3 > srgb
    return _swatch(engine, (0.7, (srgb + p3) / 2.0, 145.0))


@pytest.mark.parametrize(
    "delta,expected",
    [
        (0.0, ContrastAccuracy.GOOD),
        (0.29, ContrastAccuracy.GOOD),
        (0.3, ContrastAccuracy.OK),
        (-0.5, ContrastAccuracy.OK),
        (0.8, ContrastAccuracy.POOR),
        (3.0, ContrastAccuracy.POOR),
    ],
)
def test_contrast_accuracy(delta, expected):
    assert contrast_accuracy(delta) is expected


def test_srgb_palette_needs_no_wider_gamut(engine, blue_palette):
    for color in blue_palette:
        assert detect_color_gamut(color, engine) is None
        assert validate_color_gamut(color, "sRGB", engine).within_gamut


def test_p3_color_detection(engine, p3_only):
    assert detect_color_gamut(p3_only, engine) is DetectedGamut.P3
    v = validate_color_gamut(p3_only, Gamut.SRGB, engine)
    assert not v.within_gamut
    assert v.requires_gamut is DetectedGamut.P3
    assert validate_color_gamut(p3_only, Gamut.P3, engine).within_gamut
    assert validate_color_gamut(p3_only, "Wide", engine).within_gamut


def test_far_out_color_is_wide(engine):
    assert detect_color_gamut(_swatch(engine, (0.7, 0.6, 145.0)), engine) is DetectedGamut.WIDE


def test_validate_color_contrast_badges(engine, blue, blue_palette):
    step6 = blue_palette.by_step(6)
    result = validate_color(step6, blue, "sRGB", "contrast", engine)
    assert result.in_gamut
    assert result.gamut is None
    assert result.contrast_accuracy is ContrastAccuracy.GOOD
    assert result.contrast_delta < 0.3
    assert result.warnings == []

    far = blue.with_changes(contrast_targets={6: 9.0})
    result = validate_color(step6, far, engine=engine)
    assert result.contrast_accuracy is ContrastAccuracy.POOR
    assert "far from target" in result.warnings[0]


def test_validate_color_range_mode_has_no_badge(engine, blue, blue_palette):
    result = validate_color(blue_palette.by_step(6), blue, lightness_settings="range", engine=engine)
    assert result.contrast_accuracy is None
    assert result.contrast_delta is None


def test_analyze_contrast(engine):
    black = _swatch(engine, (0.0, 0.0, 0.0))
    result = analyze_contrast(black, "#ffffff", engine=engine)
    assert result.ratio == pytest.approx(21.0)
    assert result.wcag_aa and result.wcag_aaa
    assert result.wcag_aa_large and result.wcag_aaa_large

    white = _swatch(engine, (1.0, 0.0, 0.0))
    result = analyze_contrast(white, "#ffffff", engine=engine)
    assert result.ratio == pytest.approx(1.0)
    assert not (result.wcag_aa or result.wcag_aaa or result.wcag_aa_large)


def test_analyze_contrast_large_text(engine):
    L = estimate_lightness_for_contrast(3.5, "#ffffff", engine)
    gray = _swatch(engine, (L, 0.0, 0.0))
    normal = analyze_contrast(gray, "#ffffff", "normal", engine)
    large = analyze_contrast(gray, "#ffffff", TextSize.LARGE, engine)
    assert not normal.wcag_aa
    assert large.wcag_aa
    assert not large.wcag_aaa
    with pytest.raises(PaletteConfigError):
        analyze_contrast(gray, "#ffffff", "huge", engine)


@pytest.mark.parametrize(
    "aa,aaa,level",
    [(True, True, ComplianceLevel.AAA), (True, False, ComplianceLevel.AA), (False, False, ComplianceLevel.FAIL)],
)
def test_compliance_level(aa, aaa, level):
    result = ContrastResult(ratio=4.56, wcag_aa=aa, wcag_aaa=aaa, wcag_aa_large=True, wcag_aaa_large=aa)
    assert compliance_level(result) is level
    assert contrast_label(result) == f"{level.value} 4.56"
    assert contrast_label(result, show_compliance=False) == "4.56"


def test_compliance_follows_text_size(engine):
    L = estimate_lightness_for_contrast(3.5, "#ffffff", engine)
    gray = _swatch(engine, (L, 0.0, 0.0))
    assert compliance_level(analyze_contrast(gray, "#ffffff", "normal", engine)) is ComplianceLevel.FAIL
    assert compliance_level(analyze_contrast(gray, "#ffffff", "large", engine)) is ComplianceLevel.AA


def test_text_color_for_background(engine):
    assert text_color_for_background(_swatch(engine, (0.2, 0.05, 250.0)), engine) == "#ffffff"
    assert text_color_for_background(_swatch(engine, (0.95, 0.02, 90.0)), engine) == "#000000"


def test_color_formats(engine, blue_palette):
    formats = color_formats(blue_palette.by_step(6), engine)
    assert formats.hex == blue_palette.by_step(6).css
    assert formats.rgb.startswith("rgb(")
    assert formats.hsl.startswith("hsl(")
    assert formats.oklch == blue_palette.by_step(6).oklch


def test_export_palette_formats(engine, blue_palette):
    assert export_palette(blue_palette, "hex") == blue_palette.hex()
    assert export_palette(blue_palette, ExportFormat.OKLCH) == [c.oklch for c in blue_palette]
    assert all(s.startswith("rgb(") for s in export_palette(blue_palette, "rgb"))
    assert all(s.startswith("hsl(") for s in export_palette(blue_palette, "hsl"))
    css = export_palette(blue_palette, "css", name="brand")
    assert css[5] == f"--brand-50: {blue_palette.by_step(6).css};"
    rgb255 = export_palette(blue_palette, "srgb_255")
    assert all(0 <= v <= 255 for triple in rgb255 for v in triple)
    with pytest.raises(PaletteConfigError):
        export_palette(blue_palette, "cmyk")


def test_css_variables(engine):
    colors = [
        _swatch(engine, (1.0, 0.0, 0.0), step=0.0, token="100"),
        _swatch(engine, (0.0, 0.0, 0.0), step=12.0, token="0"),
    ]
    assert css_variables(colors, "blue") == (
        ":root {\n  --blue-100: #ffffff;\n  --blue-0: #000000;\n}"
    )


def test_tailwind_config(blue_palette):
    text = tailwind_config(blue_palette, "brand")
    assert text.startswith("// Add to your tailwind.config.js colors section\ncolors: {\n  brand: {")
    body = text[text.index("{", text.index("brand")) : text.rindex("}")]
    assert json.loads(body)["50"] == blue_palette.by_step(6).css


def test_convert_to_luminance(engine, blue_palette):
    color = blue_palette.by_step(6)
    gray = convert_to_luminance(color, engine)
    assert gray.chroma == 0.0
    assert gray.lightness == color.lightness
    assert gray.step == color.step and gray.token_name == color.token_name
    assert gray.css[1:3] == gray.css[3:5] == gray.css[5:7]
    assert " 0.000 " in gray.oklch
    assert len(convert_palette_to_luminance(blue_palette, engine)) == len(blue_palette)
