from __future__ import annotations

"""Gamut clamping by chroma bisection."""

import pytest

from oklch_ramp.color_types import Gamut
from oklch_ramp.gamut import (
    MAX_CHROMA_BY_GAMUT,
    clamp_to_gamut,
    max_chroma_for_gamut,
    max_chroma_in_gamut,
)


def test_in_gamut_color_is_unchanged(engine):
    result = clamp_to_gamut((0.5, 0.05, 200.0), Gamut.SRGB, engine)
    assert not result.clamped
    assert result.oklch == (0.5, 0.05, 200.0)


def test_out_of_gamut_chroma_is_reduced(engine):
    result = clamp_to_gamut((0.7, 0.4, 150.0), Gamut.SRGB, engine)
    assert result.clamped
    assert 0.0 < result.chroma < 0.4
    assert result.lightness == 0.7
    assert result.hue == 150.0
    assert engine.in_gamut(result.oklch, Gamut.SRGB)


def test_clamp_is_close_to_boundary(engine):
    result = clamp_to_gamut((0.7, 0.4, 150.0), Gamut.SRGB, engine)
    assert not engine.in_gamut((0.7, result.chroma + 0.001, 150.0), Gamut.SRGB)


def test_wider_gamut_allows_more_chroma(engine):
    srgb = clamp_to_gamut((0.7, 0.4, 150.0), Gamut.SRGB, engine).chroma
    p3 = clamp_to_gamut((0.7, 0.4, 150.0), Gamut.P3, engine).chroma
    rec = clamp_to_gamut((0.7, 0.4, 150.0), Gamut.REC2020, engine).chroma
    assert srgb <= p3 <= rec


def test_negative_chroma_is_treated_as_zero(engine):
    result = clamp_to_gamut((0.5, -0.1, 0.0), Gamut.SRGB, engine)
    assert result.chroma == 0.0
    assert not result.clamped


def test_iterations_argument(engine):
    coarse = clamp_to_gamut((0.7, 0.4, 150.0), Gamut.SRGB, engine, iterations=1)
    assert coarse.chroma in (0.0, 0.2)


def test_max_chroma_helpers(engine):
    assert max_chroma_for_gamut(Gamut.SRGB) == MAX_CHROMA_BY_GAMUT[Gamut.SRGB]
    assert max_chroma_for_gamut("P3") == 0.50
    c = max_chroma_in_gamut(0.7, 150.0, Gamut.SRGB, engine)
    assert 0.0 < c < MAX_CHROMA_BY_GAMUT[Gamut.SRGB]
    assert engine.in_gamut((0.7, c, 150.0), Gamut.SRGB)


def test_clamping_twice_equals_clamping_once(engine):
    once = clamp_to_gamut((0.6, 0.35, 30.0), Gamut.SRGB, engine)
    twice = clamp_to_gamut(once.oklch, Gamut.SRGB, engine)
    assert not twice.clamped
    assert twice.oklch == once.oklch
