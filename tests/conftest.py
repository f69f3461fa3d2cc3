"""Shared fixtures.

- settings snapshot restored after every test
- default engine and blue preset
"""

from __future__ import annotations

from dataclasses import fields
from typing import Iterator

import pytest

from common import settings
from oklch_ramp import DefaultColorEngine, Palette, PaletteControls, generate_palette, get_preset


@pytest.fixture(autouse=True)
def restore_settings() -> Iterator[None]:
    """Keep tests that reload or mutate settings from leaking into others."""
    current = settings.get()
    saved = {f.name: getattr(current, f.name) for f in fields(current)}
    yield
    for name, value in saved.items():
        setattr(current, name, value)


@pytest.fixture()
def engine() -> DefaultColorEngine:
    return DefaultColorEngine()


@pytest.fixture()
def blue() -> PaletteControls:
    return get_preset("blue")


@pytest.fixture()
def blue_palette(blue: PaletteControls) -> Palette:
    return generate_palette(blue)
