"""Public entrypoint for the oklch_ramp palette library.

This module re-exports the main user-facing types and functions so that
applications can simply import from ``oklch_ramp`` instead of individual
submodules.
"""

from .errors import PaletteConfigError, PaletteError
from .color_types import DEFAULT_PRECISION, Gamut, PaletteColor, Precision
from .controls import (
    ChromaMode,
    GamutSettings,
    LightnessMode,
    LightnessSettings,
    PaletteControls,
    SelfReferencePolicy,
)
from .curves import CurveType, Easing
from .diagnostics import Diagnostic, DiagnosticKind
from .engine import ColorEngine, DefaultColorEngine, default_engine
from .palette import Palette
from .api import generate_palette
from .contrast import ContrastSolution, solve_lightness_for_contrast
from .gamut import clamp_to_gamut
from .background import resolve_background
from .migration import load_controls, migrate_controls
from .presets import default_controls, get_preset, list_presets
from .validation import (
    ComplianceLevel,
    ContrastAccuracy,
    DetectedGamut,
    analyze_contrast,
    compliance_level,
    contrast_accuracy,
    detect_color_gamut,
    text_color_for_background,
    validate_color,
    validate_color_gamut,
)
from .export import (
    ExportFormat,
    color_formats,
    convert_palette_to_luminance,
    convert_to_luminance,
    css_variables,
    export_palette,
    tailwind_config,
)

__all__ = [
    "PaletteError",
    "PaletteConfigError",
    "DEFAULT_PRECISION",
    "Gamut",
    "PaletteColor",
    "Precision",
    "ChromaMode",
    "GamutSettings",
    "LightnessMode",
    "LightnessSettings",
    "PaletteControls",
    "SelfReferencePolicy",
    "CurveType",
    "Easing",
    "Diagnostic",
    "DiagnosticKind",
    "ColorEngine",
    "DefaultColorEngine",
    "default_engine",
    "Palette",
    "generate_palette",
    "ContrastSolution",
    "solve_lightness_for_contrast",
    "clamp_to_gamut",
    "resolve_background",
    "load_controls",
    "migrate_controls",
    "default_controls",
    "get_preset",
    "list_presets",
    "ComplianceLevel",
    "ContrastAccuracy",
    "DetectedGamut",
    "analyze_contrast",
    "compliance_level",
    "contrast_accuracy",
    "detect_color_gamut",
    "text_color_for_background",
    "validate_color",
    "validate_color_gamut",
    "ExportFormat",
    "color_formats",
    "convert_palette_to_luminance",
    "convert_to_luminance",
    "css_variables",
    "export_palette",
    "tailwind_config",
]
