"""
Command-line palette generator.

Usage:
    python -m oklch_ramp --preset blue --gamut sRGB --mode contrast
    python -m oklch_ramp --controls saved.json --format css
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from common import setup_default_logging

from . import (
    PaletteConfigError,
    css_variables,
    generate_palette,
    get_preset,
    list_presets,
    load_controls,
)
from .controls import PaletteControls
from .palette import Palette
from .steps import step_key

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="oklch_ramp", description="Generate an OKLCH palette ramp.")
    p.add_argument("--preset", default="blue", choices=list_presets())
    p.add_argument("--controls", type=Path, help="JSON file with stored palette controls")
    p.add_argument("--gamut", default="sRGB", help="sRGB, P3 or Rec2020")
    p.add_argument("--mode", default="contrast", help="contrast or range")
    p.add_argument("--background", help="absolute color or palette-N")
    p.add_argument("--name", default="palette", help="token prefix for css output")
    p.add_argument("--format", dest="fmt", default="table", choices=["table", "css", "json"])
    p.add_argument("--log-level", default=None)
    return p


def load_cli_controls(args: argparse.Namespace) -> PaletteControls:
    if args.controls is not None:
        raw = json.loads(args.controls.read_text(encoding="utf-8"))
        controls = load_controls(raw)
    else:
        controls = get_preset(args.preset)
    if args.background:
        controls = controls.with_changes(background_color=args.background)
    return controls


def render(palette: Palette, fmt: str, name: str) -> str:
    if fmt == "css":
        return css_variables(palette, name)
    if fmt == "json":
        return json.dumps(
            {
                "background": palette.background,
                "gamut": palette.gamut.value,
                "mode": palette.lightness_mode.value,
                "colors": [c.to_dict() for c in palette],
                "diagnostics": [
                    {"kind": d.kind.value, "message": d.message} for d in palette.diagnostics
                ],
            },
            indent=2,
        )
    lines = [f"{'step':>5}  {'token':<8} {'hex':<8} {'oklch':<28} contrast"]
    for c in palette:
        lines.append(f"{step_key(c.step):>5}  {c.token_name:<8} {c.css:<8} {c.oklch:<28} {c.contrast:.2f}")
    for d in palette.diagnostics:
        lines.append(f"! {d.kind.value}: {d.message}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)
    try:
        controls = load_cli_controls(args)
        palette = generate_palette(controls, args.gamut, args.mode)
    except (PaletteConfigError, OSError, json.JSONDecodeError) as exc:
        logger.error("%s", exc)
        return 2
    print(render(palette, args.fmt, args.name))
    return 0


if __name__ == "__main__":
    sys.exit(main())
