"""Command line entry point: contour a grid file into SVG, PNG or JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from contours.grid import ScalarGrid, ThresholdSet
from domain.models import ContourSettings
from profiles import load_profile
from render.raster import render_preview
from render.solid_json import solids_to_dict
from render.svg import render_svg
from services.contour_pipeline import build_contour_layers, resolve_thresholds
from shared.constants import DEFAULT_PROFILE, RenderMode
from shared.errors import InvalidInput

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure logging to stdout and, optionally, a UTF-8 log file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def load_grid(path: Path) -> ScalarGrid:
    """Read a grid from .npy or delimited text (.csv is comma separated)."""
    if not path.exists():
        msg = f'Grid file not found: {path}'
        raise InvalidInput(msg)
    suffix = path.suffix.lower()
    try:
        if suffix == '.npy':
            values = np.load(path, allow_pickle=False)
        else:
            values = np.loadtxt(path, delimiter=',' if suffix == '.csv' else None, ndmin=2)
    except ValueError as e:
        msg = f'Cannot read grid from {path}: {e}'
        raise InvalidInput(msg) from e
    return ScalarGrid(values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='contourmesh',
        description='Build colored contour bands (flat or extruded) from a scalar grid.',
    )
    parser.add_argument('grid', type=Path, help='Grid file (.npy, .csv or whitespace text)')
    parser.add_argument('--profile', default=None, help='Profile name or path to .toml')
    levels = parser.add_mutually_exclusive_group()
    levels.add_argument('--thresholds', type=float, nargs='+', help='Explicit levels')
    levels.add_argument(
        '--range',
        type=float,
        nargs=3,
        metavar=('START', 'STOP', 'STEP'),
        help='Levels START, START+STEP, ... below STOP',
    )
    parser.add_argument('--mode', choices=[m.value.lower() for m in RenderMode])
    parser.add_argument(
        '--out',
        type=Path,
        default=None,
        help='Output file: .svg / .png (flat) or .json (solids); summary if omitted',
    )
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument('--log-file', type=Path, default=None)
    return parser


def _load_settings(args: argparse.Namespace) -> ContourSettings:
    if args.profile is not None:
        settings = load_profile(args.profile)
    else:
        try:
            settings = load_profile(DEFAULT_PROFILE)
        except FileNotFoundError:
            logger.info('Default profile not found, using built-in settings')
            settings = ContourSettings()
    if args.mode is not None:
        settings = settings.model_copy(update={'mode': RenderMode(args.mode.upper())})
    return settings


def run(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    grid = load_grid(args.grid)
    if args.thresholds:
        thresholds = ThresholdSet(tuple(args.thresholds))
    elif args.range:
        thresholds = ThresholdSet.from_range(*args.range)
    else:
        thresholds = resolve_thresholds(grid, settings)

    layers = build_contour_layers(grid, thresholds, settings)
    width = (grid.width - 1) * settings.xy_scale
    height = (grid.height - 1) * settings.xy_scale

    out: Path | None = args.out
    if out is None:
        for layer in layers:
            logger.info(
                'level=%g color=%s outlines=%d solids=%d',
                layer.threshold,
                layer.color,
                len(layer.outlines),
                len(layer.solids),
            )
        return 0

    suffix = out.suffix.lower()
    if suffix == '.svg':
        out.write_text(render_svg(layers, width, height, settings), encoding='utf-8')
    elif suffix == '.png':
        size = (max(1, round(width)) + 1, max(1, round(height)) + 1)
        render_preview(layers, size, opacity=settings.opacity).save(out)
    elif suffix == '.json':
        if settings.mode != RenderMode.SOLID:
            logger.warning('JSON output carries solids only; run with --mode solid')
        out.write_text(json.dumps(solids_to_dict(layers)), encoding='utf-8')
    else:
        msg = f'Unsupported output format: {out.suffix}'
        raise InvalidInput(msg)
    logger.info('Wrote %s (%d layer(s))', out, len(layers))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    try:
        return run(args)
    except (InvalidInput, FileNotFoundError, ValidationError) as e:
        logger.error('Invalid input: %s', e)
        return EXIT_INVALID_INPUT


if __name__ == '__main__':
    sys.exit(main())
