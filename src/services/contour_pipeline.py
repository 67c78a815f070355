"""Contour pipeline: grid + thresholds -> colored flat or extruded bands."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from contours.classifier import classify
from contours.extractor import ContourBand, extract
from contours.grid import ScalarGrid, ThresholdSet
from domain.models import ContourSettings
from mesh.extrude import Solid3D, extrude
from mesh.outline import Outline2D, build_outline
from services.color_utils import ColorMapper, check_domain
from shared.constants import ColorBy, RenderMode
from shared.errors import DegenerateGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContourLayer:
    """Renderable shapes of one non-empty band with their color."""

    threshold: float
    index: int
    color: tuple[int, int, int]
    outlines: tuple[Outline2D, ...]
    solids: tuple[Solid3D, ...] = ()


def resolve_thresholds(grid: ScalarGrid, settings: ContourSettings) -> ThresholdSet:
    """Explicit thresholds from settings, else evenly spaced levels over the grid."""
    if settings.thresholds:
        return ThresholdSet(tuple(settings.thresholds))
    return ThresholdSet.from_extent(grid, settings.threshold_count)


def _band_outlines(band: ContourBand, settings: ContourSettings) -> list[Outline2D]:
    outlines: list[Outline2D] = []
    for polygon in classify(band, settings.min_ring_area):
        try:
            outline = build_outline(polygon)
        except DegenerateGeometry as e:
            logger.warning('Skipped outline at level %s: %s', band.threshold, e)
            continue
        outlines.append(outline.transformed(settings.xy_scale, settings.offset))
    return outlines


def _band_solids(
    outlines: list[Outline2D], depth: float, settings: ContourSettings
) -> list[Solid3D]:
    solids: list[Solid3D] = []
    for outline in outlines:
        try:
            solids.append(extrude(outline, depth, settings.axis))
        except DegenerateGeometry as e:
            logger.warning('Skipped solid at level %s: %s', outline.threshold, e)
    return solids


def build_contour_layers(
    grid: ScalarGrid,
    thresholds: ThresholdSet | None = None,
    settings: ContourSettings | None = None,
) -> list[ContourLayer]:
    """
    Run extraction, classification, outline building and (in SOLID mode)
    extrusion, and color every band.

    Invalid input raises InvalidInput and produces nothing. Shapes that fail
    with DegenerateGeometry are logged and skipped; bands left without shapes
    are omitted from the result.
    """
    if settings is None:
        settings = ContourSettings()
    if thresholds is None:
        thresholds = resolve_thresholds(grid, settings)
    elif not isinstance(thresholds, ThresholdSet):
        thresholds = ThresholdSet(tuple(thresholds))

    started = time.perf_counter()
    bands = extract(grid, thresholds)
    mapper = ColorMapper.from_settings(settings)
    domain = check_domain(settings.color_domain(thresholds.extent))
    count = len(thresholds)

    layers: list[ContourLayer] = []
    for band in bands.values():
        if band.is_empty:
            continue
        outlines = _band_outlines(band, settings)
        solids: list[Solid3D] = []
        if settings.mode == RenderMode.SOLID and outlines:
            solids = _band_solids(outlines, band.threshold * settings.depth_scale, settings)
            if not solids:
                logger.warning('Level %s produced no solids, band omitted', band.threshold)
                continue
        if not outlines:
            continue

        if settings.color_by == ColorBy.INDEX:
            color = mapper.color_of_index(band.index, count)
        else:
            color = mapper.color_of(band.threshold, domain)
        layers.append(
            ContourLayer(
                threshold=band.threshold,
                index=band.index,
                color=color,
                outlines=tuple(outlines),
                solids=tuple(solids),
            )
        )

    logger.info(
        'Contours built: %d of %d level(s) non-empty, mode=%s, %.3fs',
        len(layers),
        count,
        settings.mode.value,
        time.perf_counter() - started,
    )
    return layers
