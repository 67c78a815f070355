"""Contour extraction: grids, marching-squares rings and ring classification."""

from contours.classifier import Polygon as Polygon
from contours.classifier import classify as classify
from contours.extractor import ContourBand as ContourBand
from contours.extractor import center_average_saddle as center_average_saddle
from contours.extractor import extract as extract
from contours.grid import ScalarGrid as ScalarGrid
from contours.grid import ThresholdSet as ThresholdSet
