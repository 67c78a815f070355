"""Error types raised by the contour pipeline."""

from __future__ import annotations


class InvalidInput(ValueError):
    """
    Malformed grid, threshold set or configuration.

    Fatal for a pipeline run: nothing is produced.
    """


class DegenerateGeometry(ValueError):
    """
    A single outline or solid cannot be built.

    Recoverable: callers skip the affected shape and keep the rest.
    """
