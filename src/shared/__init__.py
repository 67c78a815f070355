"""Shared constants and error types."""
from shared.errors import DegenerateGeometry, InvalidInput

__all__ = [
    'DegenerateGeometry',
    'InvalidInput',
]
