"""Domain layer - contour settings and their TOML layout."""
from domain.models import ContourSettings
from domain.toml_sections import flat_to_sectioned, sectioned_to_flat

__all__ = [
    'ContourSettings',
    'flat_to_sectioned',
    'sectioned_to_flat',
]
