"""Sectioned TOML layout for ContourSettings profiles.

Settings stay a flat pydantic model; profiles group the fields into
[contours], [extrusion], [color], [layout] and [svg] tables with short keys.
Anything not listed in SECTION_MAP lives in [common].
"""

from __future__ import annotations

# {section_name: {flat_field_name: short_name_in_toml}}
SECTION_MAP: dict[str, dict[str, str]] = {
    'contours': {
        'thresholds': 'thresholds',
        'threshold_count': 'count',
        'min_ring_area': 'min_ring_area',
    },
    'extrusion': {
        'axis': 'axis',
        'depth_scale': 'depth_scale',
    },
    'color': {
        'palette': 'palette',
        'interpolation': 'interpolation',
        'color_by': 'by',
        'domain_min': 'domain_min',
        'domain_max': 'domain_max',
    },
    'layout': {
        'xy_scale': 'scale',
        'offset_x': 'offset_x',
        'offset_y': 'offset_y',
    },
    'svg': {
        'stroke': 'stroke',
        'stroke_width': 'stroke_width',
        'opacity': 'opacity',
    },
}

# flat_field -> (section, short_name)
_FLAT_TO_SECTION: dict[str, tuple[str, str]] = {
    flat: (section, short)
    for section, fields in SECTION_MAP.items()
    for flat, short in fields.items()
}

# section -> {short_name: flat_field}
_SECTION_TO_FLAT: dict[str, dict[str, str]] = {
    section: {short: flat for flat, short in fields.items()}
    for section, fields in SECTION_MAP.items()
}


def flat_to_sectioned(flat: dict) -> dict:
    """Convert flat ContourSettings dict to sectioned dict for TOML output.

    Sections follow SECTION_MAP order after 'common'; empty ones are left out.
    TOML has no null, so fields set to None are skipped.
    """
    common: dict = {}
    sections: dict[str, dict] = {name: {} for name in SECTION_MAP}
    for key, value in flat.items():
        if value is None:
            continue
        target = _FLAT_TO_SECTION.get(key)
        if target is None:
            common[key] = value
        else:
            sections[target[0]][target[1]] = value
    return {'common': common, **{k: v for k, v in sections.items() if v}}


def sectioned_to_flat(data: dict) -> dict:
    """Convert sectioned (or flat) TOML dict to flat dict for ContourSettings."""
    flat: dict = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            flat[key] = value
            continue
        # Unknown sections and short names pass through unchanged
        names = _SECTION_TO_FLAT.get(key, {})
        flat.update({names.get(short, short): v for short, v in value.items()})
    return flat
