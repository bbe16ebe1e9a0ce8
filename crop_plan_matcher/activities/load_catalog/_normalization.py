"""Coordinate normalization helpers for crop plan catalog loading.

Responsibilities:
- Convert raw GeoJSON position arrays to clean (lon, lat) tuples
- Build shapely geometries from GeoJSON Polygon / MultiPolygon coordinates
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from crop_plan_matcher.activities.load_catalog._constants import (
    MULTIPOLYGON_TYPE,
    POLYGON_TYPE,
)
from crop_plan_matcher.activities.load_catalog._validation import (
    CatalogValidationError,
    validate_ring,
)

if TYPE_CHECKING:
    from shapely.geometry import MultiPolygon, Polygon


def coords_to_tuples(raw_coords: object, label: str) -> list[tuple[float, float]]:
    """Convert GeoJSON position arrays to (lon, lat) tuples.

    Drops altitude (third element) if present.

    Raises:
        CatalogValidationError: If the ring or any position is malformed.
    """
    if not isinstance(raw_coords, list | tuple):
        msg = f"Ring must be a list of positions in {label}, got {type(raw_coords).__name__}"
        raise CatalogValidationError(msg)
    coords: list[tuple[float, float]] = []
    for idx, c in enumerate(raw_coords):
        if not isinstance(c, list | tuple) or len(c) < 2:
            msg = f"Malformed position at index {idx} in {label}: {c!r}"
            raise CatalogValidationError(msg)
        try:
            lon = float(c[0])
            lat = float(c[1])
        except (TypeError, ValueError) as exc:
            msg = (
                f"Malformed position at index {idx} in {label}: cannot convert to float "
                f"(lon={c[0]!r}, lat={c[1]!r})"
            )
            raise CatalogValidationError(msg) from exc
        coords.append((lon, lat))
    return coords


def _polygon_from_rings(raw_rings: object, label: str) -> Polygon:
    from shapely.geometry import Polygon

    if not isinstance(raw_rings, list | tuple) or not raw_rings:
        msg = f"Polygon has no rings in {label}"
        raise CatalogValidationError(msg)

    exterior = validate_ring(coords_to_tuples(raw_rings[0], label), label)
    holes = [
        validate_ring(coords_to_tuples(ring, f"{label} (hole)"), f"{label} (hole)")
        for ring in raw_rings[1:]
    ]
    return Polygon(exterior, holes)


def geometry_from_geojson(geometry: dict[str, object], label: str) -> Polygon | MultiPolygon:
    """Build a shapely geometry from a GeoJSON Polygon or MultiPolygon object.

    Raises:
        CatalogValidationError: If the type is unsupported or the
            coordinates are malformed.
    """
    from shapely.geometry import MultiPolygon

    geom_type = geometry.get("type")
    raw_coords = geometry.get("coordinates")

    if geom_type == POLYGON_TYPE:
        return _polygon_from_rings(raw_coords, label)

    if geom_type == MULTIPOLYGON_TYPE:
        if not isinstance(raw_coords, list | tuple) or not raw_coords:
            msg = f"MultiPolygon has no parts in {label}"
            raise CatalogValidationError(msg)
        parts = [
            _polygon_from_rings(part, f"{label} (part {part_idx})")
            for part_idx, part in enumerate(raw_coords)
        ]
        return MultiPolygon(parts)

    msg = f"Unsupported geometry type {geom_type!r} in {label}, expected Polygon or MultiPolygon"
    raise CatalogValidationError(msg)
