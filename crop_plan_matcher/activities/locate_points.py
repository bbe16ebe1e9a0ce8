"""Point location activity: match coordinates to crop plan polygons.

For each coordinate the locator builds a shapely ``Point`` in GeoJSON
axis order, ``(longitude, latitude)``, and walks the catalog in document
order.  The first polygon that contains the point wins; later polygons
are never considered for that point, even if they overlap.

Containment rules:
- Holes are honoured: a point strictly inside a hole is not contained.
- Boundaries are inclusive: a point on an edge or a vertex (including
  the edge of a hole) is contained.  This is shapely's ``covers``
  predicate.
- A coordinate inside no polygon produces no match.  That is a normal
  outcome, not an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crop_plan_matcher.models.match_record import MatchRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from crop_plan_matcher.activities.load_catalog import PolygonCatalog
    from crop_plan_matcher.models.coordinate import Coordinate
    from crop_plan_matcher.models.polygon_feature import PolygonFeature

logger = logging.getLogger("crop_plan_matcher.activities.locate_points")


def locate(coordinate: Coordinate, catalog: PolygonCatalog) -> PolygonFeature | None:
    """Return the first feature in catalog order containing *coordinate*.

    Args:
        coordinate: The position to look up.
        catalog: Crop plan polygons in precedence order.

    Returns:
        The winning ``PolygonFeature``, or ``None`` if no polygon
        contains the point.
    """
    from shapely.geometry import Point

    point = Point(coordinate.lon_lat)
    for feature in catalog.candidates(point):
        if feature.geometry.covers(point):
            return feature
    return None


def match_coordinates(
    coordinates: Iterable[Coordinate], catalog: PolygonCatalog
) -> list[MatchRecord]:
    """Locate every coordinate and join it with its polygon's attributes.

    Unmatched coordinates are dropped.  Output order follows input order.
    """
    records: list[MatchRecord] = []
    unmatched = 0
    for coordinate in coordinates:
        feature = locate(coordinate, catalog)
        if feature is None:
            unmatched += 1
            logger.debug(
                "No polygon contains coordinate | uid=%s | lon=%s | lat=%s",
                coordinate.uid,
                coordinate.lon,
                coordinate.lat,
            )
            continue
        records.append(MatchRecord.from_match(coordinate, feature))

    logger.info(
        "Located coordinates | matched=%d | unmatched=%d | polygons=%d",
        len(records),
        unmatched,
        len(catalog),
    )
    return records
