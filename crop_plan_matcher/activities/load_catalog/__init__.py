"""Crop plan catalog loading activity.

Parses a GeoJSON FeatureCollection of crop plan polygons into an ordered
``PolygonCatalog``.  The document order is preserved because it decides
which polygon wins when polygons overlap.

The loading pipeline is split into focused stages:
- **_validation**: exceptions, ring closure and vertex checks, shapely diagnostics
- **_normalization**: raw positions → tuples → shapely geometries
- **_catalog**: the ordered catalog with its optional spatial index

Supported structures:
- Polygon and MultiPolygon features
- Interior rings (holes)
- Unclosed rings (auto-closed with a warning)
- ``properties: null`` (read as an empty mapping)

Any structural problem is fatal for the whole run: a bad polygon cannot
be skipped without silently changing which polygon a point matches.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from crop_plan_matcher.activities.load_catalog._catalog import PolygonCatalog
from crop_plan_matcher.activities.load_catalog._constants import MIN_RING_VERTICES
from crop_plan_matcher.activities.load_catalog._normalization import (
    coords_to_tuples,
    geometry_from_geojson,
)
from crop_plan_matcher.activities.load_catalog._validation import (
    CatalogParseError,
    CatalogValidationError,
    check_geometry,
    validate_ring,
)
from crop_plan_matcher.models.geojson import FeatureCollectionDocument
from crop_plan_matcher.models.polygon_feature import PolygonFeature

logger = logging.getLogger("crop_plan_matcher.activities.load_catalog")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "MIN_RING_VERTICES",
    "CatalogParseError",
    "CatalogValidationError",
    "PolygonCatalog",
    "check_geometry",
    "coords_to_tuples",
    "geometry_from_geojson",
    "load_catalog",
    "validate_ring",
]


def load_catalog(
    raw: bytes | str,
    *,
    source_filename: str = "",
    use_spatial_index: bool = False,
) -> PolygonCatalog:
    """Parse a GeoJSON FeatureCollection into a ``PolygonCatalog``.

    Args:
        raw: Document content as UTF-8 bytes or text.
        source_filename: Blob name used in log and error messages.
        use_spatial_index: Build an STRtree for candidate pre-filtering.

    Returns:
        The catalog, one ``PolygonFeature`` per document feature, in
        document order.

    Raises:
        CatalogParseError: If the content is not JSON or not a
            FeatureCollection with a ``features`` list.
        CatalogValidationError: If a feature's geometry is missing, not
            a Polygon/MultiPolygon, or has malformed rings.
    """
    document = _parse_document(raw, source_filename)

    features: list[PolygonFeature] = []
    for idx, raw_feature in enumerate(document.features):
        label = f"feature {idx} of {source_filename or 'crop plan'}"
        if raw_feature.geometry is None:
            msg = f"Missing geometry in {label}"
            raise CatalogValidationError(msg)

        geometry = geometry_from_geojson(raw_feature.geometry, label)
        check_geometry(geometry, label)
        features.append(
            PolygonFeature(
                geometry=geometry,
                properties=dict(raw_feature.properties or {}),
                feature_index=idx,
            )
        )

    catalog = PolygonCatalog(features, use_spatial_index=use_spatial_index)
    logger.info(
        "Loaded polygon catalog | file=%s | features=%d | indexed=%s",
        source_filename,
        len(catalog),
        catalog.indexed,
    )
    return catalog


def _parse_document(raw: bytes | str, source_filename: str) -> FeatureCollectionDocument:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Crop plan {source_filename or 'document'} is not valid JSON: {exc}"
        raise CatalogParseError(msg) from exc

    if not isinstance(payload, dict):
        msg = f"Crop plan document must be a JSON object, got {type(payload).__name__}"
        raise CatalogParseError(msg)

    try:
        return FeatureCollectionDocument.model_validate(payload)
    except PydanticValidationError as exc:
        msg = f"Crop plan {source_filename or 'document'} is not a FeatureCollection: {exc}"
        raise CatalogParseError(msg) from exc
