"""Validation helpers for crop plan catalog loading.

Responsibilities:
- Exceptions raised while loading the catalog
- Polygon ring structure validation (closure, vertex count)
- Shapely geometry validity diagnostics
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crop_plan_matcher.activities.load_catalog._constants import (
    MIN_DISTINCT_VERTICES,
    MIN_RING_VERTICES,
)
from crop_plan_matcher.core.exceptions import PipelineError

if TYPE_CHECKING:
    from shapely.geometry import MultiPolygon, Polygon

logger = logging.getLogger("crop_plan_matcher.activities.load_catalog")


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class CatalogParseError(PipelineError):
    """Raised when the crop plan document cannot be parsed."""

    default_stage = "load_catalog"
    default_code = "CATALOG_PARSE_FAILED"


class CatalogValidationError(CatalogParseError):
    """Raised when the document parses but a feature is unusable."""

    default_code = "CATALOG_VALIDATION_FAILED"


# ---------------------------------------------------------------------------
# Ring validation
# ---------------------------------------------------------------------------


def validate_ring(coords: list[tuple[float, float]], label: str) -> list[tuple[float, float]]:
    """Validate a polygon ring has enough vertices and is closed.

    Returns the (possibly auto-closed) coordinate list.

    Raises:
        CatalogValidationError: If the ring has fewer than 3 distinct points.
    """
    if len(coords) < MIN_DISTINCT_VERTICES:
        msg = f"Polygon ring has only {len(coords)} point(s), need at least 3 in {label}"
        raise CatalogValidationError(msg)

    if coords[0] != coords[-1]:
        logger.warning("Auto-closing unclosed ring in %s", label)
        coords = [*coords, coords[0]]

    if len(coords) < MIN_RING_VERTICES:
        msg = (
            f"Polygon ring has fewer than {MIN_RING_VERTICES} vertices "
            f"(including closure) in {label}"
        )
        raise CatalogValidationError(msg)

    if len(set(coords)) < MIN_DISTINCT_VERTICES:
        msg = f"Polygon ring has fewer than 3 distinct points in {label}"
        raise CatalogValidationError(msg)

    return coords


# ---------------------------------------------------------------------------
# Shapely geometry diagnostics
# ---------------------------------------------------------------------------


def check_geometry(geometry: Polygon | MultiPolygon, label: str) -> None:
    """Log a warning for self-intersecting or zero-area geometry.

    The geometry is kept as-is: containment is still evaluated against
    the rings exactly as the document draws them.
    """
    from shapely.validation import explain_validity

    if not geometry.is_valid:
        logger.warning("Invalid geometry in %s: %s", label, explain_validity(geometry))
    elif geometry.area == 0:
        logger.warning("Zero-area geometry in %s", label)
