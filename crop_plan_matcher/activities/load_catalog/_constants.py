"""Shared constants for crop plan catalog loading."""

from __future__ import annotations

# GeoJSON geometry types that can contain a point
POLYGON_TYPE = "Polygon"
MULTIPOLYGON_TYPE = "MultiPolygon"

# Minimum vertices for a valid ring (3 distinct + closing = 4)
MIN_RING_VERTICES = 4
MIN_DISTINCT_VERTICES = 3
