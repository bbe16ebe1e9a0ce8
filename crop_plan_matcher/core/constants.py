"""Shared pipeline constants.

Centralises default blob names, the recognised crop plan attributes and
the report column layout so that the parser, locator and report builder
agree on a single schema.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Blob names
# ---------------------------------------------------------------------------

DEFAULT_CONTAINER: str = "crop-plan"
"""Default blob container holding the inputs and the report."""

DEFAULT_COORDINATES_BLOB: str = "coordonnees.txt"
"""Tab-separated ``UID / Latitude / Longitude`` input file."""

DEFAULT_POLYGONS_BLOB: str = "plan-culture.geojson"
"""GeoJSON FeatureCollection of crop plan polygons."""

DEFAULT_REPORT_BLOB: str = "resultat.csv"
"""CSV report, fully overwritten on every run."""

REPORT_CONTENT_TYPE: str = "text/csv"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

CROP_ATTRIBUTES: tuple[str, ...] = (
    "clecomposite",
    "nochamp",
    "culture",
    "variete",
    "nosemi",
    "date_semi",
)
"""Polygon properties copied into each match, in report order."""

REPORT_COLUMNS: tuple[str, ...] = ("uid", "latitude", "longitude", *CROP_ATTRIBUTES)

COORDINATE_FIELD_SEPARATOR: str = "\t"
MIN_COORDINATE_FIELDS: int = 3
