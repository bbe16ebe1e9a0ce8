"""Pydantic envelope model for the crop plan GeoJSON document.

Only the structure the matcher relies on is enforced: the document is
an object with a ``features`` list, and every feature is an object whose
``geometry`` and ``properties`` are objects (or ``null``).  Geometry
contents are checked later by the catalog loader, which can report
precise ring-level errors.  Unknown members (``crs``, ``name``,
``bbox``...) are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class GeoJsonFeature(BaseModel):
    """A single GeoJSON Feature.

    Attributes:
        geometry: Raw GeoJSON geometry object, ``None`` when absent.
        properties: Raw properties mapping, ``None`` when absent or ``null``.
    """

    model_config = ConfigDict(extra="ignore")

    geometry: dict[str, Any] | None = None
    properties: dict[str, Any] | None = None


class FeatureCollectionDocument(BaseModel):
    """A GeoJSON FeatureCollection, features kept in document order."""

    model_config = ConfigDict(extra="ignore")

    features: list[GeoJsonFeature]
