"""Data model for a crop plan polygon.

A PolygonFeature is one Polygon or MultiPolygon feature of the crop plan
FeatureCollection together with its properties.  Features are built
once by the load_catalog activity and are read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from crop_plan_matcher.core.constants import CROP_ATTRIBUTES
from crop_plan_matcher.utils.helpers import attribute_text

if TYPE_CHECKING:
    from shapely.geometry import MultiPolygon, Polygon


@dataclass(frozen=True, slots=True)
class PolygonFeature:
    """A crop plan polygon and its attributes.

    Attributes:
        geometry: Shapely ``Polygon`` or ``MultiPolygon`` in ``(lon, lat)``
            order, rings closed.
        properties: Raw GeoJSON ``properties`` mapping (empty when the
            document had ``null``).
        feature_index: Zero-based position of the feature in the document.
            Lower indices win when polygons overlap.
    """

    geometry: Polygon | MultiPolygon
    properties: dict[str, object] = field(default_factory=dict)
    feature_index: int = 0

    def attribute(self, name: str) -> str:
        """Return property *name* as report text, ``""`` when absent or empty."""
        return attribute_text(self.properties.get(name))

    def crop_attributes(self) -> dict[str, str]:
        """Return every recognised crop attribute, in report order."""
        return {name: self.attribute(name) for name in CROP_ATTRIBUTES}

    @property
    def has_holes(self) -> bool:
        """Whether any part of this feature has interior (hole) rings."""
        parts = getattr(self.geometry, "geoms", (self.geometry,))
        return any(len(part.interiors) > 0 for part in parts)
