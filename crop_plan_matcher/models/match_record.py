"""Data model for a coordinate matched to a crop plan polygon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from crop_plan_matcher.utils.helpers import format_number

if TYPE_CHECKING:
    from crop_plan_matcher.models.coordinate import Coordinate
    from crop_plan_matcher.models.polygon_feature import PolygonFeature


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """One row of the match report.

    Attribute fields hold the already-coerced text of the matching
    polygon's properties (``""`` when absent).
    """

    uid: str
    lat: float
    lon: float
    clecomposite: str = ""
    nochamp: str = ""
    culture: str = ""
    variete: str = ""
    nosemi: str = ""
    date_semi: str = ""

    @classmethod
    def from_match(cls, coordinate: Coordinate, feature: PolygonFeature) -> MatchRecord:
        """Join a coordinate with the attributes of the polygon containing it."""
        return cls(
            uid=coordinate.uid,
            lat=coordinate.lat,
            lon=coordinate.lon,
            **feature.crop_attributes(),
        )

    def to_row(self) -> list[str]:
        """Return the report fields in column order."""
        return [
            self.uid,
            format_number(self.lat),
            format_number(self.lon),
            self.clecomposite,
            self.nochamp,
            self.culture,
            self.variete,
            self.nosemi,
            self.date_semi,
        ]
