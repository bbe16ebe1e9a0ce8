"""Data model for a parsed coordinate line.

A Coordinate is one validated ``UID / Latitude / Longitude`` row of the
coordinates file.  It is the output of the parse_coordinates activity
and the input to the locate_points activity.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A single identified WGS 84 position.

    Attributes:
        uid: Non-empty, whitespace-trimmed identifier from the first column.
        lat: Latitude in decimal degrees (finite).
        lon: Longitude in decimal degrees (finite).
    """

    uid: str
    lat: float
    lon: float

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Position in GeoJSON axis order: ``(longitude, latitude)``."""
        return (self.lon, self.lat)
