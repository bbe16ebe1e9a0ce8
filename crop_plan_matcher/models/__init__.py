"""Data models.

Defines the value types that flow through the pipeline:
- Coordinate: A parsed ``UID / latitude / longitude`` input line
- PolygonFeature: A crop plan polygon with its attributes
- MatchRecord: A coordinate joined with the attributes of its polygon
"""

from crop_plan_matcher.models.coordinate import Coordinate
from crop_plan_matcher.models.match_record import MatchRecord
from crop_plan_matcher.models.polygon_feature import PolygonFeature

__all__ = [
    "Coordinate",
    "MatchRecord",
    "PolygonFeature",
]
