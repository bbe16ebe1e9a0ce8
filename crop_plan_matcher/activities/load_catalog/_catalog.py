"""Ordered, read-only collection of crop plan polygons."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from shapely.geometry import Point

    from crop_plan_matcher.models.polygon_feature import PolygonFeature


class PolygonCatalog(Sequence["PolygonFeature"]):
    """Crop plan polygons in document order.

    Document order is match precedence: when polygons overlap, the one
    with the lowest index wins.  With ``use_spatial_index`` an STRtree
    over the feature envelopes narrows the candidates for a point; the
    candidates are still returned in ascending index order so that
    precedence is unchanged.
    """

    def __init__(
        self, features: Sequence[PolygonFeature], *, use_spatial_index: bool = False
    ) -> None:
        self._features: tuple[PolygonFeature, ...] = tuple(features)
        self._tree = None
        if use_spatial_index and self._features:
            from shapely import STRtree

            self._tree = STRtree([feature.geometry for feature in self._features])

    @overload
    def __getitem__(self, index: int) -> PolygonFeature: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[PolygonFeature, ...]: ...

    def __getitem__(self, index: int | slice) -> PolygonFeature | tuple[PolygonFeature, ...]:
        return self._features[index]

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[PolygonFeature]:
        return iter(self._features)

    @property
    def indexed(self) -> bool:
        """Whether candidate lookups go through the spatial index."""
        return self._tree is not None

    def candidates(self, point: Point) -> Iterator[PolygonFeature]:
        """Yield features that may contain *point*, lowest index first."""
        if self._tree is None:
            yield from self._features
            return
        for idx in sorted(int(i) for i in self._tree.query(point)):
            yield self._features[idx]
