"""Shared pytest fixtures for the Crop Plan Matcher test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from crop_plan_matcher.core.blob_store import BlobNotFoundError

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def sample_coordinates(data_dir: Path) -> bytes:
    """Coordinates file: 4 valid lines, 1 short line, 1 bad number.

    Values use decimal commas; A004 sits inside a hole of the first field.
    """
    return (data_dir / "coordonnees.txt").read_bytes()


@pytest.fixture()
def sample_crop_plan(data_dir: Path) -> bytes:
    """Crop plan with two fields, one of them with an unseeded hole."""
    return (data_dir / "plan-culture.geojson").read_bytes()


# ---------------------------------------------------------------------------
# GeoJSON builders
# ---------------------------------------------------------------------------


def polygon_feature(
    rings: list[list[list[float]]], properties: dict[str, object] | None = None
) -> dict[str, object]:
    """Build a GeoJSON Polygon Feature dict."""
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": rings},
        "properties": properties,
    }


def square(x0: float, y0: float, size: float) -> list[list[float]]:
    """Closed counter-clockwise square ring with its lower-left corner at (x0, y0)."""
    return [
        [x0, y0],
        [x0 + size, y0],
        [x0 + size, y0 + size],
        [x0, y0 + size],
        [x0, y0],
    ]


def feature_collection(*features: dict[str, object]) -> bytes:
    """Serialise features as a GeoJSON FeatureCollection document."""
    return json.dumps({"type": "FeatureCollection", "features": list(features)}).encode()


# ---------------------------------------------------------------------------
# Blob store
# ---------------------------------------------------------------------------


class InMemoryBlobStore:
    """``BlobStore`` holding blobs in a dict, recording every write."""

    def __init__(self, blobs: dict[tuple[str, str], bytes] | None = None) -> None:
        self.blobs: dict[tuple[str, str], bytes] = dict(blobs or {})
        self.content_types: dict[tuple[str, str], str] = {}
        self.writes: list[tuple[str, str]] = []

    def fetch(self, container: str, name: str) -> bytes:
        try:
            return self.blobs[(container, name)]
        except KeyError:
            msg = f"Blob not found: {container}/{name}"
            raise BlobNotFoundError(msg) from None

    def store(self, container: str, name: str, data: bytes, content_type: str) -> None:
        self.blobs[(container, name)] = data
        self.content_types[(container, name)] = content_type
        self.writes.append((container, name))


@pytest.fixture()
def blob_store() -> InMemoryBlobStore:
    """An empty in-memory blob store."""
    return InMemoryBlobStore()
