"""Tests for the match run orchestrator.

Uses an in-memory blob store; no Azure resources are touched.

Covers:
- End-to-end runs against the sample files
- The 3 valid + 1 malformed line scenario
- Failure semantics: nothing stored, uniform 500 response
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from crop_plan_matcher.activities.build_report import REPORT_HEADER
from crop_plan_matcher.activities.load_catalog import CatalogParseError
from crop_plan_matcher.core.blob_store import BlobNotFoundError, BlobStoreError
from crop_plan_matcher.core.config import MatcherConfig
from crop_plan_matcher.orchestrators.match_pipeline import (
    MatchResponse,
    MatchRunResult,
    error_response,
    handle_request,
    run_match_pipeline,
)
from tests.conftest import InMemoryBlobStore, feature_collection, polygon_feature, square

CONTAINER = "crop-plan"
REPORT_KEY = (CONTAINER, "resultat.csv")


def _seed(store: InMemoryBlobStore, coordinates: bytes, crop_plan: bytes) -> None:
    store.blobs[(CONTAINER, "coordonnees.txt")] = coordinates
    store.blobs[(CONTAINER, "plan-culture.geojson")] = crop_plan


@pytest.fixture(params=[True, False], ids=["strtree", "scan"])
def config(request: pytest.FixtureRequest) -> MatcherConfig:
    return MatcherConfig(container=CONTAINER, use_spatial_index=bool(request.param))


class TestRunMatchPipeline:
    """Successful runs."""

    def test_sample_files(
        self,
        blob_store: InMemoryBlobStore,
        config: MatcherConfig,
        sample_coordinates: bytes,
        sample_crop_plan: bytes,
    ) -> None:
        _seed(blob_store, sample_coordinates, sample_crop_plan)

        result = run_match_pipeline(blob_store, config, correlation_id="req-1")

        assert result == MatchRunResult(
            match_count=2, coordinate_count=4, polygon_count=2, report_blob="resultat.csv"
        )
        report = blob_store.blobs[REPORT_KEY].decode("utf-8")
        assert report.split("\n") == [
            REPORT_HEADER,
            "A001,45.25,-74.25,2024-C12,12,Maïs,DKC 26-28,3,2024-05-14",
            "A002,45.75,-73.25,2024-C07,7,Soya,,,",
        ]
        assert blob_store.content_types[REPORT_KEY] == "text/csv"

    def test_three_valid_lines_and_one_malformed(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig
    ) -> None:
        coordinates = (
            "UID\tLatitude\tLongitude\n"
            "in-a\t5\t5\n"
            "in-b\t25,5\t25,5\n"
            "nowhere\t50\t50\n"
            "malformed\t12\n"
        ).encode()
        crop_plan = feature_collection(
            polygon_feature([square(0, 0, 10)], {"culture": "corn"}),
            polygon_feature([square(20, 20, 10)], {"culture": "soy"}),
        )
        _seed(blob_store, coordinates, crop_plan)

        result = run_match_pipeline(blob_store, config)

        assert result.match_count == 2
        rows = blob_store.blobs[REPORT_KEY].decode().split("\n")[1:]
        assert rows == ["in-a,5,5,,,corn,,,", "in-b,25.5,25.5,,,soy,,,"]

    def test_no_matches_writes_header_only(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig
    ) -> None:
        _seed(
            blob_store,
            b"UID\tLatitude\tLongitude\nfar\t80\t170\n",
            feature_collection(polygon_feature([square(0, 0, 1)])),
        )

        result = run_match_pipeline(blob_store, config)

        assert result.match_count == 0
        assert blob_store.blobs[REPORT_KEY] == REPORT_HEADER.encode()

    def test_report_overwritten(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig
    ) -> None:
        blob_store.blobs[REPORT_KEY] = b"stale"
        _seed(blob_store, b"UID\n", feature_collection())

        run_match_pipeline(blob_store, config)

        assert blob_store.blobs[REPORT_KEY] == REPORT_HEADER.encode()

    def test_custom_blob_names(self, blob_store: InMemoryBlobStore) -> None:
        config = MatcherConfig(
            container="other",
            coordinates_blob="in/points.tsv",
            polygons_blob="in/fields.geojson",
            report_blob="out/report.csv",
        )
        blob_store.blobs[("other", "in/points.tsv")] = b"UID\np\t0,5\t0,5\n"
        blob_store.blobs[("other", "in/fields.geojson")] = feature_collection(
            polygon_feature([square(0, 0, 1)], {"nochamp": "1"})
        )

        result = run_match_pipeline(blob_store, config)

        assert result.report_blob == "out/report.csv"
        assert blob_store.writes == [("other", "out/report.csv")]


class TestFailures:
    """Fatal errors abort the run without storing anything."""

    def test_missing_coordinates_blob(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig
    ) -> None:
        with pytest.raises(BlobNotFoundError):
            run_match_pipeline(blob_store, config)
        assert blob_store.writes == []

    def test_malformed_geojson(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig, sample_coordinates: bytes
    ) -> None:
        _seed(blob_store, sample_coordinates, b'{"type": "FeatureCollection"}')
        with pytest.raises(CatalogParseError):
            run_match_pipeline(blob_store, config)
        assert blob_store.writes == []

    def test_store_failure_propagates(
        self, config: MatcherConfig, sample_coordinates: bytes, sample_crop_plan: bytes
    ) -> None:
        store = MagicMock()
        store.fetch.side_effect = [sample_coordinates, sample_crop_plan]
        store.store.side_effect = BlobStoreError("Failed to upload crop-plan/resultat.csv: 403")

        with pytest.raises(BlobStoreError):
            run_match_pipeline(store, config)
        store.store.assert_called_once()


class TestHandleRequest:
    """HTTP boundary translation."""

    def test_success_response(
        self,
        blob_store: InMemoryBlobStore,
        config: MatcherConfig,
        sample_coordinates: bytes,
        sample_crop_plan: bytes,
    ) -> None:
        _seed(blob_store, sample_coordinates, sample_crop_plan)

        response = handle_request(blob_store, config)

        assert response == MatchResponse(
            status_code=200, body="Success! 2 result(s) written to resultat.csv."
        )

    def test_zero_matches_reported(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig
    ) -> None:
        _seed(blob_store, b"UID\n", feature_collection())
        response = handle_request(blob_store, config)
        assert response.status_code == 200
        assert "0 result(s)" in response.body

    def test_pipeline_error_is_500(
        self, blob_store: InMemoryBlobStore, config: MatcherConfig
    ) -> None:
        response = handle_request(blob_store, config, correlation_id="req-9")
        assert response.status_code == 500
        assert response.body == "Internal error: Blob not found: crop-plan/coordonnees.txt"
        assert blob_store.writes == []

    def test_unexpected_error_is_500(self, config: MatcherConfig) -> None:
        store = MagicMock()
        store.fetch.side_effect = RuntimeError("connection reset")
        response = handle_request(store, config)
        assert response == MatchResponse(status_code=500, body="Internal error: connection reset")
        store.store.assert_not_called()

    def test_error_response(self) -> None:
        assert error_response(ValueError("boom")) == MatchResponse(500, "Internal error: boom")
