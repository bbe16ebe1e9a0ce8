"""Match run orchestrator.

Sequences one run of the matcher:

    fetch coordinates → parse → fetch crop plan → load catalog
        → locate each coordinate → build report → store report

The run is all-or-nothing.  Any exception aborts it, and because the
report is only written after every earlier stage has succeeded, a
failed run never leaves a partial report behind.  Each call is
stateless; concurrent runs only meet at the report blob, which is
overwritten (last write wins).

``handle_request`` is the boundary: it turns the outcome into the
status code and plain-text body returned to the HTTP caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from crop_plan_matcher.activities.build_report import build_report
from crop_plan_matcher.activities.load_catalog import load_catalog
from crop_plan_matcher.activities.locate_points import match_coordinates
from crop_plan_matcher.activities.parse_coordinates import parse_coordinates
from crop_plan_matcher.core.constants import REPORT_CONTENT_TYPE
from crop_plan_matcher.core.exceptions import PipelineError

if TYPE_CHECKING:
    from crop_plan_matcher.core.blob_store import BlobStore
    from crop_plan_matcher.core.config import MatcherConfig

logger = logging.getLogger("crop_plan_matcher.orchestrators.match_pipeline")


@dataclass(frozen=True, slots=True)
class MatchRunResult:
    """Outcome of a successful run.

    Attributes:
        match_count: Number of report rows written.
        coordinate_count: Number of valid coordinates parsed.
        polygon_count: Number of polygons in the catalog.
        report_blob: Blob name the report was written to.
    """

    match_count: int
    coordinate_count: int
    polygon_count: int
    report_blob: str


@dataclass(frozen=True, slots=True)
class MatchResponse:
    """Transport-neutral HTTP response for a run."""

    status_code: int
    body: str


def run_match_pipeline(
    store: BlobStore,
    config: MatcherConfig,
    *,
    correlation_id: str = "",
) -> MatchRunResult:
    """Execute one match run against *store*.

    Args:
        store: Blob fetch/store capability.
        config: Container and blob names, spatial-index switch.
        correlation_id: Request identifier carried into log lines.

    Returns:
        Counts for the run and the report blob name.

    Raises:
        Exception: Whatever a stage raised; nothing is stored in that case.
    """
    container = config.container

    logger.info(
        "Match run started | container=%s | coordinates=%s | polygons=%s | correlation_id=%s",
        container,
        config.coordinates_blob,
        config.polygons_blob,
        correlation_id,
    )

    coordinates = parse_coordinates(
        store.fetch(container, config.coordinates_blob),
        source_filename=config.coordinates_blob,
    )

    catalog = load_catalog(
        store.fetch(container, config.polygons_blob),
        source_filename=config.polygons_blob,
        use_spatial_index=config.use_spatial_index,
    )

    records = match_coordinates(coordinates, catalog)
    report = build_report(records)

    store.store(container, config.report_blob, report.encode("utf-8"), REPORT_CONTENT_TYPE)

    logger.info(
        "Match run completed | matches=%d | coordinates=%d | polygons=%d | report=%s/%s | "
        "correlation_id=%s",
        len(records),
        len(coordinates),
        len(catalog),
        container,
        config.report_blob,
        correlation_id,
    )

    return MatchRunResult(
        match_count=len(records),
        coordinate_count=len(coordinates),
        polygon_count=len(catalog),
        report_blob=config.report_blob,
    )


def handle_request(
    store: BlobStore,
    config: MatcherConfig,
    *,
    correlation_id: str = "",
) -> MatchResponse:
    """Run the pipeline and translate the outcome for the HTTP caller.

    Returns:
        ``200`` with the number of results on success, ``500`` with the
        error message on any failure.
    """
    try:
        result = run_match_pipeline(store, config, correlation_id=correlation_id)
    except Exception as exc:
        if isinstance(exc, PipelineError):
            logger.exception(
                "Match run failed | error=%s | correlation_id=%s",
                exc.to_error_dict(),
                correlation_id,
            )
        else:
            logger.exception("Match run failed | correlation_id=%s", correlation_id)
        return error_response(exc)

    return MatchResponse(
        status_code=200,
        body=f"Success! {result.match_count} result(s) written to {result.report_blob}.",
    )


def error_response(exc: BaseException) -> MatchResponse:
    """Build the uniform failure response for *exc*."""
    return MatchResponse(status_code=500, body=f"Internal error: {exc}")
