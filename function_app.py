"""Azure Functions entry point for the Crop Plan Coordinate Matcher.

This module registers the HTTP trigger using the Python v2 programming
model.

All business logic lives in the crop_plan_matcher package. This file is
purely the wiring layer between the Azure Functions binding and
application code.
"""

from __future__ import annotations

import logging

import azure.functions as func

from crop_plan_matcher.core.blob_store import AzureBlobStore, get_blob_service_client
from crop_plan_matcher.core.config import MatcherConfig
from crop_plan_matcher.orchestrators.match_pipeline import error_response, handle_request

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("crop_plan_matcher.function_app")


# ---------------------------------------------------------------------------
# HTTP: Run a match
# ---------------------------------------------------------------------------


@app.function_name("process_coordinates")
@app.route(route="process-coordinates", methods=["GET", "POST"])
def process_coordinates(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    """Match the stored coordinates against the stored crop plan.

    The request carries no input; it only signals that a run should
    start.  Blob names come from app settings (see ``MatcherConfig``).

    Returns:
        ``200`` with the number of matches written to the report, or
        ``500`` with the error message if the run failed.
    """
    correlation_id = context.invocation_id or ""
    logger.info(
        "HTTP trigger fired | method=%s | correlation_id=%s",
        req.method,
        correlation_id,
    )

    try:
        config = MatcherConfig.from_env()
        store = AzureBlobStore(get_blob_service_client())
    except Exception as exc:
        logger.exception("Match run could not start | correlation_id=%s", correlation_id)
        response = error_response(exc)
    else:
        response = handle_request(store, config, correlation_id=correlation_id)

    return func.HttpResponse(
        response.body,
        status_code=response.status_code,
        mimetype="text/plain",
        charset="utf-8",
    )
