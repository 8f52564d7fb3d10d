"""
Request handler for image classification invocations.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from structured_logger import StructuredLogger
from core.models import ErrorResponse, parse_request
from core.pipeline import run_classification
from core.utils.config import Settings
from core.utils.responses import FAILURE_STATUS_CODE, SUCCESS_STATUS_CODE, create_response, parse_body

logger = logging.getLogger(__name__)
structured_logger = StructuredLogger(layer="ifl", service_name="image-classification")


def handle_classification(
    req_ctx: dict,
    event: Dict[str, Any],
    settings: Settings,
    rekognition_client,
    fetch_image: Optional[Callable[[str], bytes]] = None,
) -> Dict[str, Any]:
    """
    Classify the image referenced by an invocation event.

    Every failure (invalid input, image download, Rekognition) is logged and
    returned as the same failure envelope carrying the error message.

    Args:
        req_ctx: Request context from StructuredLogger.start_request
        event: Lambda event (direct payload or API Gateway proxy event)
        settings: Process-wide settings
        rekognition_client: boto3 Rekognition client
        fetch_image: Optional image fetcher override

    Returns:
        Lambda response dictionary
    """
    request_start_time = time.time()

    try:
        request = parse_request(parse_body(event))
        structured_logger.debug("Parsed classification request", {"imageUrl": request.imageUrl}, req_ctx)
        logger.info(f"Classification request for image: {request.imageUrl}")

        result = run_classification(request, settings, rekognition_client, fetch_image=fetch_image)

        structured_logger.log_metric(req_ctx, "ImageBytes", result.image_size, unit="Bytes")
        structured_logger.log_metric(req_ctx, "DefaultPredictions", len(result.default_predictions))
        structured_logger.log_metric(req_ctx, "CustomPredictions", len(result.custom_predictions))

        body = result.to_response()
        elapsed = time.time() - request_start_time
        logger.info(f"Classification request completed in {elapsed:.2f}s with {len(body.predictions)} predictions")

        response = create_response(SUCCESS_STATUS_CODE, body)
        structured_logger.log_response(req_ctx, status_code=SUCCESS_STATUS_CODE, count=len(body.predictions))
        return response

    except Exception as e:
        error_kind = getattr(e, "code", None) or type(e).__name__
        logger.error(f"Classification request failed ({error_kind}): {str(e)}")
        structured_logger.log_error(req_ctx, e, status_code=FAILURE_STATUS_CODE)
        return create_response(FAILURE_STATUS_CODE, ErrorResponse(error=str(e)))
