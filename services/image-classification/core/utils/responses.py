"""
HTTP response utilities for Lambda function.
"""

import json
import logging
from typing import Dict, Any, Optional

from pydantic import BaseModel

from core.utils.errors import RequestValidationError

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODE = 200
FAILURE_STATUS_CODE = 500


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract the request payload from a Lambda event.

    Direct invocations carry the payload as the event itself. API Gateway
    proxy events carry it in 'body', either as a JSON string or already parsed.

    Args:
        event: Lambda event dictionary

    Returns:
        Payload dictionary, or empty dict if there is none

    Raises:
        RequestValidationError: If the body is not valid JSON
    """
    if not isinstance(event, dict):
        logger.warning(f"Unexpected event type: {type(event)}")
        return {}

    if "body" not in event:
        return event

    body = event.get("body")
    if not body:
        return {}

    # Handle string body (API Gateway)
    if isinstance(body, str):
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON body: {str(e)}")
            raise RequestValidationError(f"Invalid JSON in request body: {str(e)}")

    # Handle already-parsed body
    if isinstance(body, dict):
        return body

    logger.warning(f"Unexpected body type: {type(body)}")
    return {}


def create_response(
    status_code: int,
    body: BaseModel,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create Lambda response.

    Args:
        status_code: HTTP status code
        body: Response record (serialized to a JSON string)
        headers: Optional response headers

    Returns:
        Lambda response dictionary with statusCode, headers and body
    """
    default_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
        "Access-Control-Allow-Methods": "POST,OPTIONS"
    }

    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": json.dumps(body.model_dump(mode="json"), separators=(",", ":"))
    }
