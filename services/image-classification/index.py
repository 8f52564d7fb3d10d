"""
Main entry point for the image classification Lambda function.

Downloads the image at 'imageUrl' and classifies it with Amazon Rekognition
DetectLabels and a Rekognition Custom Labels model, returning one merged,
confidence-filtered list of predictions.

INVOCATION:
    Direct:       {"imageUrl": "https://example.com/cat.jpg"}
    API Gateway:  POST with the same JSON object as the request body

RESPONSE:
    200  {"predictions": [{"probability": 0.92, "tagName": "Cat", "source": "default"}, ...]}
    500  {"error": "<message>"}

Settings and the Rekognition client are created once per container, at
import. A missing CUSTOM_MODEL_ARN fails the import, so no request is served.
"""

import logging
import os
import time

import boto3

from structured_logger import StructuredLogger
from core.handlers import handle_classification
from core.utils.config import load_settings

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize structured logger for metrics (REQUEST/RESPONSE/ERROR lifecycle events)
structured_logger = StructuredLogger(layer="ifl", service_name="image-classification")

SETTINGS = load_settings()
rekognition_client = boto3.client("rekognition", region_name=SETTINGS.aws_region)

logger.info(f"Image classification configured - custom model: {SETTINGS.custom_model_arn}")


def lambda_handler(event, context):
    """
    Main Lambda handler function.
    """
    request_start_time = time.time()
    request_id = getattr(context, "aws_request_id", None) or "unknown"

    req_ctx = structured_logger.start_request(event, context)
    logger.info(f"Lambda invocation started - Request ID: {request_id}")

    try:
        return handle_classification(req_ctx, event, SETTINGS, rekognition_client)
    finally:
        total_elapsed = time.time() - request_start_time
        logger.info(f"Lambda invocation completed in {total_elapsed:.2f}s - Request ID: {request_id}")
