"""
Amazon Rekognition adapters.

Two calls are wrapped here:

- DetectLabels: generic label detection, capped at max_labels results
- DetectCustomLabels: a trained Rekognition Custom Labels project version

Rekognition takes and reports confidence on a 0-100 scale; everything
returned from this module is normalized to 0-1. The threshold is sent to the
service as MinConfidence and then checked again locally with a strict >=
comparison, since the service's own filtering is not guaranteed to match it.
"""

import logging
from typing import Any, Dict, Iterable, List

from botocore.exceptions import BotoCoreError, ClientError

from core.models import Label, Prediction, PredictionSource
from core.utils.config import DEFAULT_MAX_LABELS
from core.utils.errors import RemoteServiceError

logger = logging.getLogger(__name__)


def _to_percent(min_confidence: float) -> float:
    return min_confidence * 100


def _parse_labels(raw_labels: Iterable[Dict[str, Any]]) -> List[Label]:
    """Convert Rekognition label dicts to Labels, keeping service order."""
    return [
        Label(name=raw["Name"], confidence=raw["Confidence"] / 100)
        for raw in raw_labels
    ]


def filter_labels(labels: Iterable[Label], min_confidence: float) -> List[Label]:
    """Keep labels with confidence >= min_confidence, preserving order."""
    return [label for label in labels if label.confidence >= min_confidence]


def to_predictions(labels: Iterable[Label], source: PredictionSource) -> List[Prediction]:
    return [Prediction.from_label(label, source) for label in labels]


def _remote_error(operation: str, error: Exception) -> RemoteServiceError:
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "Unknown")
        logger.error(f"Rekognition {operation} failed ({code}): {str(error)}")
    else:
        logger.error(f"Rekognition {operation} failed: {str(error)}")
    return RemoteServiceError(str(error))


def detect_default_labels(
    client,
    image_bytes: bytes,
    min_confidence: float,
    max_labels: int = DEFAULT_MAX_LABELS,
) -> List[Prediction]:
    """
    Classify an image with Rekognition DetectLabels.

    Args:
        client: boto3 Rekognition client
        image_bytes: Raw image content
        min_confidence: Threshold in 0-1
        max_labels: Maximum number of labels the service may return

    Returns:
        Predictions with source "default", in service order

    Raises:
        RemoteServiceError: If the Rekognition call fails
    """
    logger.info(f"Calling DetectLabels (max_labels={max_labels}, min_confidence={min_confidence})")
    try:
        response = client.detect_labels(
            Image={"Bytes": image_bytes},
            MaxLabels=max_labels,
            MinConfidence=_to_percent(min_confidence),
        )
    except (ClientError, BotoCoreError) as e:
        raise _remote_error("DetectLabels", e)

    labels = _parse_labels(response.get("Labels", []))
    kept = filter_labels(labels, min_confidence)
    logger.info(f"DetectLabels returned {len(labels)} labels, kept {len(kept)}")
    return to_predictions(kept, "default")


def detect_custom_labels(
    client,
    image_bytes: bytes,
    model_arn: str,
    min_confidence: float,
) -> List[Prediction]:
    """
    Classify an image with a Rekognition Custom Labels model.

    A model that is not running surfaces as a RemoteServiceError like any
    other service failure.

    Args:
        client: boto3 Rekognition client
        image_bytes: Raw image content
        model_arn: Project version ARN of the custom model
        min_confidence: Threshold in 0-1

    Returns:
        Predictions with source "custom", in service order

    Raises:
        RemoteServiceError: If the Rekognition call fails
    """
    logger.info(f"Calling DetectCustomLabels (model={model_arn}, min_confidence={min_confidence})")
    try:
        response = client.detect_custom_labels(
            ProjectVersionArn=model_arn,
            Image={"Bytes": image_bytes},
            MinConfidence=_to_percent(min_confidence),
        )
    except (ClientError, BotoCoreError) as e:
        raise _remote_error("DetectCustomLabels", e)

    labels = _parse_labels(response.get("CustomLabels", []))
    kept = filter_labels(labels, min_confidence)
    logger.info(f"DetectCustomLabels returned {len(labels)} labels, kept {len(kept)}")
    return to_predictions(kept, "custom")
