"""
Classification pipeline.

fetch image -> DetectLabels -> DetectCustomLabels -> merge

Both Rekognition calls are independent. By default they run one after the
other; with Settings.parallel_classification they are submitted together to
a two-worker thread pool and joined before merging. The merged order is the
same either way.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from core.classifiers.rekognition_classifier import detect_custom_labels, detect_default_labels
from core.models import ClassificationRequest, Prediction, PredictionsResponse
from core.utils.config import Settings
from core.utils.image_service import fetch_image_bytes

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Typed intermediate results of one pipeline run."""
    image_size: int
    default_predictions: List[Prediction] = field(default_factory=list)
    custom_predictions: List[Prediction] = field(default_factory=list)

    def to_response(self) -> PredictionsResponse:
        return PredictionsResponse(
            predictions=merge_predictions(self.default_predictions, self.custom_predictions)
        )


def merge_predictions(
    default_predictions: List[Prediction],
    custom_predictions: List[Prediction],
) -> List[Prediction]:
    """Default-source predictions first, then custom, each in service order. No dedup."""
    return list(default_predictions) + list(custom_predictions)


def run_classification(
    request: ClassificationRequest,
    settings: Settings,
    rekognition_client,
    fetch_image: Optional[Callable[[str], bytes]] = None,
) -> PipelineResult:
    """
    Run the full pipeline for one request.

    Args:
        request: Validated request
        settings: Process-wide settings
        rekognition_client: boto3 Rekognition client
        fetch_image: Image fetcher (defaults to fetch_image_bytes)

    Returns:
        PipelineResult with per-source predictions

    Raises:
        ImageFetchError: If the image cannot be downloaded
        RemoteServiceError: If either Rekognition call fails
    """
    fetch_image = fetch_image or fetch_image_bytes
    start_time = time.time()

    image_bytes = fetch_image(request.imageUrl)

    def classify_default() -> List[Prediction]:
        return detect_default_labels(
            rekognition_client,
            image_bytes,
            min_confidence=settings.min_confidence_default,
            max_labels=settings.max_labels,
        )

    def classify_custom() -> List[Prediction]:
        return detect_custom_labels(
            rekognition_client,
            image_bytes,
            model_arn=settings.custom_model_arn,
            min_confidence=settings.min_confidence_custom,
        )

    if settings.parallel_classification:
        with ThreadPoolExecutor(max_workers=2) as executor:
            default_future = executor.submit(classify_default)
            custom_future = executor.submit(classify_custom)
            # Default first so its error wins when both fail
            default_predictions = default_future.result()
            custom_predictions = custom_future.result()
    else:
        default_predictions = classify_default()
        custom_predictions = classify_custom()

    elapsed = time.time() - start_time
    logger.info(
        f"Classification completed in {elapsed:.2f}s - "
        f"default: {len(default_predictions)}, custom: {len(custom_predictions)}"
    )

    return PipelineResult(
        image_size=len(image_bytes),
        default_predictions=default_predictions,
        custom_predictions=custom_predictions,
    )
