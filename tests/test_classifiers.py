"""Tests for the Rekognition label adapters."""

import pytest
from botocore.stub import Stubber

from conftest import CUSTOM_MODEL_ARN, IMAGE_BYTES
from core.classifiers.rekognition_classifier import (
    detect_custom_labels,
    detect_default_labels,
    filter_labels,
)
from core.models import Label
from core.utils.errors import ErrorKind, RemoteServiceError


def _labels(*pairs):
    return [{"Name": name, "Confidence": confidence} for name, confidence in pairs]


# ──────────────────────────────────────────────
# DetectLabels
# ──────────────────────────────────────────────
def test_default_labels_request_parameters(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_response(
            "detect_labels",
            {"Labels": _labels(("Cat", 92.0))},
            expected_params={
                "Image": {"Bytes": IMAGE_BYTES},
                "MaxLabels": 10,
                "MinConfidence": 0.65 * 100,
            },
        )
        detect_default_labels(rekognition_client, IMAGE_BYTES, min_confidence=0.65)
        stubber.assert_no_pending_responses()


def test_default_labels_refiltered_locally(rekognition_client) -> None:
    # Service returned a label below the threshold it was given
    with Stubber(rekognition_client) as stubber:
        stubber.add_response("detect_labels", {"Labels": _labels(("Cat", 92.0), ("Animal", 55.0), ("Pet", 65.0))})
        predictions = detect_default_labels(rekognition_client, IMAGE_BYTES, min_confidence=0.65)

    assert [(p.tagName, p.probability, p.source) for p in predictions] == [
        ("Cat", 0.92, "default"),
        ("Pet", 0.65, "default"),
    ]


def test_default_labels_keep_service_order(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_response("detect_labels", {"Labels": _labels(("Whiskers", 70.0), ("Cat", 99.0), ("Mammal", 80.0))})
        predictions = detect_default_labels(rekognition_client, IMAGE_BYTES, min_confidence=0.5)

    assert [p.tagName for p in predictions] == ["Whiskers", "Cat", "Mammal"]


def test_default_labels_error_propagates(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_client_error(
            "detect_labels",
            service_error_code="InvalidImageFormatException",
            service_message="Request has invalid image format",
            http_status_code=400,
        )
        with pytest.raises(RemoteServiceError) as exc_info:
            detect_default_labels(rekognition_client, IMAGE_BYTES, min_confidence=0.65)

    assert "Request has invalid image format" in str(exc_info.value)
    assert exc_info.value.kind is ErrorKind.REMOTE_SERVICE


# ──────────────────────────────────────────────
# DetectCustomLabels
# ──────────────────────────────────────────────
def test_custom_labels_request_parameters(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_response(
            "detect_custom_labels",
            {"CustomLabels": _labels(("Siamese", 80.0))},
            expected_params={
                "ProjectVersionArn": CUSTOM_MODEL_ARN,
                "Image": {"Bytes": IMAGE_BYTES},
                "MinConfidence": 0.7 * 100,
            },
        )
        predictions = detect_custom_labels(
            rekognition_client, IMAGE_BYTES, model_arn=CUSTOM_MODEL_ARN, min_confidence=0.7
        )
        stubber.assert_no_pending_responses()

    assert len(predictions) == 1
    assert predictions[0].model_dump() == {"probability": 0.8, "tagName": "Siamese", "source": "custom"}


def test_custom_labels_refiltered_locally(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_response("detect_custom_labels", {"CustomLabels": _labels(("Siamese", 80.0), ("Persian", 40.0))})
        predictions = detect_custom_labels(
            rekognition_client, IMAGE_BYTES, model_arn=CUSTOM_MODEL_ARN, min_confidence=0.65
        )

    assert [p.tagName for p in predictions] == ["Siamese"]


def test_custom_model_not_ready_is_remote_error(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_client_error(
            "detect_custom_labels",
            service_error_code="ResourceNotReadyException",
            service_message="ProjectVersion is not running",
            http_status_code=400,
        )
        with pytest.raises(RemoteServiceError, match="ProjectVersion is not running"):
            detect_custom_labels(rekognition_client, IMAGE_BYTES, model_arn=CUSTOM_MODEL_ARN, min_confidence=0.65)


def test_custom_labels_empty_response(rekognition_client) -> None:
    with Stubber(rekognition_client) as stubber:
        stubber.add_response("detect_custom_labels", {"CustomLabels": []})
        assert detect_custom_labels(
            rekognition_client, IMAGE_BYTES, model_arn=CUSTOM_MODEL_ARN, min_confidence=0.65
        ) == []


# ──────────────────────────────────────────────
# Local filter
# ──────────────────────────────────────────────
def test_filter_threshold_above_one_excludes_everything() -> None:
    labels = [Label("Cat", 1.0), Label("Dog", 0.99)]
    assert filter_labels(labels, 1.01) == []


def test_filter_threshold_of_one_keeps_only_full_confidence() -> None:
    # Comparison is >=, so a label at exactly 100% survives a threshold of 1.0
    labels = [Label("Cat", 1.0), Label("Dog", 0.99)]
    assert filter_labels(labels, 1.0) == [Label("Cat", 1.0)]


def test_filter_threshold_at_or_below_zero_keeps_everything() -> None:
    labels = [Label("Cat", 0.0), Label("Dog", 0.2)]
    assert filter_labels(labels, 0.0) == labels
