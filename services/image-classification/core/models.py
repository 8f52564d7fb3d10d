"""
Request and response records for the classification function.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.utils.errors import RequestValidationError

PredictionSource = Literal["default", "custom"]


class ClassificationRequest(BaseModel):
    """Inbound invocation payload."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    imageUrl: str = Field(min_length=1, description="URL of the image to classify")


@dataclass(frozen=True)
class Label:
    """A label returned by a Rekognition call, confidence normalized to 0-1."""
    name: str
    confidence: float


class Prediction(BaseModel):
    probability: float
    tagName: str
    source: PredictionSource

    @classmethod
    def from_label(cls, label: Label, source: PredictionSource) -> "Prediction":
        return cls(probability=label.confidence, tagName=label.name, source=source)


class PredictionsResponse(BaseModel):
    predictions: List[Prediction] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str


def parse_request(payload: Any) -> ClassificationRequest:
    """
    Validate an invocation payload.

    Args:
        payload: Parsed JSON payload

    Returns:
        ClassificationRequest

    Raises:
        RequestValidationError: If the payload is not an object or imageUrl is
            missing, empty, or not a string
    """
    if not isinstance(payload, dict):
        raise RequestValidationError("Request payload must be a JSON object")

    if payload.get("imageUrl") is None or (
        isinstance(payload.get("imageUrl"), str) and not payload["imageUrl"].strip()
    ):
        raise RequestValidationError("Missing required field 'imageUrl'")

    try:
        return ClassificationRequest.model_validate(payload)
    except ValidationError as e:
        details: List[Dict[str, Any]] = e.errors()
        reason = details[0]["msg"] if details else str(e)
        raise RequestValidationError(f"Invalid field 'imageUrl': {reason}")
