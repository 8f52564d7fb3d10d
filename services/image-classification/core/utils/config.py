"""
Configuration for the Lambda function.

Settings are read from environment variables once, at cold start, and never
re-read or mutated afterwards.
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from core.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default minimum confidence (0-1) for both label sources
DEFAULT_MIN_CONFIDENCE = 0.65

# Rekognition caps DetectLabels at this many labels per call
DEFAULT_MAX_LABELS = 10

DEFAULT_AWS_REGION = "eu-west-2"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process-wide immutable configuration."""
    custom_model_arn: str
    min_confidence_default: float = DEFAULT_MIN_CONFIDENCE
    min_confidence_custom: float = DEFAULT_MIN_CONFIDENCE
    max_labels: int = DEFAULT_MAX_LABELS
    aws_region: str = DEFAULT_AWS_REGION
    parallel_classification: bool = False


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'")


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Thresholds are not range-checked: a value >= 1 filters out every label
    and a value <= 0 keeps every label the service returns.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If CUSTOM_MODEL_ARN is missing or a numeric
            variable cannot be parsed
    """
    env = os.environ if env is None else env

    custom_model_arn = (env.get("CUSTOM_MODEL_ARN") or "").strip()
    if not custom_model_arn:
        raise ConfigurationError("CUSTOM_MODEL_ARN environment variable is required")

    settings = Settings(
        custom_model_arn=custom_model_arn,
        min_confidence_default=_read_float(env, "MIN_CONFIDENCE_DEFAULT", DEFAULT_MIN_CONFIDENCE),
        min_confidence_custom=_read_float(env, "MIN_CONFIDENCE_CUSTOM", DEFAULT_MIN_CONFIDENCE),
        max_labels=_read_int(env, "MAX_LABELS", DEFAULT_MAX_LABELS),
        aws_region=env.get("AWS_REGION") or DEFAULT_AWS_REGION,
        parallel_classification=(env.get("PARALLEL_CLASSIFICATION") or "").strip().lower() in _TRUE_VALUES,
    )

    logger.info(
        f"Loaded settings - region: {settings.aws_region}, "
        f"min_confidence_default: {settings.min_confidence_default}, "
        f"min_confidence_custom: {settings.min_confidence_custom}, "
        f"max_labels: {settings.max_labels}, parallel: {settings.parallel_classification}"
    )
    return settings
