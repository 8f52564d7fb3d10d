import importlib
import sys

import boto3
import pytest

from core.utils.config import Settings

CUSTOM_MODEL_ARN = (
    "arn:aws:rekognition:eu-west-2:123456789012:project/cat-breeds/version/"
    "cat-breeds.2024-05-01T10.00.00/1714557600000"
)
IMAGE_URL = "https://example.com/cat.jpg"
IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-bytes"


@pytest.fixture
def settings():
    return Settings(custom_model_arn=CUSTOM_MODEL_ARN)


@pytest.fixture
def rekognition_client():
    return boto3.client(
        "rekognition",
        region_name="eu-west-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def lambda_env(monkeypatch):
    monkeypatch.setenv("CUSTOM_MODEL_ARN", CUSTOM_MODEL_ARN)
    monkeypatch.setenv("AWS_REGION", "eu-west-2")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.delenv("MIN_CONFIDENCE_DEFAULT", raising=False)
    monkeypatch.delenv("MIN_CONFIDENCE_CUSTOM", raising=False)
    monkeypatch.delenv("PARALLEL_CLASSIFICATION", raising=False)


@pytest.fixture
def import_index():
    """Import index.py fresh so its module-level setup runs against the current env."""
    def _import():
        sys.modules.pop("index", None)
        return importlib.import_module("index")

    yield _import
    sys.modules.pop("index", None)
