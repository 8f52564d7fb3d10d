"""
Error types for the image classification Lambda function.

Every failure raised while handling an invocation is a
ClassificationServiceError tagged with an ErrorKind. The request handler
flattens all of them into the same failure response; the kind only shows up
in logs.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Category of a classification failure."""
    VALIDATION = "validation_error"
    TRANSPORT = "transport_error"
    REMOTE_SERVICE = "remote_service_error"
    CONFIGURATION = "configuration_error"


class ClassificationServiceError(Exception):
    """Base exception for all handled failures."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> Optional[str]:
        # Picked up by StructuredLogger.log_error as error.code
        return self.kind.value if self.kind else None


class RequestValidationError(ClassificationServiceError):
    """Invocation payload is missing or malformed."""
    kind = ErrorKind.VALIDATION


class ImageFetchError(ClassificationServiceError):
    """Image could not be downloaded (DNS, connection, mid-stream I/O)."""
    kind = ErrorKind.TRANSPORT


class RemoteServiceError(ClassificationServiceError):
    """Rekognition call failed (auth, throttling, bad image, model not ready)."""
    kind = ErrorKind.REMOTE_SERVICE


class ConfigurationError(ClassificationServiceError):
    """Required environment configuration is missing or invalid."""
    kind = ErrorKind.CONFIGURATION
