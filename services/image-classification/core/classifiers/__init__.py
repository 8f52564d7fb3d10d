"""
Rekognition classifier adapters.
"""

from .rekognition_classifier import detect_default_labels, detect_custom_labels, filter_labels

__all__ = [
    "detect_default_labels",
    "detect_custom_labels",
    "filter_labels",
]
