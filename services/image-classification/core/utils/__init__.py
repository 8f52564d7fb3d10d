"""
Utility modules for Lambda function.

This package contains Lambda-specific utilities for:
- Configuration loading
- Error types
- Image download
- HTTP response handling
"""
