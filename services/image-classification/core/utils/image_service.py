"""
Image service utilities for downloading images to classify.
"""

import logging
from typing import List, Optional

import requests

from core.utils.errors import ImageFetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def fetch_image_bytes(url: str, session: Optional[requests.Session] = None) -> bytes:
    """
    Download the full content addressed by a URL.

    The response status is not checked: a non-2xx body is returned as-is and
    left for Rekognition to reject as an invalid image.

    Args:
        url: Publicly fetchable image URL
        session: Optional requests session (defaults to module-level requests)

    Returns:
        Image bytes, chunks joined in arrival order

    Raises:
        ImageFetchError: If the connection or the stream fails
    """
    http = session or requests
    logger.info(f"Fetching image from: {url}")

    try:
        response = http.get(url, stream=True)
        try:
            if not 200 <= response.status_code < 300:
                logger.warning(f"Image fetch returned HTTP {response.status_code} for {url}, continuing with body")

            chunks: List[bytes] = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    chunks.append(chunk)
        finally:
            response.close()
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch image {url}: {str(e)}")
        raise ImageFetchError(f"Failed to fetch image {url}: {str(e)}")

    image_bytes = b"".join(chunks)
    logger.info(f"Fetched image {url} ({len(image_bytes)} bytes)")
    return image_bytes
