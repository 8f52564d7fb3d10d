#!/usr/bin/env python3
"""
Quick check - classify one image against a deployed endpoint or the local handler.

Usage:
    python quick_api_check.py --image-url https://example.com/cat.jpg --base-url https://...
    python quick_api_check.py --image-url https://example.com/cat.jpg --mode local

Reads STAGING_API_URL, API_KEY and (for local mode) CUSTOM_MODEL_ARN from
scripts/.env when present.
"""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")

DEFAULT_IMAGE_URL = "https://upload.wikimedia.org/wikipedia/commons/3/3a/Cat03.jpg"


def classify_via_api(base_url: str, api_key: str, image_url: str) -> dict:
    """Classify via HTTP API (API Gateway in front of the function)."""
    import requests

    response = requests.post(
        f"{base_url.rstrip('/')}/classify",
        json={"imageUrl": image_url},
        headers={"x-api-key": api_key} if api_key else {},
    )
    return {"status": response.status_code, "body": response.json() if response.ok else response.text}


def classify_via_local(image_url: str) -> dict:
    """Classify by calling lambda_handler directly with a direct-invocation event."""
    service_path = Path(__file__).parent.parent / "services" / "image-classification"
    sys.path.insert(0, str(service_path))

    from index import lambda_handler

    response = lambda_handler({"imageUrl": image_url}, None)
    return {"status": response["statusCode"], "body": json.loads(response["body"])}


def main() -> int:
    parser = argparse.ArgumentParser(description="Image classification quick check")
    parser.add_argument("--mode", "-m", default="api", choices=["api", "local"], help="Check mode")
    parser.add_argument("--image-url", "-i", default=DEFAULT_IMAGE_URL, help="Image URL to classify")
    parser.add_argument("--base-url", "-u", help="API base URL (or set STAGING_API_URL)")
    parser.add_argument("--api-key", "-k", help="API key (or set API_KEY)")
    args = parser.parse_args()

    print("=== IMAGE CLASSIFICATION QUICK CHECK ===")
    print(f"Mode: {args.mode}")
    print(f"Image: {args.image_url}\n")

    if args.mode == "local":
        result = classify_via_local(args.image_url)
    else:
        base_url = args.base_url or os.getenv("STAGING_API_URL")
        if not base_url:
            print("ERROR: Set --base-url or STAGING_API_URL in scripts/.env")
            return 1
        result = classify_via_api(base_url, args.api_key or os.getenv("API_KEY") or "", args.image_url)

    print(json.dumps(result, indent=2))
    return 0 if result["status"] == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
