"""
Structured Logger - JSON lifecycle logs for the image classification function.

Every event is printed as one JSON object on stdout, which CloudWatch Logs
captures line by line.

Usage:
    from structured_logger import StructuredLogger

    logger = StructuredLogger(layer="ifl", service_name="image-classification")

    def lambda_handler(event, context):
        req_ctx = logger.start_request(event, context)

        try:
            # ... your code ...
            logger.log_response(req_ctx, status_code=200)
            return response
        except Exception as e:
            logger.log_error(req_ctx, e, status_code=500)
            raise
"""

import json
import os
import random
import re
import string
import time
import traceback
from datetime import datetime, timezone
from typing import Optional, Dict, Any

LOG_SCHEMA_VERSION = 2.1

# Stack traces are cut to this many characters
MAX_STACK_LENGTH = 1000


def normalize_route(method: str, path: str) -> str:
    """Normalize route by replacing dynamic segments with placeholders."""
    if not path:
        return f"{method} /" if method else "/"

    patterns = [
        # UUIDs
        (r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", "/{id}"),
        # Numeric IDs
        (r"/\d+(?=/|$)", "/{id}"),
    ]

    normalized = path
    for pattern, replacement in patterns:
        normalized = re.sub(pattern, replacement, normalized, flags=re.IGNORECASE)

    return f"{method} {normalized}" if method else normalized


class StructuredLogger:
    """
    Emits REQUEST / RESPONSE / ERROR / METRIC / DEBUG events as JSON.

    A request context dict is created by start_request and passed to every
    other call for the same invocation.
    """

    def __init__(self, layer: str = "ifl", service_name: Optional[str] = None):
        """
        Args:
            layer: Service layer identifier
            service_name: Name of the service (e.g., "image-classification")
        """
        self.layer = layer
        self.service_name = service_name

    def start_request(self, event: Optional[dict], context: Any = None) -> dict:
        """
        Start tracking a request. Call this at the beginning of your handler.

        Works for both direct invocations (no HTTP fields) and API Gateway
        proxy events.

        Args:
            event: Lambda event object
            context: Lambda context object (optional)

        Returns:
            Request context dict to pass to log_response or log_error
        """
        event = event if isinstance(event, dict) else {}
        request_context = event.get("requestContext") or {}
        headers = event.get("headers") or {}

        request_id = (
            request_context.get("requestId") or
            getattr(context, "aws_request_id", None) or
            headers.get("x-request-id") or
            headers.get("X-Request-Id") or
            self._generate_id("req")
        )

        correlation_id = (
            headers.get("x-correlation-id") or
            headers.get("X-Correlation-Id") or
            self._generate_id("corr")
        )

        method = event.get("httpMethod", "") or request_context.get("http", {}).get("method", "")
        path = event.get("path", "") or request_context.get("http", {}).get("path", "")
        invocation_type = "api_gateway" if "body" in event or method else "direct"

        ctx = {
            "request_id": request_id,
            "correlation_id": correlation_id,
            "method": method,
            "path": path,
            "route": f"{method} {path}".strip() or None,
            "route_normalized": normalize_route(method, path) if path else None,
            "layer": self.layer,
            "service_name": self.service_name,
            "function_name": getattr(context, "function_name", None),
            "invocation_type": invocation_type,
            "start_time": time.time(),
        }

        self._emit("REQUEST", ctx, {"invocationType": invocation_type})

        return ctx

    def log_response(
        self,
        ctx: dict,
        status_code: int = 200,
        count: Optional[int] = None,
    ):
        """
        Log a successful response.

        Args:
            ctx: Request context from start_request
            status_code: HTTP status code
            count: Optional number of predictions returned
        """
        extra = {
            "statusCode": status_code,
            "durationMs": self._duration_ms(ctx),
        }

        if count is not None:
            extra["count"] = count

        self._emit("RESPONSE", ctx, extra)

    def log_error(
        self,
        ctx: dict,
        error: Exception,
        status_code: int = 500,
    ):
        """
        Log an error.

        Args:
            ctx: Request context from start_request
            error: The exception that occurred
            status_code: HTTP status code
        """
        stack_trace = traceback.format_exc()
        if len(stack_trace) > MAX_STACK_LENGTH:
            stack_trace = stack_trace[:MAX_STACK_LENGTH]

        self._emit("ERROR", ctx, {
            "statusCode": status_code,
            "durationMs": self._duration_ms(ctx),
            "error": {
                "message": str(error),
                "name": type(error).__name__,
                "stack": stack_trace,
                "code": getattr(error, "code", None),
            },
        })

    def log_metric(
        self,
        ctx: dict,
        metric_name: str,
        value: float,
        unit: str = "Count",
    ):
        """
        Log a custom metric.

        Args:
            ctx: Request context from start_request
            metric_name: Name of the metric
            value: Metric value
            unit: Unit of measurement
        """
        self._emit("METRIC", ctx, {
            "metricName": metric_name,
            "value": value,
            "unit": unit,
        })

    def debug(self, message: str, data: Optional[Dict[str, Any]] = None, ctx: Optional[dict] = None):
        """Log debug information. Only emitted when LOG_LEVEL=DEBUG."""
        if os.environ.get("LOG_LEVEL", "INFO").upper() != "DEBUG":
            return

        extra = {"message": message}
        if data:
            extra.update(data)

        self._emit("DEBUG", ctx or {"request_id": None}, extra)

    def _emit(self, log_type: str, ctx: dict, extra: Optional[Dict[str, Any]] = None):
        payload = {
            "schemaVersion": LOG_SCHEMA_VERSION,
            "logType": log_type,
            "ts": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "requestId": ctx.get("request_id"),
            "correlationId": ctx.get("correlation_id"),
            "layer": ctx.get("layer", self.layer),
            "serviceName": ctx.get("service_name", self.service_name),
            "functionName": ctx.get("function_name"),
            "route": ctx.get("route"),
            "routeNormalized": ctx.get("route_normalized"),
        }

        if extra:
            payload.update(extra)

        # Print as JSON (CloudWatch will capture this)
        print(json.dumps(payload, default=str))

    @staticmethod
    def _duration_ms(ctx: dict) -> int:
        return int((time.time() - ctx.get("start_time", time.time())) * 1000)

    @staticmethod
    def _generate_id(prefix: str) -> str:
        random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=9))
        return f"{prefix}_{int(time.time() * 1000)}_{random_suffix}"
