"""Tests for structured JSON lifecycle logs."""

import json
from types import SimpleNamespace

from structured_logger import StructuredLogger, normalize_route
from core.utils.errors import ClassificationServiceError, RemoteServiceError


def _emitted(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]


def test_direct_invocation_uses_lambda_request_id(capsys) -> None:
    slog = StructuredLogger(service_name="image-classification")
    context = SimpleNamespace(aws_request_id="abc-123", function_name="classify")

    ctx = slog.start_request({"imageUrl": "https://example.com/cat.jpg"}, context)
    slog.log_response(ctx, status_code=200, count=2)

    request_log, response_log = _emitted(capsys)
    assert request_log["logType"] == "REQUEST"
    assert request_log["requestId"] == "abc-123"
    assert request_log["invocationType"] == "direct"
    assert request_log["functionName"] == "classify"
    assert response_log["logType"] == "RESPONSE"
    assert response_log["statusCode"] == 200
    assert response_log["count"] == 2


def test_api_gateway_request_id_preferred(capsys) -> None:
    slog = StructuredLogger()
    event = {
        "httpMethod": "POST",
        "path": "/classify",
        "requestContext": {"requestId": "apigw-1"},
        "headers": {"x-correlation-id": "corr-9"},
        "body": "{}",
    }

    ctx = slog.start_request(event, SimpleNamespace(aws_request_id="lambda-1"))

    request_log = _emitted(capsys)[0]
    assert ctx["request_id"] == "apigw-1"
    assert request_log["correlationId"] == "corr-9"
    assert request_log["route"] == "POST /classify"
    assert request_log["invocationType"] == "api_gateway"


def test_error_log_carries_error_kind(capsys) -> None:
    slog = StructuredLogger()
    ctx = slog.start_request({})

    slog.log_error(ctx, RemoteServiceError("Rate exceeded"), status_code=500)

    error_log = _emitted(capsys)[-1]
    assert error_log["logType"] == "ERROR"
    assert error_log["error"]["message"] == "Rate exceeded"
    assert error_log["error"]["name"] == "RemoteServiceError"
    assert error_log["error"]["code"] == "remote_service_error"


def test_generated_request_id_when_none_available() -> None:
    ctx = StructuredLogger().start_request(None)
    assert ctx["request_id"].startswith("req_")
    assert ctx["correlation_id"].startswith("corr_")


def test_debug_only_emitted_at_debug_level(capsys, monkeypatch) -> None:
    slog = StructuredLogger()

    monkeypatch.setenv("LOG_LEVEL", "INFO")
    slog.debug("hidden")
    assert _emitted(capsys) == []

    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    slog.debug("shown", {"bytes": 10})
    debug_log = _emitted(capsys)[0]
    assert debug_log["logType"] == "DEBUG"
    assert debug_log["bytes"] == 10


def test_normalize_route() -> None:
    assert normalize_route("GET", "/images/123") == "GET /images/{id}"
    assert normalize_route("", "") == "/"


def test_untagged_error_logged_without_code(capsys) -> None:
    slog = StructuredLogger()
    ctx = slog.start_request({})

    slog.log_error(ctx, ClassificationServiceError("something odd"))

    error_log = _emitted(capsys)[-1]
    assert error_log["error"]["name"] == "ClassificationServiceError"
    assert error_log["error"]["code"] is None
