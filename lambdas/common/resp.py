"""HTTP response helpers for Lambda proxy integrations."""

from __future__ import annotations

import json
from typing import Any, Mapping

from backend.envelope import ResponseEnvelope

_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
}


def json_response(
    payload: Mapping[str, Any] | None,
    *,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return a JSON response compatible with API Gateway Lambda proxy."""

    body = "" if payload is None else json.dumps(payload, ensure_ascii=False)

    merged_headers = dict(_DEFAULT_HEADERS)
    if headers:
        merged_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": merged_headers,
        "body": body,
    }


def envelope_response(
    envelope: ResponseEnvelope,
    *,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Compile ``envelope`` into a Lambda proxy response."""

    return json_response(envelope.get_data(), status_code=status_code, headers=headers)


def error_response(message: str, *, status_code: int = 400) -> dict[str, Any]:
    """Return a failure envelope carrying ``message``."""

    return envelope_response(ResponseEnvelope.fail(message), status_code=status_code)
