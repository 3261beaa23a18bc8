"""Submitted parameters of an API Gateway proxy event."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any
from urllib.parse import parse_qsl

logger = logging.getLogger(__name__)


def _header(event: dict[str, Any], name: str) -> str:
    headers = event.get("headers") or {}
    for key, value in headers.items():
        if key.lower() == name:
            return value or ""
    return ""


def _raw_body(event: dict[str, Any]) -> str:
    body = event.get("body") or ""
    if not event.get("isBase64Encoded"):
        return body
    try:
        return base64.b64decode(body).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        logger.debug("Ignoring undecodable base64 body")
        return ""


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """Return the event body as a dict, or an empty dict if it is not an object."""

    raw = _raw_body(event)
    if not raw:
        return {}

    content_type = _header(event, "content-type").split(";")[0].strip().lower()
    if content_type == "application/x-www-form-urlencoded":
        return dict(parse_qsl(raw, keep_blank_values=True))

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring non-JSON body")
        return {}
    return payload if isinstance(payload, dict) else {}


class EventInput:
    """Input source merging ``queryStringParameters`` with the request body."""

    def __init__(self, event: dict[str, Any]) -> None:
        self._event = event

    def all(self) -> dict[str, Any]:
        params = dict(self._event.get("queryStringParameters") or {})
        params.update(parse_body(self._event))
        return params
