"""Sources of the submitted request parameters echoed under ``input``."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from fastapi import Request
from starlette.datastructures import UploadFile

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@runtime_checkable
class InputSource(Protocol):
    def all(self) -> dict[str, Any]: ...


class StaticInput:
    """Input source over an already known mapping."""

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self._params = dict(params or {})

    def all(self) -> dict[str, Any]:
        return dict(self._params)


class RequestInput(StaticInput):
    """Snapshot of query parameters merged with the request body.

    Body values win over query values with the same name. Reading the body is
    asynchronous, so the snapshot is taken up front and :meth:`all` stays a
    plain synchronous read.
    """

    @classmethod
    def from_parts(cls, query: Mapping[str, Any] | None, body: Any = None) -> RequestInput:
        params = dict(query or {})
        params.update(_normalize_body(body))
        return cls(params)

    @classmethod
    async def from_request(cls, request: Request) -> RequestInput:
        content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

        body: Any = None
        if content_type in _FORM_CONTENT_TYPES:
            body = await request.form()
        else:
            raw = await request.body()
            if raw:
                try:
                    body = json.loads(raw)
                except (json.JSONDecodeError, UnicodeDecodeError):
                    logger.debug("Ignoring undecodable request body for %s", request.url.path)

        return cls.from_parts(request.query_params, body)


def _normalize_body(body: Any) -> dict[str, Any]:
    if not isinstance(body, Mapping):
        return {}
    return {
        str(key): value.filename if isinstance(value, UploadFile) else value
        for key, value in body.items()
    }


async def get_request_input(request: Request) -> RequestInput:
    """FastAPI dependency returning the submitted parameters of ``request``."""

    return await RequestInput.from_request(request)
