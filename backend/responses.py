"""Starlette integration for :class:`ResponseEnvelope`.

The envelope itself knows nothing about HTTP; ``EnvelopeResponse`` hands its
compiled payload to Starlette's JSON rendering, and the exception handlers
render framework errors in the same envelope shape as regular responses.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.background import BackgroundTask
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Receive, Scope, Send

from backend.envelope import ResponseEnvelope
from backend.errors import MessageBag
from backend.inputs import RequestInput

logger = logging.getLogger(__name__)

_BODYLESS_STATUSES = {204, 304}


class EnvelopeResponse(JSONResponse):
    """JSON response whose body is a compiled envelope.

    The body is rendered when the response is created and again when it is
    sent, so configuration applied in between is not lost.
    """

    def __init__(
        self,
        envelope: ResponseEnvelope,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        background: BackgroundTask | None = None,
    ) -> None:
        self.envelope = envelope
        super().__init__(content=None, status_code=status_code, headers=headers, background=background)

    def render(self, content: Any) -> bytes:
        return super().render(jsonable_encoder(self.envelope.get_data()))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.body = self.render(None)
        self.headers["content-length"] = str(len(self.body))
        await super().__call__(scope, receive, send)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> EnvelopeResponse:
    errors = MessageBag.from_errors(exc.errors())
    logger.info("Rejected %s %s with %d validation error(s)", request.method, request.url.path, len(errors))

    inputs = RequestInput.from_parts(request.query_params, exc.body)
    envelope = ResponseEnvelope.fail("Invalid request", input_source=inputs).with_errors(errors)
    if getattr(request.app.state, "echo_input_on_error", True):
        envelope.with_input()

    return EnvelopeResponse(envelope, status_code=422)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    logger.info("%s %s answered %d: %s", request.method, request.url.path, exc.status_code, exc.detail)
    headers = getattr(exc, "headers", None)
    if exc.status_code in _BODYLESS_STATUSES:
        return Response(status_code=exc.status_code, headers=headers)
    return EnvelopeResponse(
        ResponseEnvelope.fail(str(exc.detail)),
        status_code=exc.status_code,
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
