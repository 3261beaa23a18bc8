"""FastAPI application answering with JSON response envelopes."""

from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from backend import __version__
from backend.envelope import ResponseEnvelope
from backend.inputs import RequestInput, get_request_input
from backend.models import ContactMessage
from backend.responses import EnvelopeResponse, register_exception_handlers

logger = logging.getLogger(__name__)


def _parse_allowed_origins(raw_origins: str | None) -> list[str]:
    if not raw_origins:
        return ["*"]
    if raw_origins.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in raw_origins.split(",") if origin.strip()]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() == "true"


def _health_response() -> EnvelopeResponse:
    return EnvelopeResponse(ResponseEnvelope.success("Backend alive").with_field("version", __version__))


def app_factory() -> FastAPI:
    app = FastAPI(title="Envelope API", version=__version__)
    app.state.echo_input_on_error = _env_flag("ENVELOPE_ECHO_INPUT", True)

    parsed_origins = _parse_allowed_origins(os.environ.get("ALLOWED_ORIGINS"))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parsed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials="*" not in parsed_origins,
    )
    register_exception_handlers(app)

    @app.get("/health")
    async def health() -> EnvelopeResponse:
        return _health_response()

    @app.get("/healthz")
    async def healthz() -> EnvelopeResponse:
        return _health_response()

    @app.post("/contact")
    async def contact(
        message: ContactMessage,
        inputs: RequestInput = Depends(get_request_input),
    ) -> EnvelopeResponse:
        logger.debug("Accepted contact message from %s", message.email)
        envelope = (
            ResponseEnvelope.success("Message received", input_source=inputs)
            .with_input()
            .with_field("contact", message.model_dump())
        )
        return EnvelopeResponse(envelope)

    return app


app = app_factory()
handler = Mangum(app)
