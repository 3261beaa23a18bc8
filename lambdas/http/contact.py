"""Accept a contact form submission."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from backend.envelope import ResponseEnvelope
from backend.errors import MessageBag
from backend.models import ContactMessage
from lambdas.common.event import EventInput
from lambdas.common.resp import envelope_response, error_response

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], _context: Any) -> dict[str, Any]:
    """Lambda entry point for /contact."""

    method = event.get("requestContext", {}).get("http", {}).get("method")
    if method and method != "POST":
        return error_response("Method not allowed", status_code=405)

    inputs = EventInput(event)

    try:
        message = ContactMessage.model_validate(inputs.all())
    except ValidationError as exc:
        errors = MessageBag.from_validation_error(exc)
        logger.info("Rejected contact message with %d error(s)", len(errors))
        envelope = (
            ResponseEnvelope.fail("Invalid request", input_source=inputs)
            .with_input()
            .with_errors(errors)
        )
        return envelope_response(envelope, status_code=422)

    logger.debug("Accepted contact message from %s", message.email)
    envelope = ResponseEnvelope.success("Message received").with_field("contact", message.model_dump())
    return envelope_response(envelope, status_code=200)
