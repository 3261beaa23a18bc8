"""Uniform success/failure envelope for JSON responses.

Handlers build an envelope with one of the named constructors, configure it
with chained ``with_*`` calls and hand it to a transport adapter. The compiled
payload always carries ``success`` and ``message``; ``errors``/``error``,
``input`` and any extra fields appear only when asked for::

    ResponseEnvelope.fail("Invalid request").with_errors(["Name is required"]).with_field("code", 422)

Extra fields are merged last and may override any of the reserved keys.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from backend.errors import ErrorCollection, as_error_collection
from backend.inputs import InputSource

logger = logging.getLogger(__name__)


class ResponseEnvelope:
    def __init__(
        self,
        succeeded: bool,
        message: str = "",
        *,
        input_source: InputSource | None = None,
    ) -> None:
        self._succeeded = succeeded
        self._message = message
        self._input_source = input_source
        self._include_input = False
        self._include_errors = False
        self._errors: ErrorCollection = as_error_collection(None)
        self._extra: dict[str, Any] = {}

    @classmethod
    def success(cls, message: str = "", *, input_source: InputSource | None = None) -> ResponseEnvelope:
        return cls(True, message, input_source=input_source)

    @classmethod
    def fail(cls, message: str = "", *, input_source: InputSource | None = None) -> ResponseEnvelope:
        return cls(False, message, input_source=input_source)

    @property
    def succeeded(self) -> bool:
        return self._succeeded

    @property
    def message(self) -> str:
        return self._message

    def with_input(self) -> ResponseEnvelope:
        """Echo the submitted request parameters under ``input``."""

        self._include_input = True
        return self

    def with_errors(self, errors: ErrorCollection | Sequence[str]) -> ResponseEnvelope:
        """Replace the stored errors and include ``errors``/``error`` in the payload."""

        self._include_errors = True
        self._errors = as_error_collection(errors)
        return self

    def with_field(self, key: str, value: Any) -> ResponseEnvelope:
        if isinstance(key, str):
            self._extra[key] = value
        return self

    def with_fields(self, fields: Mapping[str, Any]) -> ResponseEnvelope:
        if isinstance(fields, Mapping):
            self._extra.update(fields)
        return self

    def with_(self, *args: Any) -> ResponseEnvelope:
        """Accept either ``with_(mapping)`` or ``with_(key, value)``.

        Any other call shape is ignored.
        """

        if len(args) == 1:
            return self.with_fields(args[0])
        if len(args) == 2:
            return self.with_field(args[0], args[1])
        return self

    def compile(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self._succeeded}

        if self._include_errors:
            data["errors"] = []
            data["error"] = ""
            collection = self._errors
            messages = list(collection.all())
            # first() is only defined for a non-empty collection
            if messages:
                data["errors"] = messages
                data["error"] = collection.first()

        if self._include_input:
            data["input"] = self._input_source.all() if self._input_source is not None else {}

        data["message"] = self._message
        data.update(self._extra)

        logger.debug("Compiled envelope success=%s keys=%s", self._succeeded, list(data))
        return data

    def get_data(self) -> dict[str, Any]:
        return self.compile()

    def get_content(self) -> str:
        """Return the compiled payload as JSON text."""

        return json.dumps(self.compile(), ensure_ascii=False)
