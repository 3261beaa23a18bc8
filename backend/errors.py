"""Error collections accepted by :meth:`ResponseEnvelope.with_errors`.

An envelope understands two shapes of errors: a plain sequence of messages,
or a richer collection exposing ``all()`` and ``first()``. Both are adapted to
the :class:`ErrorCollection` protocol before compilation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

# Location prefixes FastAPI puts in front of request validation errors.
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


@runtime_checkable
class ErrorCollection(Protocol):
    def all(self) -> list[str]: ...

    def first(self) -> str: ...


class ErrorList:
    """Adapter for a plain ordered sequence of messages."""

    def __init__(self, messages: Iterable[Any] = ()) -> None:
        self._messages = list(messages)

    def all(self) -> list[str]:
        return list(self._messages)

    def first(self) -> str:
        return self._messages[0] if self._messages else ""

    def __len__(self) -> int:
        return len(self._messages)


class MessageBag:
    """Validation messages keyed by field name.

    Keys keep insertion order and each key holds its messages in the order they
    were added. Adding a message that already exists for a key is a no-op.
    """

    def __init__(self, messages: Mapping[str, str | Iterable[str]] | None = None) -> None:
        self._messages: dict[str, list[str]] = {}
        if messages:
            self.merge(messages)

    @classmethod
    def from_errors(cls, errors: Iterable[Mapping[str, Any]]) -> MessageBag:
        """Build a bag from pydantic style error dicts (``loc`` and ``msg``)."""

        bag = cls()
        for error in errors:
            key = _error_key(error.get("loc") or ())
            msg = str(error.get("msg", ""))
            bag.add(key, f"{key}: {msg}" if key else msg)
        return bag

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> MessageBag:
        return cls.from_errors(exc.errors())

    def add(self, key: str, message: str) -> MessageBag:
        messages = self._messages.setdefault(key, [])
        if message not in messages:
            messages.append(message)
        return self

    def merge(self, other: MessageBag | Mapping[str, str | Iterable[str]]) -> MessageBag:
        source = other.messages() if isinstance(other, MessageBag) else other
        for key, value in source.items():
            if isinstance(value, str) or not isinstance(value, Iterable):
                self.add(key, value)
                continue
            for message in value:
                self.add(key, message)
        return self

    def has(self, key: str) -> bool:
        return bool(self._messages.get(key))

    def get(self, key: str) -> list[str]:
        return list(self._messages.get(key, []))

    def first(self, key: str | None = None) -> str:
        messages = self.get(key) if key is not None else self.all()
        return messages[0] if messages else ""

    def all(self) -> list[str]:
        return [message for messages in self._messages.values() for message in messages]

    def keys(self) -> list[str]:
        return [key for key, messages in self._messages.items() if messages]

    def messages(self) -> dict[str, list[str]]:
        return {key: list(messages) for key, messages in self._messages.items() if messages}

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"MessageBag({self.messages()!r})"


def _error_key(loc: Sequence[Any]) -> str:
    parts = list(loc)
    # json_invalid errors carry a character offset after the body marker
    if len(parts) > 1 and parts[0] == "body" and isinstance(parts[1], int):
        del parts[1]
    parts = [str(part) for part in parts]
    if len(parts) > 1 and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


def as_error_collection(errors: Any) -> ErrorCollection:
    """Adapt whatever was handed to ``with_errors`` to :class:`ErrorCollection`."""

    if isinstance(errors, ErrorCollection):
        return errors
    if errors is None:
        return ErrorList()
    if isinstance(errors, str):
        return ErrorList([errors])
    if isinstance(errors, Mapping):
        return MessageBag(errors)
    if isinstance(errors, Iterable):
        return ErrorList(errors)
    return ErrorList([errors])
