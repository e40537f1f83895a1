"""Messages packed together with the URL of their type."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any as _JsonAny
from typing import Protocol, TypeVar

_TYPE_FIELD_NAME = "@type"


class DecodeError(ValueError):
    """Raised when bytes or a packed message cannot be decoded."""


class _Packable(Protocol):
    @classmethod
    def type_url(cls) -> str: ...

    def encode(self) -> bytes: ...

    def to_json(self) -> dict[str, _JsonAny]: ...

    @classmethod
    def decode(cls, data: bytes) -> _Packable: ...

    @classmethod
    def from_json(cls, data: _JsonAny) -> _Packable: ...


M = TypeVar("M", bound=_Packable)


@dataclass
class Any:
    """An encoded message together with the URL of its type."""

    type_url: str = ""
    value: bytes = b""

    def __post_init__(self) -> None:
        self.value = bytes(self.value)

    @classmethod
    def pack_from(cls, message: _Packable) -> Any:
        """Encode ``message`` and tag it with its type URL."""
        return cls(type(message).type_url(), message.encode())

    def unpack_into(self, message_type: type[M]) -> M:
        """Decode the packed message as ``message_type``."""
        expected_type_url = message_type.type_url()
        if expected_type_url != self.type_url:
            raise DecodeError(
                f"expected type URL `{expected_type_url}`, but got `{self.type_url}`"
            )
        return message_type.decode(self.value)  # type: ignore[return-value]


def any_to_json(value: Any, message_types: Iterable[type[_Packable]]) -> dict[str, _JsonAny]:
    """Encode ``value`` as a JSON object with an ``@type`` field.

    The packed message must be of one of ``message_types``.
    """
    for message_type in message_types:
        type_url = message_type.type_url()
        if value.type_url == type_url:
            message = value.unpack_into(message_type)
            return {_TYPE_FIELD_NAME: type_url, **message.to_json()}
    raise NotImplementedError(f"any serialize for type url {value.type_url}")


def any_from_json(data: _JsonAny, message_types: Iterable[type[_Packable]]) -> Any:
    """Decode a JSON object with an ``@type`` field into a packed message."""
    if not isinstance(data, Mapping):
        raise ValueError("expected a map")
    if _TYPE_FIELD_NAME not in data:
        raise ValueError(f"missing field `{_TYPE_FIELD_NAME}`")
    type_url = data[_TYPE_FIELD_NAME]
    if not isinstance(type_url, str):
        raise ValueError("expected a string @type field")
    fields = {key: item for key, item in data.items() if key != _TYPE_FIELD_NAME}

    for message_type in message_types:
        if message_type.type_url() == type_url:
            try:
                message = message_type.from_json(fields)
            except (ValueError, TypeError) as err:
                raise ValueError(f"failed to deserialize {type_url}: {err}") from err
            return Any.pack_from(message)
    raise NotImplementedError(f"any deserialize for type url {type_url}")


def any_list_to_json(
    values: Iterable[Any], message_types: Iterable[type[_Packable]]
) -> list[dict[str, _JsonAny]]:
    """Encode every packed message of ``values`` with :func:`any_to_json`."""
    types = tuple(message_types)
    return [any_to_json(value, types) for value in values]


def any_list_from_json(data: _JsonAny, message_types: Iterable[type[_Packable]]) -> list[Any]:
    """Decode a JSON array of objects with :func:`any_from_json`."""
    if not isinstance(data, (list, tuple)):
        raise TypeError("expected a sequence")
    types = tuple(message_types)
    return [any_from_json(item, types) for item in data]