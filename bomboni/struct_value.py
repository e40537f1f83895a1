"""Dynamically typed JSON-like values: Value, ListValue, Struct and Empty."""

from __future__ import annotations

import enum
import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


class NullValue(enum.IntEnum):
    """The single null value of a Value."""

    NULL_VALUE = 0


@dataclass(frozen=True)
class Empty:
    """A message with no fields; its JSON form is null."""

    def to_json(self) -> Any:
        """Return the JSON form, the same as that of a null value."""
        return Value(NullValue.NULL_VALUE).to_json()

    @classmethod
    def from_json(cls, value: Any) -> Empty:
        return cls()


Kind = Union[None, NullValue, bool, float, str, "Struct", "ListValue"]


@dataclass
class Value:
    """One dynamically typed value; ``kind`` of None means unset."""

    kind: Kind = None

    def __post_init__(self) -> None:
        kind = self.kind
        if kind is None or isinstance(kind, (NullValue, bool, str, Struct, ListValue)):
            return
        if isinstance(kind, (int, float)):
            self.kind = float(kind)
            return
        raise TypeError(f"unsupported value kind {type(kind).__name__}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return type(self.kind) is type(other.kind) and self.kind == other.kind

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def from_json(cls, value: Any) -> Value:
        """Build from a JSON-compatible Python value."""
        if isinstance(value, Value):
            return value
        if value is None:
            return cls(NullValue.NULL_VALUE)
        if isinstance(value, (bool, str)):
            return cls(value)
        if isinstance(value, (int, float)):
            return cls(float(value))
        if isinstance(value, Mapping):
            return cls(Struct.from_json(value))
        if isinstance(value, (list, tuple)):
            return cls(ListValue.from_iterable(value))
        raise TypeError(f"cannot convert {type(value).__name__} to a value")

    def to_json(self) -> Any:
        """Return the JSON-compatible Python value."""
        kind = self.kind
        if kind is None or isinstance(kind, NullValue):
            return None
        if isinstance(kind, float):
            if not math.isfinite(kind):
                raise ValueError("NumberValue is expected to be a valid f64")
            return kind
        if isinstance(kind, (Struct, ListValue)):
            return kind.to_json()
        return kind

    def __str__(self) -> str:
        return json.dumps(
            self.to_json(), separators=(",", ":"), ensure_ascii=False, sort_keys=True
        )


def _as_value(item: Any) -> Value:
    return item if isinstance(item, Value) else Value.from_json(item)


@dataclass
class ListValue:
    """An ordered list of values."""

    values: list[Value] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = [_as_value(item) for item in self.values]

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> ListValue:
        return cls(list(values))

    def to_json(self) -> list[Any]:
        return [item.to_json() for item in self.values]


@dataclass
class Struct:
    """A map from field names to values, kept in key order."""

    fields: dict[str, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fields = {
            str(key): _as_value(item) for key, item in sorted(self.fields.items())
        }

    @classmethod
    def from_json(cls, value: Any) -> Struct:
        if not isinstance(value, Mapping):
            raise TypeError("a JSON object is expected")
        return cls(dict(value))

    def to_json(self) -> dict[str, Any]:
        return {key: item.to_json() for key, item in self.fields.items()}

    def __str__(self) -> str:
        return "{" + ", ".join(f"{key}: {item}" for key, item in self.fields.items()) + "}"