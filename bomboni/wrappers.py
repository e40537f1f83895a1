"""Wrapper messages around single scalar values."""

from __future__ import annotations

import base64
import math
import re
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar

_SIGNED_INT = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED_INT = re.compile(r"\+?[0-9]+", re.ASCII)
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _shortest_digits(value: float, single: bool) -> str:
    if not single:
        return repr(value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _to_f32(float(text)) == value:
            return text
    return repr(value)


def _format_float(value: float, single: bool) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(_shortest_digits(value, single)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class WrapperValue(ABC):
    """A message holding one value; ``None`` stands for the default value."""

    value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self._coerce(self.value))

    @classmethod
    @abstractmethod
    def _coerce(cls, value: Any) -> Any:
        """Validate ``value`` and return it in its stored form."""

    @classmethod
    @abstractmethod
    def _parse_text(cls, text: str) -> Any:
        """Parse the text form of a value."""

    @classmethod
    def parse(cls, text: str) -> WrapperValue:
        """Parse a wrapper from text; raise ValueError if it is not valid."""
        return cls(cls._parse_text(text))

    def to_json(self) -> Any:
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> WrapperValue:
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


class StringValue(WrapperValue):
    """Wrapper for a string."""

    @classmethod
    def _coerce(cls, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        return value

    @classmethod
    def _parse_text(cls, text: str) -> str:
        return text


class BytesValue(WrapperValue):
    """Wrapper for bytes; its text and JSON form is base64."""

    @classmethod
    def _coerce(cls, value: Any) -> bytes:
        if value is None:
            return b""
        if isinstance(value, str):
            raise TypeError("expected bytes, got str")
        return bytes(value)

    @classmethod
    def _parse_text(cls, text: str) -> bytes:
        return base64.b64decode(text, validate=True)

    def __str__(self) -> str:
        return base64.b64encode(self.value).decode("ascii")

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: Any) -> BytesValue:
        if not isinstance(value, str):
            raise TypeError("expected a base64 string")
        return cls.parse(value)


class BoolValue(WrapperValue):
    """Wrapper for a boolean."""

    @classmethod
    def _coerce(cls, value: Any) -> bool:
        if value is None:
            return False
        if not isinstance(value, bool):
            raise TypeError(f"expected a bool, got {type(value).__name__}")
        return value

    @classmethod
    def _parse_text(cls, text: str) -> bool:
        if text == "true":
            return True
        if text == "false":
            return False
        raise ValueError("provided string was not `true` or `false`")

    def __str__(self) -> str:
        return "true" if self.value else "false"


class _IntegerValue(WrapperValue):
    _MIN: ClassVar[int] = 0
    _MAX: ClassVar[int] = 0

    @classmethod
    def _coerce(cls, value: Any) -> int:
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an integer, got {type(value).__name__}")
        if not cls._MIN <= value <= cls._MAX:
            raise ValueError(f"{value} is out of range for {cls.__name__}")
        return int(value)

    @classmethod
    def _parse_text(cls, text: str) -> int:
        pattern = _SIGNED_INT if cls._MIN < 0 else _UNSIGNED_INT
        if not pattern.fullmatch(text):
            raise ValueError(f"invalid digit found in string `{text}`")
        number = int(text)
        if number > cls._MAX:
            raise ValueError("number too large to fit in target type")
        if number < cls._MIN:
            raise ValueError("number too small to fit in target type")
        return number


class _StringEncodedIntegerValue(_IntegerValue):
    def to_json(self) -> str:
        return str(self.value)

    @classmethod
    def from_json(cls, value: Any) -> _StringEncodedIntegerValue:
        if not isinstance(value, str):
            raise TypeError("expected a string")
        try:
            return cls.parse(value)
        except ValueError:
            raise ValueError("unexpected string value") from None


class Int32Value(_IntegerValue):
    """Wrapper for a signed 32-bit integer."""

    _MIN = -(1 << 31)
    _MAX = (1 << 31) - 1


class UInt32Value(_IntegerValue):
    """Wrapper for an unsigned 32-bit integer."""

    _MIN = 0
    _MAX = (1 << 32) - 1


class Int64Value(_StringEncodedIntegerValue):
    """Wrapper for a signed 64-bit integer; its JSON form is a string."""

    _MIN = -(1 << 63)
    _MAX = (1 << 63) - 1


class UInt64Value(_StringEncodedIntegerValue):
    """Wrapper for an unsigned 64-bit integer; its JSON form is a string."""

    _MIN = 0
    _MAX = (1 << 64) - 1


class _FloatingValue(WrapperValue):
    _SINGLE: ClassVar[bool] = False

    @classmethod
    def _coerce(cls, value: Any) -> float:
        if value is None:
            return 0.0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected a number, got {type(value).__name__}")
        number = float(value)
        return _to_f32(number) if cls._SINGLE else number

    @classmethod
    def _parse_text(cls, text: str) -> float:
        if not _FLOAT.fullmatch(text):
            raise ValueError(f"invalid float literal `{text}`")
        return float(text)

    def __str__(self) -> str:
        return _format_float(self.value, self._SINGLE)

    def to_json(self) -> float | None:
        if not math.isfinite(self.value):
            return None
        if self._SINGLE:
            return float(_shortest_digits(self.value, True))
        return self.value


class FloatValue(_FloatingValue):
    """Wrapper for a single-precision float."""

    _SINGLE = True


class DoubleValue(_FloatingValue):
    """Wrapper for a double-precision float."""

    _SINGLE = False