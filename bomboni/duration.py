"""Signed spans of time with nanosecond precision."""

from __future__ import annotations

import datetime as _dt
import math
import re
from dataclasses import dataclass
from decimal import Decimal

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_MAX = _NANOS_PER_SECOND - 1
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1

_SECONDS = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FRACTION = re.compile(r"0\.[0-9]*(?:[eE][+-]?[0-9]+)?", re.ASCII)


class DurationError(ValueError):
    """Raised for durations that are out of range, negative or malformed."""

    OUT_OF_RANGE = "out_of_range"
    NEGATIVE_DURATION = "negative_duration"
    INVALID_FORMAT = "invalid_format"

    def __init__(self, kind: str, value: str | None = None) -> None:
        self.kind = kind
        self.value = value
        if kind == self.OUT_OF_RANGE:
            message = "duration is out of range"
        elif kind == self.NEGATIVE_DURATION:
            message = "duration is negative"
        else:
            message = f"invalid duration string format `{value}`"
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DurationError):
            return NotImplemented
        return (self.kind, self.value) == (other.kind, other.value)

    def __hash__(self) -> int:
        return hash((self.kind, self.value))


def _checked_add(a: int, b: int) -> int | None:
    result = a + b
    return result if _I64_MIN <= result <= _I64_MAX else None


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _trunc_rem(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def _saturate_i32(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


def _format_fraction(value: float) -> str:
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class Duration:
    """A span of ``seconds`` plus ``nanos`` nanoseconds."""

    seconds: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if not _I64_MIN <= self.seconds <= _I64_MAX or not _I32_MIN <= self.nanos <= _I32_MAX:
            raise DurationError(DurationError.OUT_OF_RANGE)

    def normalized(self) -> Duration:
        """Return the canonical form: nanos in range and of the same sign as seconds."""
        seconds = self.seconds
        nanos = self.nanos

        if nanos <= -_NANOS_PER_SECOND or nanos >= _NANOS_PER_SECOND:
            new_seconds = _checked_add(seconds, _trunc_div(nanos, _NANOS_PER_SECOND))
            if new_seconds is not None:
                seconds = new_seconds
                nanos = _trunc_rem(nanos, _NANOS_PER_SECOND)
            elif nanos < 0:
                seconds = _I64_MIN
                nanos = -_NANOS_MAX
            else:
                seconds = _I64_MAX
                nanos = _NANOS_MAX

        if seconds < 0 and nanos > 0:
            new_seconds = _checked_add(seconds, 1)
            if new_seconds is not None:
                seconds = new_seconds
                nanos -= _NANOS_PER_SECOND
            else:
                nanos = _NANOS_MAX
        elif seconds > 0 and nanos < 0:
            new_seconds = _checked_add(seconds, -1)
            if new_seconds is not None:
                seconds = new_seconds
                nanos += _NANOS_PER_SECOND
            else:
                nanos = -_NANOS_MAX

        return Duration(seconds, nanos)

    @classmethod
    def from_timedelta(cls, value: _dt.timedelta) -> Duration:
        """Convert a non-negative timedelta; a negative one is out of range."""
        if value < _dt.timedelta(0):
            raise DurationError(DurationError.OUT_OF_RANGE)
        seconds = value.days * 86_400 + value.seconds
        return cls(seconds, value.microseconds * 1_000).normalized()

    def to_timedelta(self) -> _dt.timedelta:
        """Convert to a timedelta, truncating to microseconds."""
        d = self.normalized()
        if d.seconds < 0 or d.nanos < 0:
            raise DurationError(DurationError.NEGATIVE_DURATION)
        try:
            return _dt.timedelta(seconds=d.seconds, microseconds=d.nanos // 1_000)
        except OverflowError:
            raise DurationError(DurationError.OUT_OF_RANGE) from None

    @classmethod
    def parse(cls, text: str) -> Duration:
        """Parse text such as ``3s`` or ``3.000000001s``."""
        if not text.endswith("s"):
            raise DurationError(DurationError.INVALID_FORMAT, text)
        parts = text[:-1].split(".")
        if len(parts) > 2:
            raise DurationError(DurationError.INVALID_FORMAT, text)
        if not _SECONDS.fullmatch(parts[0]):
            raise DurationError(DurationError.INVALID_FORMAT, text)
        seconds = int(parts[0])
        if not _I64_MIN <= seconds <= _I64_MAX:
            raise DurationError(DurationError.INVALID_FORMAT, text)
        nanos = 0
        if len(parts) > 1:
            fraction = f"0.{parts[1]}"
            if not _FRACTION.fullmatch(fraction):
                raise DurationError(DurationError.INVALID_FORMAT, text)
            nanos = _saturate_i32(float(fraction) * 1_000_000_000.0)
        return cls(seconds, nanos)

    def __str__(self) -> str:
        if self.nanos == 0:
            return f"{self.seconds}s"
        fraction = _format_fraction(self.nanos / 1_000_000_000.0)
        while fraction.startswith("0."):
            fraction = fraction[2:]
        return f"{self.seconds}.{fraction}s"

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: object) -> Duration:
        if not isinstance(value, str):
            raise TypeError("expected a duration string")
        try:
            return cls.parse(value)
        except DurationError as err:
            raise ValueError(f"cannot deserialize duration: {err}") from err