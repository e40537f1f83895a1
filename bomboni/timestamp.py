"""Points in time as seconds and nanoseconds since the Unix epoch."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass

from .date_time import UtcDateTime, UtcDateTimeError

_NANOS_PER_SECOND = 1_000_000_000
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def _checked_add(a: int, b: int) -> int | None:
    result = a + b
    return result if _I64_MIN <= result <= _I64_MAX else None


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _trunc_rem(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


@dataclass(frozen=True)
class Timestamp:
    """An instant given as ``seconds`` and ``nanos`` since the Unix epoch."""

    seconds: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if not _I64_MIN <= self.seconds <= _I64_MAX:
            raise ValueError(f"seconds {self.seconds} out of range")
        if not _I32_MIN <= self.nanos <= _I32_MAX:
            raise ValueError(f"nanos {self.nanos} out of range")

    def normalized(self) -> Timestamp:
        """Return the canonical form with nanos in ``[0, 999999999]``."""
        seconds = self.seconds
        nanos = self.nanos

        if nanos <= -_NANOS_PER_SECOND or nanos >= _NANOS_PER_SECOND:
            new_seconds = _checked_add(seconds, _trunc_div(nanos, _NANOS_PER_SECOND))
            if new_seconds is not None:
                seconds = new_seconds
                nanos = _trunc_rem(nanos, _NANOS_PER_SECOND)
            elif nanos < 0:
                seconds = _I64_MIN
                nanos = 0
            else:
                seconds = _I64_MAX
                nanos = 999_999_999

        if nanos < 0:
            new_seconds = _checked_add(seconds, -1)
            if new_seconds is not None:
                seconds = new_seconds
                nanos += _NANOS_PER_SECOND
            else:
                nanos = 0

        return Timestamp(seconds, nanos)

    @classmethod
    def from_utc_date_time(cls, value: UtcDateTime) -> Timestamp:
        seconds, nanos = value.timestamp()
        return cls(seconds, nanos)

    def to_utc_date_time(self) -> UtcDateTime:
        """Convert to a UtcDateTime; negative nanos are rejected."""
        if self.nanos < 0:
            raise UtcDateTimeError(UtcDateTimeError.INVALID_NANOSECONDS)
        return UtcDateTime.from_timestamp(self.seconds, self.nanos)

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> Timestamp:
        """Convert a datetime; a naive one is taken to be in UTC."""
        return cls.from_utc_date_time(UtcDateTime.from_datetime(value))

    @classmethod
    def parse(cls, text: str) -> Timestamp:
        """Parse an RFC 3339 date time."""
        return cls.from_utc_date_time(UtcDateTime.parse_rfc3339(text))

    def __str__(self) -> str:
        try:
            return self.to_utc_date_time().format_rfc3339()
        except ValueError:
            return "INVALID_TIMESTAMP"

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: object) -> Timestamp:
        if not isinstance(value, str):
            raise TypeError("expected a date time string")
        return cls.parse(value)