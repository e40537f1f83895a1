"""A date and time in the UTC time zone with nanosecond precision."""

from __future__ import annotations

import datetime as _dt
import re
import time as _time
from dataclasses import dataclass
from typing import ClassVar

_NANOS_PER_SECOND = 1_000_000_000
_MIN_SECONDS = -377_705_116_800  # -9999-01-01T00:00:00Z
_MAX_SECONDS = 253_402_300_799  # 9999-12-31T23:59:59Z
_MIN_NANOS = _MIN_SECONDS * _NANOS_PER_SECOND
_MAX_NANOS = (_MAX_SECONDS + 1) * _NANOS_PER_SECOND - 1

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(?:([Zz])|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)


class UtcDateTimeError(ValueError):
    """Raised for invalid or out-of-range date times."""

    INVALID_NANOSECONDS = "invalid_nanoseconds"
    NOT_UTC = "not_utc"
    INVALID_FORMAT = "invalid_format"

    def __init__(self, kind: str, value: str | None = None) -> None:
        self.kind = kind
        self.value = value
        if kind == self.INVALID_NANOSECONDS:
            message = "invalid nanoseconds"
        elif kind == self.NOT_UTC:
            message = "not a UTC date time"
        else:
            message = f"invalid date time string format `{value}`"
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UtcDateTimeError):
            return NotImplemented
        return (self.kind, self.value) == (other.kind, other.value)

    def __hash__(self) -> int:
        return hash((self.kind, self.value))


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if _is_leap(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


def _days_from_civil(year: int, month: int, day: int) -> int:
    year -= month <= 2
    era = year // 400
    yoe = year - era * 400
    doy = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def _civil_from_days(days: int) -> tuple[int, int, int]:
    days += 719468
    era = days // 146097
    doe = days - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    year = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + (3 if mp < 10 else -9)
    return year + (month <= 2), month, day


def _in_range(nanos: int) -> bool:
    return _MIN_NANOS <= nanos <= _MAX_NANOS


_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)


@dataclass(frozen=True, order=True)
class UtcDateTime:
    """A UTC instant stored as nanoseconds since the Unix epoch."""

    unix_nanos: int

    UNIX_EPOCH: ClassVar[UtcDateTime]

    def __post_init__(self) -> None:
        if not _in_range(self.unix_nanos):
            raise UtcDateTimeError(UtcDateTimeError.NOT_UTC)

    @classmethod
    def new(cls, seconds: int, nanoseconds: int) -> UtcDateTime:
        """Build from parts, falling back to the epoch when out of range."""
        nanos = seconds * _NANOS_PER_SECOND + nanoseconds
        return cls(nanos) if _in_range(nanos) else cls(0)

    @classmethod
    def now(cls) -> UtcDateTime:
        return cls(_time.time_ns())

    @classmethod
    def from_timestamp(cls, seconds: int, nanoseconds: int) -> UtcDateTime:
        return cls.from_nanoseconds(seconds * _NANOS_PER_SECOND + nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: int) -> UtcDateTime:
        if not _MIN_SECONDS <= seconds <= _MAX_SECONDS:
            raise UtcDateTimeError(UtcDateTimeError.NOT_UTC)
        return cls(seconds * _NANOS_PER_SECOND)

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> UtcDateTime:
        if not _in_range(nanoseconds):
            raise UtcDateTimeError(UtcDateTimeError.NOT_UTC)
        return cls(nanoseconds)

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> UtcDateTime:
        """Convert a datetime; a naive one is taken to be in UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=_dt.timezone.utc)
        delta = value - _EPOCH
        nanos = (
            (delta.days * 86_400 + delta.seconds) * _NANOS_PER_SECOND
            + delta.microseconds * 1_000
        )
        return cls.from_nanoseconds(nanos)

    def to_datetime(self) -> _dt.datetime:
        """Return an aware UTC datetime, truncated to microseconds."""
        seconds, nanos = self.timestamp()
        return _EPOCH + _dt.timedelta(seconds=seconds, microseconds=nanos // 1_000)

    def timestamp(self) -> tuple[int, int]:
        """Return ``(seconds, nanoseconds)`` with non-negative nanoseconds."""
        return divmod(self.unix_nanos, _NANOS_PER_SECOND)

    @classmethod
    def parse_rfc3339(cls, text: str) -> UtcDateTime:
        match = _RFC3339.fullmatch(text)
        if match is None:
            raise UtcDateTimeError(UtcDateTimeError.INVALID_FORMAT, text)
        year, month, day, hour, minute, second = (int(g) for g in match.group(1, 2, 3, 4, 5, 6))
        fraction = match.group(7) or ""
        if (
            not 1 <= month <= 12
            or not 1 <= day <= _days_in_month(year, month)
            or hour > 23
            or minute > 59
            or second > 60
        ):
            raise UtcDateTimeError(UtcDateTimeError.INVALID_FORMAT, text)
        offset = 0
        if match.group(8) is None:
            offset_hours, offset_minutes = int(match.group(10)), int(match.group(11))
            if offset_hours > 23 or offset_minutes > 59:
                raise UtcDateTimeError(UtcDateTimeError.INVALID_FORMAT, text)
            offset = offset_hours * 3600 + offset_minutes * 60
            if match.group(9) == "-":
                offset = -offset
        leap = second == 60
        seconds = (
            _days_from_civil(year, month, day) * 86_400
            + hour * 3600
            + minute * 60
            + (59 if leap else second)
            - offset
        )
        nanos = int(fraction[:9].ljust(9, "0")) if fraction else 0
        if leap:
            utc_year, utc_month, utc_day = _civil_from_days(seconds // 86_400)
            if seconds % 86_400 != 86_399 or utc_day != _days_in_month(utc_year, utc_month):
                raise UtcDateTimeError(UtcDateTimeError.INVALID_FORMAT, text)
            nanos = _NANOS_PER_SECOND - 1
        total = seconds * _NANOS_PER_SECOND + nanos
        if not _in_range(total):
            raise UtcDateTimeError(UtcDateTimeError.INVALID_FORMAT, text)
        return cls(total)

    def format_rfc3339(self) -> str:
        """Format as RFC 3339; raise ValueError for years outside 0..=9999."""
        seconds, nanos = self.timestamp()
        days, second_of_day = divmod(seconds, 86_400)
        year, month, day = _civil_from_days(days)
        if not 0 <= year <= 9999:
            raise ValueError(f"year {year} cannot be formatted as RFC 3339")
        hour, rest = divmod(second_of_day, 3600)
        minute, second = divmod(rest, 60)
        fraction = f".{nanos:09d}".rstrip("0") if nanos else ""
        return f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}{fraction}Z"

    def __str__(self) -> str:
        try:
            return self.format_rfc3339()
        except ValueError:
            return "INVALID_UTC_DATE_TIME"


UtcDateTime.UNIX_EPOCH = UtcDateTime(0)