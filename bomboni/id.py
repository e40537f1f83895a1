"""Semi-globally unique and sortable identifiers."""

from __future__ import annotations

import datetime as _dt
import secrets
import time as _time
from dataclasses import dataclass

from .date_time import UtcDateTime

_U128_MASK = (1 << 128) - 1
_U64_MASK = (1 << 64) - 1

_TIMESTAMP_BITS = 64
_WORKER_BITS = 16
_SEQUENCE_BITS = 16

_ULID_TIME_BITS = 48
_ULID_RANDOM_BITS = 80
_ULID_TIME_MASK = (1 << _ULID_TIME_BITS) - 1
_ULID_RANDOM_MASK = (1 << _ULID_RANDOM_BITS) - 1

_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
_LOOKUP = {ch: i for i, ch in enumerate(_ALPHABET)} | {
    ch.lower(): i for i, ch in enumerate(_ALPHABET)
}
_ENCODED_LENGTH = 26

_NANOS_PER_MILLI = 1_000_000


class ParseIdError(ValueError):
    """Raised when a string is not a valid encoded id."""

    def __init__(self) -> None:
        super().__init__("invalid id string")


def _unix_nanos(value: UtcDateTime | _dt.datetime) -> int:
    if isinstance(value, UtcDateTime):
        return value.unix_nanos
    if isinstance(value, _dt.datetime):
        return UtcDateTime.from_datetime(value).unix_nanos
    raise TypeError(f"expected a UtcDateTime or datetime, got {type(value).__name__}")


def _from_millis(milliseconds: int) -> UtcDateTime:
    return UtcDateTime.from_nanoseconds(milliseconds * _NANOS_PER_MILLI)


@dataclass(frozen=True, order=True)
class Id:
    """A 128-bit identifier, shown as 26 characters of Crockford base32."""

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", int(self.value) & _U128_MASK)

    @classmethod
    def generate(cls) -> Id:
        """Generate a new random sortable id."""
        now_ms = _time.time_ns() // _NANOS_PER_MILLI
        return cls(((now_ms & _ULID_TIME_MASK) << _ULID_RANDOM_BITS) | secrets.randbits(_ULID_RANDOM_BITS))

    @classmethod
    def generate_multiple(cls, count: int) -> list[Id]:
        """Generate ``count`` random sortable ids that increase monotonically."""
        ids: list[Id] = []
        last: int | None = None
        for _ in range(count):
            now_ms = _time.time_ns() // _NANOS_PER_MILLI
            if last is not None and (last >> _ULID_RANDOM_BITS) >= now_ms:
                if last & _ULID_RANDOM_MASK == _ULID_RANDOM_MASK:
                    raise OverflowError("random part of the id overflowed")
                last += 1
            else:
                last = ((now_ms & _ULID_TIME_MASK) << _ULID_RANDOM_BITS) | secrets.randbits(
                    _ULID_RANDOM_BITS
                )
            ids.append(cls(last))
        return ids

    @classmethod
    def from_worker_parts(
        cls, time: UtcDateTime | _dt.datetime, worker: int, sequence: int
    ) -> Id:
        """Encode an id from a time, a worker number and a sequence number."""
        nanos = _unix_nanos(time)
        if nanos < 0:
            raise ValueError("time before the Unix epoch cannot be encoded")
        timestamp_ms = nanos // _NANOS_PER_MILLI
        if timestamp_ms >= 1 << _TIMESTAMP_BITS:
            raise ValueError("timestamp is out of range")
        if not 0 <= worker < 1 << _WORKER_BITS:
            raise ValueError(f"worker {worker} is out of range")
        if not 0 <= sequence < 1 << _SEQUENCE_BITS:
            raise ValueError(f"sequence {sequence} is out of range")
        return cls(
            (timestamp_ms << (_WORKER_BITS + _SEQUENCE_BITS))
            | (worker << _SEQUENCE_BITS)
            | sequence
        )

    @classmethod
    def from_time_and_random(cls, time: UtcDateTime | _dt.datetime, random: int) -> Id:
        """Encode an id from a time and a random number."""
        nanos = _unix_nanos(time)
        timestamp_ms = nanos // _NANOS_PER_MILLI if nanos >= 0 else -((-nanos) // _NANOS_PER_MILLI)
        return cls(
            ((timestamp_ms & _ULID_TIME_MASK) << _ULID_RANDOM_BITS) | (random & _ULID_RANDOM_MASK)
        )

    def decode_worker(self) -> tuple[UtcDateTime, int, int]:
        """Return the time, worker and sequence an id was encoded from."""
        milliseconds = (self.value >> (_WORKER_BITS + _SEQUENCE_BITS)) & _U64_MASK
        if milliseconds >= 1 << 63:
            milliseconds -= 1 << 64
        worker = (self.value >> _SEQUENCE_BITS) & ((1 << _WORKER_BITS) - 1)
        sequence = self.value & ((1 << _SEQUENCE_BITS) - 1)
        return _from_millis(milliseconds), worker, sequence

    def decode_time_and_random(self) -> tuple[UtcDateTime, int]:
        """Return the time and the random part of a sortable id."""
        milliseconds = self.value >> _ULID_RANDOM_BITS
        return _from_millis(milliseconds), self.value & _ULID_RANDOM_MASK

    @classmethod
    def parse(cls, text: str) -> Id:
        """Decode an id from its 26-character text form."""
        if len(text) != _ENCODED_LENGTH:
            raise ParseIdError()
        value = 0
        for ch in text:
            digit = _LOOKUP.get(ch)
            if digit is None:
                raise ParseIdError()
            value = ((value << 5) | digit) & _U128_MASK
        return cls(value)

    def __str__(self) -> str:
        value = self.value
        chars = []
        for _ in range(_ENCODED_LENGTH):
            chars.append(_ALPHABET[value & 31])
            value >>= 5
        return "".join(reversed(chars))

    def __int__(self) -> int:
        return self.value