"""The RPC status message and the standard error detail messages."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any as _JsonAny
from typing import ClassVar

from .any import Any, DecodeError, any_list_from_json, any_list_to_json
from .code import Code
from .duration import Duration
from .strings import Case, str_to_case

_U64_MASK = (1 << 64) - 1
_WIRE_VARINT = 0
_WIRE_FIXED64 = 1
_WIRE_LEN = 2
_WIRE_FIXED32 = 5
_TYPE_URL_PREFIX = "type.googleapis.com/google.rpc."


class _Kind(enum.Enum):
    STRING = "string"
    STRINGS = "strings"
    MAP = "map"
    MESSAGE = "message"
    MESSAGES = "messages"
    DURATION = "duration"


@dataclass(frozen=True)
class _Field:
    name: str
    number: int
    kind: _Kind
    message: type | None = None
    skip_default: bool = False

    @property
    def json_name(self) -> str:
        return str_to_case(self.name, Case.CAMEL)

    def default(self) -> _JsonAny:
        if self.kind is _Kind.STRING:
            return ""
        if self.kind in (_Kind.STRINGS, _Kind.MESSAGES):
            return []
        if self.kind is _Kind.MAP:
            return {}
        return None


def _put_varint(out: bytearray, value: int) -> None:
    value &= _U64_MASK
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)


def _put_len(out: bytearray, number: int, payload: bytes) -> None:
    _put_varint(out, (number << 3) | _WIRE_LEN)
    _put_varint(out, len(payload))
    out += payload


def _put_uint(out: bytearray, number: int, value: int) -> None:
    _put_varint(out, (number << 3) | _WIRE_VARINT)
    _put_varint(out, value)


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise DecodeError("unexpected end of buffer")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & _U64_MASK, pos
        shift += 7
        if shift >= 70:
            raise DecodeError("invalid varint")


def _take(data: bytes, pos: int, length: int) -> bytes:
    if pos + length > len(data):
        raise DecodeError("buffer underflow")
    return bytes(data[pos : pos + length])


def _iter_fields(data: bytes) -> Iterator[tuple[int, int, int | bytes]]:
    pos = 0
    while pos < len(data):
        key, pos = _read_varint(data, pos)
        number, wire = key >> 3, key & 7
        if number == 0:
            raise DecodeError("invalid field number 0")
        value: int | bytes
        if wire == _WIRE_VARINT:
            value, pos = _read_varint(data, pos)
        elif wire == _WIRE_FIXED64:
            value = _take(data, pos, 8)
            pos += 8
        elif wire == _WIRE_LEN:
            length, pos = _read_varint(data, pos)
            value = _take(data, pos, length)
            pos += length
        elif wire == _WIRE_FIXED32:
            value = _take(data, pos, 4)
            pos += 4
        else:
            raise DecodeError(f"unsupported wire type {wire}")
        yield number, wire, value


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


def _text(payload: bytes) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        raise DecodeError("invalid string value: data is not UTF-8 encoded") from None


def _encode_duration(value: Duration) -> bytes:
    out = bytearray()
    if value.seconds:
        _put_uint(out, 1, value.seconds)
    if value.nanos:
        _put_uint(out, 2, value.nanos)
    return bytes(out)


def _decode_duration(data: bytes) -> Duration:
    seconds = 0
    nanos = 0
    for number, wire, value in _iter_fields(data):
        if number in (1, 2):
            if wire != _WIRE_VARINT or not isinstance(value, int):
                raise DecodeError("invalid wire type for duration field")
            if number == 1:
                seconds = _signed(value, 64)
            else:
                nanos = _signed(value, 32)
    return Duration(seconds, nanos)


def _decode_map_entry(data: bytes) -> tuple[str, str]:
    key = ""
    item = ""
    for number, wire, value in _iter_fields(data):
        if number in (1, 2):
            if wire != _WIRE_LEN or not isinstance(value, bytes):
                raise DecodeError("invalid wire type for map entry")
            if number == 1:
                key = _text(value)
            else:
                item = _text(value)
    return key, item


def _expect_str(value: _JsonAny, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"field `{name}` expects a string")
    return value


class DetailMessage:
    """Base of the error detail messages carried in a status."""

    _SCHEMA: ClassVar[tuple[_Field, ...]] = ()
    _PROTO_NAME: ClassVar[str | None] = None

    @classmethod
    def type_url(cls) -> str:
        """Return the URL that identifies the message type when packed."""
        return _TYPE_URL_PREFIX + (cls._PROTO_NAME or cls.__qualname__)

    def encode(self) -> bytes:
        """Encode in the binary wire format."""
        out = bytearray()
        for spec in self._SCHEMA:
            value = getattr(self, spec.name)
            if spec.kind is _Kind.STRING:
                if value:
                    _put_len(out, spec.number, value.encode("utf-8"))
            elif spec.kind is _Kind.STRINGS:
                for item in value:
                    _put_len(out, spec.number, item.encode("utf-8"))
            elif spec.kind is _Kind.MAP:
                for key, item in value.items():
                    entry = bytearray()
                    if key:
                        _put_len(entry, 1, key.encode("utf-8"))
                    if item:
                        _put_len(entry, 2, item.encode("utf-8"))
                    _put_len(out, spec.number, bytes(entry))
            elif spec.kind is _Kind.MESSAGE:
                if value is not None:
                    _put_len(out, spec.number, value.encode())
            elif spec.kind is _Kind.MESSAGES:
                for item in value:
                    _put_len(out, spec.number, item.encode())
            elif value is not None:
                _put_len(out, spec.number, _encode_duration(value))
        return bytes(out)

    @classmethod
    def decode(cls, data: bytes) -> DetailMessage:
        """Decode from the binary wire format; unknown fields are skipped."""
        values = {spec.name: spec.default() for spec in cls._SCHEMA}
        by_number = {spec.number: spec for spec in cls._SCHEMA}
        for number, wire, payload in _iter_fields(bytes(data)):
            spec = by_number.get(number)
            if spec is None:
                continue
            if wire != _WIRE_LEN or not isinstance(payload, bytes):
                raise DecodeError(f"invalid wire type for field `{spec.name}`")
            if spec.kind is _Kind.STRING:
                values[spec.name] = _text(payload)
            elif spec.kind is _Kind.STRINGS:
                values[spec.name].append(_text(payload))
            elif spec.kind is _Kind.MAP:
                key, item = _decode_map_entry(payload)
                values[spec.name][key] = item
            elif spec.kind is _Kind.MESSAGE:
                values[spec.name] = spec.message.decode(payload)  # type: ignore[union-attr]
            elif spec.kind is _Kind.MESSAGES:
                values[spec.name].append(spec.message.decode(payload))  # type: ignore[union-attr]
            else:
                values[spec.name] = _decode_duration(payload)
        return cls(**values)

    def to_json(self) -> dict[str, _JsonAny]:
        """Return a JSON object with camel-cased keys."""
        out: dict[str, _JsonAny] = {}
        for spec in self._SCHEMA:
            value = getattr(self, spec.name)
            if spec.skip_default and not value:
                continue
            if spec.kind is _Kind.STRING:
                out[spec.json_name] = value
            elif spec.kind is _Kind.STRINGS:
                out[spec.json_name] = list(value)
            elif spec.kind is _Kind.MAP:
                out[spec.json_name] = dict(value)
            elif spec.kind is _Kind.MESSAGES:
                out[spec.json_name] = [item.to_json() for item in value]
            else:
                out[spec.json_name] = None if value is None else value.to_json()
        return out

    @classmethod
    def from_json(cls, data: _JsonAny) -> DetailMessage:
        """Build from a JSON object with camel-cased keys."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected an object for {cls.__qualname__}")
        values: dict[str, _JsonAny] = {}
        for spec in cls._SCHEMA:
            key = spec.json_name
            if key not in data:
                if spec.skip_default or spec.kind in (_Kind.MESSAGE, _Kind.DURATION):
                    values[spec.name] = spec.default()
                    continue
                raise ValueError(f"missing field `{key}`")
            raw = data[key]
            if spec.kind is _Kind.STRING:
                values[spec.name] = _expect_str(raw, key)
            elif spec.kind is _Kind.STRINGS:
                if not isinstance(raw, list):
                    raise TypeError(f"field `{key}` expects a list")
                values[spec.name] = [_expect_str(item, key) for item in raw]
            elif spec.kind is _Kind.MAP:
                if not isinstance(raw, Mapping):
                    raise TypeError(f"field `{key}` expects an object")
                values[spec.name] = {
                    _expect_str(k, key): _expect_str(v, key) for k, v in raw.items()
                }
            elif spec.kind is _Kind.MESSAGES:
                if not isinstance(raw, list):
                    raise TypeError(f"field `{key}` expects a list")
                values[spec.name] = [spec.message.from_json(item) for item in raw]  # type: ignore[union-attr]
            elif raw is None:
                values[spec.name] = None
            elif spec.kind is _Kind.MESSAGE:
                values[spec.name] = spec.message.from_json(raw)  # type: ignore[union-attr]
            else:
                values[spec.name] = Duration.from_json(raw)
        return cls(**values)


@dataclass
class ErrorInfo(DetailMessage):
    """The reason for an error, with its domain and metadata."""

    reason: str = ""
    domain: str = ""
    metadata: dict[str, str] = dataclasses.field(default_factory=dict)

    _SCHEMA = (
        _Field("reason", 1, _Kind.STRING),
        _Field("domain", 2, _Kind.STRING),
        _Field("metadata", 3, _Kind.MAP, skip_default=True),
    )


@dataclass
class RetryInfo(DetailMessage):
    """How long a client should wait before retrying."""

    retry_delay: Duration | None = None

    _SCHEMA = (_Field("retry_delay", 1, _Kind.DURATION),)


@dataclass
class DebugInfo(DetailMessage):
    """Debugging information provided by the server."""

    stack_entries: list[str] = dataclasses.field(default_factory=list)
    detail: str = ""

    _SCHEMA = (
        _Field("stack_entries", 1, _Kind.STRINGS),
        _Field("detail", 2, _Kind.STRING),
    )


@dataclass
class QuotaFailure(DetailMessage):
    """Quota checks that failed."""

    @dataclass
    class Violation(DetailMessage):
        """A single quota violation."""

        subject: str = ""
        description: str = ""

        _SCHEMA = (
            _Field("subject", 1, _Kind.STRING),
            _Field("description", 2, _Kind.STRING),
        )

    violations: list[QuotaFailure.Violation] = dataclasses.field(default_factory=list)

    _SCHEMA = (_Field("violations", 1, _Kind.MESSAGES, Violation),)


@dataclass
class PreconditionFailure(DetailMessage):
    """Preconditions that were not met."""

    @dataclass
    class Violation(DetailMessage):
        """A single precondition violation."""

        type: str = ""
        subject: str = ""
        description: str = ""

        _SCHEMA = (
            _Field("type", 1, _Kind.STRING),
            _Field("subject", 2, _Kind.STRING),
            _Field("description", 3, _Kind.STRING),
        )

    violations: list[PreconditionFailure.Violation] = dataclasses.field(default_factory=list)

    _SCHEMA = (_Field("violations", 1, _Kind.MESSAGES, Violation),)


@dataclass
class FieldViolation(DetailMessage):
    """A single bad field of a request."""

    field: str = ""
    description: str = ""

    _PROTO_NAME = "BadRequest.FieldViolation"
    _SCHEMA = (
        _Field("field", 1, _Kind.STRING),
        _Field("description", 2, _Kind.STRING),
    )


@dataclass
class BadRequest(DetailMessage):
    """Violations in a client request."""

    field_violations: list[FieldViolation] = dataclasses.field(default_factory=list)

    _SCHEMA = (_Field("field_violations", 1, _Kind.MESSAGES, FieldViolation),)


@dataclass
class RequestInfo(DetailMessage):
    """Metadata about the request a client sent."""

    request_id: str = ""
    serving_data: str = ""

    _SCHEMA = (
        _Field("request_id", 1, _Kind.STRING),
        _Field("serving_data", 2, _Kind.STRING),
    )


@dataclass
class ResourceInfo(DetailMessage):
    """The resource being accessed."""

    resource_type: str = ""
    resource_name: str = ""
    owner: str = ""
    description: str = ""

    _SCHEMA = (
        _Field("resource_type", 1, _Kind.STRING),
        _Field("resource_name", 2, _Kind.STRING),
        _Field("owner", 3, _Kind.STRING),
        _Field("description", 4, _Kind.STRING),
    )


@dataclass
class Help(DetailMessage):
    """Links to documentation for the error."""

    @dataclass
    class Link(DetailMessage):
        """A single documentation link."""

        description: str = ""
        url: str = ""

        _SCHEMA = (
            _Field("description", 1, _Kind.STRING),
            _Field("url", 2, _Kind.STRING),
        )

    links: list[Help.Link] = dataclasses.field(default_factory=list)

    _SCHEMA = (_Field("links", 1, _Kind.MESSAGES, Link),)


@dataclass
class LocalizedMessage(DetailMessage):
    """An error message in a given locale."""

    locale: str = ""
    message: str = ""

    _SCHEMA = (
        _Field("locale", 1, _Kind.STRING),
        _Field("message", 2, _Kind.STRING),
    )


_DETAIL_TYPES: tuple[type[DetailMessage], ...] = (
    BadRequest,
    DebugInfo,
    ErrorInfo,
    Help,
    LocalizedMessage,
    PreconditionFailure,
    QuotaFailure,
    RequestInfo,
    ResourceInfo,
    RetryInfo,
)


def _code_name(code: int) -> str:
    try:
        return Code(code).name
    except ValueError:
        raise ValueError(f"invalid code value {code}") from None


def _parse_code(raw: _JsonAny) -> Code:
    if isinstance(raw, bool):
        raise TypeError("expected a code name or number")
    if isinstance(raw, str):
        return Code.from_name(raw)
    if isinstance(raw, int):
        try:
            return Code(raw)
        except ValueError:
            raise ValueError(f"invalid code value {raw}") from None
    raise TypeError("expected a code name or number")


@dataclass
class Status:
    """An error code, a message and packed error details."""

    code: int = 0
    message: str = ""
    details: list[Any] = dataclasses.field(default_factory=list)

    def __post_init__(self) -> None:
        self.code = int(self.code)

    def to_json(self) -> dict[str, _JsonAny]:
        """Return a JSON object; the code is written by name."""
        return {
            "code": _code_name(self.code),
            "message": self.message,
            "details": any_list_to_json(self.details, _DETAIL_TYPES),
        }

    @classmethod
    def from_json(cls, data: _JsonAny) -> Status:
        """Build from a JSON object; the code may be a name or a number."""
        if not isinstance(data, Mapping):
            raise TypeError("expected an object for Status")
        for key in ("code", "message", "details"):
            if key not in data:
                raise ValueError(f"missing field `{key}`")
        return cls(
            code=_parse_code(data["code"]),
            message=_expect_str(data["message"], "message"),
            details=any_list_from_json(data["details"], _DETAIL_TYPES),
        )