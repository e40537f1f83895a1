"""Errors raised while validating and converting requests."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from .any import Any, DecodeError
from .code import Code
from .status import BadRequest, FieldViolation, Status


class GenericError(Exception):
    """Base of errors that can be reported for a request or one of its fields."""

    # Name of the field an error describes when it concerns a whole request;
    # subclasses that report such errors set it.
    violating_field: ClassVar[Optional[str]] = None

    def code(self) -> Code:
        return Code.INVALID_ARGUMENT

    def details(self) -> list[Any]:
        return []

    def wrap(self, field: object) -> RequestError:
        return RequestError.generic(self).wrap_field(field)

    def wrap_index(self, index: int) -> RequestError:
        return RequestError.generic(self).wrap_index(index)

    def wrap_key(self, key: object) -> RequestError:
        return RequestError.generic(self).wrap_key(key)

    def wrap_field_index(self, field: object, index: int) -> RequestError:
        return RequestError.generic(self).wrap_field_index(field, index)

    def wrap_field_key(self, field: object, key: object) -> RequestError:
        return RequestError.generic(self).wrap_field_key(field, key)

    def wrap_request(self, name: object) -> RequestError:
        return RequestError.generic(self).wrap_request(name)


class CommonErrorKind(enum.Enum):
    """The kinds of common request errors."""

    RESOURCE_NOT_FOUND = "ResourceNotFound"
    UNAUTHORIZED = "Unauthorized"
    REQUIRED_FIELD_MISSING = "RequiredFieldMissing"
    INVALID_NAME = "InvalidName"
    INVALID_NAME_ALTERNATIVE = "InvalidNameAlternative"
    INVALID_PARENT = "InvalidParent"
    INVALID_STRING_FORMAT = "InvalidStringFormat"
    INVALID_ID = "InvalidId"
    DUPLICATE_ID = "DuplicateId"
    INVALID_DISPLAY_NAME = "InvalidDisplayName"
    INVALID_DATE_TIME = "InvalidDateTime"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    UNKNOWN_ONEOF_VARIANT = "UnknownOneofVariant"
    INVALID_NUMERIC_VALUE = "InvalidNumericValue"
    FAILED_CONVERT_VALUE = "FailedConvertValue"
    NUMERIC_OUT_OF_RANGE = "NumericOutOfRange"
    DUPLICATE_VALUE = "DuplicateValue"
    ALREADY_EXISTS = "AlreadyExists"
    NOT_FOUND = "NotFound"
    TYPE_MISMATCH = "TypeMismatch"


_MESSAGES: dict[CommonErrorKind, str] = {
    CommonErrorKind.RESOURCE_NOT_FOUND: "requested entity was not found",
    CommonErrorKind.UNAUTHORIZED: "unauthorized",
    CommonErrorKind.REQUIRED_FIELD_MISSING: "no value provided for required field",
    CommonErrorKind.INVALID_NAME: "expected `{expected_format}`, but got `{name}`.",
    CommonErrorKind.INVALID_NAME_ALTERNATIVE: (
        "expected either `{expected_format}` or `{alternative_expected_format}`, "
        "but got `{name}`"
    ),
    CommonErrorKind.INVALID_PARENT: "expected resource parent `{expected}`, but got `{parent}`",
    CommonErrorKind.INVALID_STRING_FORMAT: "expected a string in format `{expected}`",
    CommonErrorKind.INVALID_ID: "invalid ID format",
    CommonErrorKind.DUPLICATE_ID: "duplicate ID",
    CommonErrorKind.INVALID_DISPLAY_NAME: "invalid display name format",
    CommonErrorKind.INVALID_DATE_TIME: "invalid date time format",
    CommonErrorKind.INVALID_ENUM_VALUE: "invalid enum value",
    CommonErrorKind.UNKNOWN_ONEOF_VARIANT: "unknown oneof variant",
    CommonErrorKind.INVALID_NUMERIC_VALUE: "invalid numeric value",
    CommonErrorKind.FAILED_CONVERT_VALUE: "failed to convert value",
    CommonErrorKind.NUMERIC_OUT_OF_RANGE: "out of range",
    CommonErrorKind.DUPLICATE_VALUE: "duplicate value",
    CommonErrorKind.ALREADY_EXISTS: "already exists",
    CommonErrorKind.NOT_FOUND: "not found",
    CommonErrorKind.TYPE_MISMATCH: "type mismatch",
}

_FIELDS: dict[CommonErrorKind, tuple[str, ...]] = {
    CommonErrorKind.INVALID_NAME: ("expected_format", "name"),
    CommonErrorKind.INVALID_NAME_ALTERNATIVE: (
        "expected_format",
        "alternative_expected_format",
        "name",
    ),
    CommonErrorKind.INVALID_PARENT: ("expected", "parent"),
    CommonErrorKind.INVALID_STRING_FORMAT: ("expected",),
}


class CommonError(GenericError):
    """A frequently needed request error, identified by its kind."""

    def __init__(self, kind: CommonErrorKind, **fields: object) -> None:
        kind = CommonErrorKind(kind)
        expected = _FIELDS.get(kind, ())
        missing = [name for name in expected if name not in fields]
        unknown = [name for name in fields if name not in expected]
        if missing:
            raise TypeError(f"{kind.value} requires fields: {', '.join(missing)}")
        if unknown:
            raise TypeError(f"{kind.value} does not take fields: {', '.join(unknown)}")
        self.kind = kind
        self.fields = {name: str(fields[name]) for name in expected}
        super().__init__(_MESSAGES[kind].format(**self.fields))

    def __getattr__(self, name: str) -> str:
        fields = self.__dict__.get("fields", {})
        if name in fields:
            return fields[name]
        raise AttributeError(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommonError):
            return NotImplemented
        return self.kind is other.kind and self.fields == other.fields

    def __hash__(self) -> int:
        return hash((self.kind, tuple(sorted(self.fields.items()))))

    def __repr__(self) -> str:
        args = "".join(f", {k}={v!r}" for k, v in self.fields.items())
        return f"CommonError({self.kind}{args})"

    def code(self) -> Code:
        if self.kind in (CommonErrorKind.RESOURCE_NOT_FOUND, CommonErrorKind.NOT_FOUND):
            return Code.NOT_FOUND
        if self.kind is CommonErrorKind.ALREADY_EXISTS:
            return Code.ALREADY_EXISTS
        if self.kind is CommonErrorKind.UNAUTHORIZED:
            return Code.PERMISSION_DENIED
        return Code.INVALID_ARGUMENT


_STEP_KINDS = ("field", "index", "key")


@dataclass(frozen=True)
class PathErrorStep:
    """One step of a path to a value: a ``field`` name, a list ``index`` or a map ``key``."""

    kind: str
    value: Union[str, int]

    def __post_init__(self) -> None:
        if self.kind not in _STEP_KINDS:
            raise ValueError(f"unknown path step kind `{self.kind}`")
        if self.kind == "index":
            if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
                raise ValueError("an index step needs a non-negative integer")
        else:
            object.__setattr__(self, "value", str(self.value))

    def __str__(self) -> str:
        if self.kind == "field":
            return str(self.value)
        if self.kind == "index":
            return f"[{self.value}]"
        return f"{{{self.value}}}"


def _field(name: object) -> PathErrorStep:
    return PathErrorStep("field", str(name))


def _index(index: int) -> PathErrorStep:
    return PathErrorStep("index", index)


def _key(key: object) -> PathErrorStep:
    return PathErrorStep("key", str(key))


@dataclass
class PathError:
    """An error located at a path inside a request."""

    path: list[PathErrorStep] = field(default_factory=list)
    error: GenericError = field(default_factory=lambda: CommonError(CommonErrorKind.NOT_FOUND))

    def code(self) -> Code:
        return self.error.code()

    def details(self) -> list[Any]:
        return self.error.details()

    def path_to_string(self) -> str:
        """Render the path such as ``root[42].value{key}``."""
        parts = []
        for i, step in enumerate(self.path):
            if step.kind == "field" and i > 0:
                parts.append(f".{step.value}")
            else:
                parts.append(str(step))
        return "".join(parts)

    @classmethod
    def parse_path(cls, path: str) -> list[PathErrorStep]:
        """Parse a dotted path with ``[index]`` and ``{key}`` parts into steps."""
        steps: list[PathErrorStep] = []
        for part in path.split("."):
            part = part.strip()
            bracket = part.find("[")
            brace = part.find("{")
            if bracket >= 0:
                steps.append(_field(part[:bracket]))
                steps.append(_index(int(part[bracket + 1 : -1])))
            elif brace >= 0:
                steps.append(_key(part[brace + 1 : -1]))
            else:
                steps.append(_field(part))
        return steps

    def __str__(self) -> str:
        return f"field `{self.path_to_string()}` error: `{self.error}`"


class _Variant(enum.Enum):
    BAD_REQUEST = "bad_request"
    PATH = "path"
    GENERIC = "generic"
    DECODE = "decode"


class RequestError(Exception):
    """An error in a request: a bad request, a field path error or a generic error."""

    def __init__(
        self,
        variant: _Variant,
        *,
        name: str | None = None,
        violations: list[PathError] | None = None,
        path_error: PathError | None = None,
        error: GenericError | DecodeError | None = None,
    ) -> None:
        self._variant = variant
        self.name = name
        self.violations = list(violations or [])
        self.path_error = path_error
        self.error = error
        super().__init__(self._message())

    def _message(self) -> str:
        if self._variant is _Variant.BAD_REQUEST:
            return f"invalid `{self.name}` request"
        if self._variant is _Variant.PATH:
            return str(self.path_error)
        if self._variant is _Variant.DECODE:
            return f"decode error: {self.error}"
        return str(self.error)

    def __str__(self) -> str:
        return self._message()

    def __repr__(self) -> str:
        return f"RequestError({self._variant.value}: {self._message()!r})"

    @classmethod
    def bad_request(
        cls, name: object, violations: Iterable[tuple[object, GenericError]]
    ) -> RequestError:
        return cls(
            _Variant.BAD_REQUEST,
            name=str(name),
            violations=[PathError([_field(f)], _check_generic(e)) for f, e in violations],
        )

    @classmethod
    def generic(cls, error: GenericError | DecodeError) -> RequestError:
        if isinstance(error, DecodeError):
            return cls(_Variant.DECODE, error=error)
        return cls(_Variant.GENERIC, error=_check_generic(error))

    @classmethod
    def path(cls, path: Iterable[PathErrorStep], error: GenericError) -> RequestError:
        return cls(_Variant.PATH, path_error=PathError(list(path), _check_generic(error)))

    @classmethod
    def field(cls, field: object, error: GenericError) -> RequestError:
        return cls.path([_field(field)], error)

    @classmethod
    def field_index(cls, field: object, index: int, error: GenericError) -> RequestError:
        return cls.path([_field(field), _index(index)], error)

    @classmethod
    def field_key(cls, field: object, key: object, error: GenericError) -> RequestError:
        return cls.path([_field(field), _key(key)], error)

    @classmethod
    def field_parse(cls, field: object, error: GenericError) -> RequestError:
        return cls.path(PathError.parse_path(str(field)), error)

    @classmethod
    def index(cls, index: int, error: GenericError) -> RequestError:
        return cls.path([_index(index)], error)

    @classmethod
    def key(cls, key: object, error: GenericError) -> RequestError:
        return cls.path([_key(key)], error)

    def wrap_path(self, path: Iterable[PathErrorStep]) -> RequestError:
        """Prefix the error's path with ``path``."""
        steps = list(path)
        if self._variant is _Variant.PATH:
            assert self.path_error is not None
            return RequestError.path(steps + self.path_error.path, self.path_error.error)
        if self._variant is _Variant.GENERIC:
            return RequestError.path(steps, self.error)  # type: ignore[arg-type]
        raise ValueError(f"cannot wrap error path `{steps}` for: {self!r}")

    def insert_path(self, path: Iterable[PathErrorStep], index: int) -> RequestError:
        """Insert ``path`` into the error's path before position ``index``."""
        steps = list(path)
        if self._variant is _Variant.PATH:
            assert self.path_error is not None
            current = self.path_error.path
            if not 0 <= index <= len(current):
                raise IndexError(f"insert index {index} out of range for path of {len(current)}")
            return RequestError.path(
                current[:index] + steps + current[index:], self.path_error.error
            )
        if self._variant is _Variant.GENERIC:
            return RequestError.path(steps, self.error)  # type: ignore[arg-type]
        raise ValueError(f"cannot insert error path `{steps}` for: {self!r}")

    def wrap_field(self, field: object) -> RequestError:
        return self.wrap_path([_field(field)])

    def wrap_index(self, index: int) -> RequestError:
        return self.wrap_path([_index(index)])

    def wrap_key(self, key: object) -> RequestError:
        return self.wrap_path([_key(key)])

    def wrap_field_index(self, field: object, index: int) -> RequestError:
        return self.wrap_path([_field(field), _index(index)])

    def wrap_field_key(self, field: object, key: object) -> RequestError:
        return self.wrap_path([_field(field), _key(key)])

    def wrap_request(self, name: object) -> RequestError:
        """Turn a field error into a bad request for the request called ``name``."""
        if self._variant is _Variant.PATH:
            assert self.path_error is not None
            return RequestError.bad_request(
                name, [(self.path_error.path_to_string(), self.path_error.error)]
            )
        if self._variant is _Variant.GENERIC:
            assert isinstance(self.error, GenericError)
            field_name = self.error.violating_field
            if field_name is not None:
                return RequestError.bad_request(name, [(field_name, self.error)])
        return self

    def code(self) -> Code:
        if self._variant is _Variant.PATH:
            assert self.path_error is not None
            return self.path_error.code()
        if self._variant is _Variant.GENERIC:
            assert isinstance(self.error, GenericError)
            return self.error.code()
        return Code.INVALID_ARGUMENT

    def details(self) -> list[Any]:
        if self._variant is _Variant.BAD_REQUEST:
            return [
                Any.pack_from(
                    BadRequest(
                        field_violations=[
                            FieldViolation(
                                field=violation.path_to_string(),
                                description=str(violation.error),
                            )
                            for violation in self.violations
                        ]
                    )
                )
            ]
        if self._variant is _Variant.PATH:
            assert self.path_error is not None
            return self.path_error.details()
        if self._variant is _Variant.GENERIC:
            assert isinstance(self.error, GenericError)
            return self.error.details()
        return []

    def to_status(self) -> Status:
        return Status(int(self.code()), str(self), self.details())


def _check_generic(error: object) -> GenericError:
    if not isinstance(error, GenericError):
        raise TypeError(f"expected a GenericError, got {type(error).__name__}")
    return error