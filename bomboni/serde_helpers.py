"""Helpers for encoding values to and from JSON-compatible data."""

from __future__ import annotations

import datetime as _dt
import math
import sys
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from .duration import Duration, DurationError

T = TypeVar("T")


def is_default(value: Any) -> bool:
    """Whether ``value`` equals the default value of its type."""
    return value == type(value)()


def default_bool_true() -> bool:
    return True


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_string_serialize(value: Any) -> str:
    """Encode a value as its text form."""
    return _to_text(value)


def as_string_deserialize(value: Any, parse: Callable[[str], T]) -> T:
    """Decode a value from a string with ``parse``."""
    if not isinstance(value, str):
        raise TypeError(f"invalid type: expected a string, got {type(value).__name__}")
    try:
        return parse(value)
    except (ValueError, TypeError):
        raise ValueError("unexpected string value") from None


def string_list_serialize(values: Iterable[Any]) -> str:
    """Encode values as one comma-separated string."""
    return ",".join(_to_text(value) for value in values)


def string_list_deserialize(value: Any, parse: Callable[[str], T] = str) -> list[T]:
    """Decode a comma-separated string, parsing every element."""
    if not isinstance(value, str):
        raise TypeError("expected a string containing comma-separated elements")
    try:
        return [parse(part) for part in value.split(",")]
    except (ValueError, TypeError) as err:
        raise ValueError(str(err)) from err


def is_truthy(value: Any, include_zero: bool = False) -> bool:
    """Truthiness of a JSON value; zero counts only with ``include_zero``."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.copysign(math.inf, value)
        if include_zero:
            return not math.isnan(number)
        return math.isfinite(number) and abs(number) >= sys.float_info.min
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def merge_json(a: Any, b: Any) -> Any:
    """Merge ``b`` into ``a`` and return the result.

    When both are objects, ``a`` is updated in place: keys of ``b`` set to
    ``None`` are removed and other keys are merged recursively. Otherwise the
    result is ``b``.
    """
    if isinstance(a, dict) and isinstance(b, dict):
        for key, item in b.items():
            if item is None:
                a.pop(key, None)
            else:
                a[key] = merge_json(a.get(key), item)
        return a
    return b


def duration_serialize(value: Duration | _dt.timedelta) -> str:
    """Encode a duration or timedelta as duration text."""
    try:
        if isinstance(value, Duration):
            d = value
        elif isinstance(value, _dt.timedelta):
            d = Duration.from_timedelta(value)
        else:
            raise TypeError(f"unsupported duration type {type(value).__name__}")
    except (DurationError, TypeError) as err:
        raise ValueError(f"cannot serialize duration: {err}") from err
    return str(d)


def duration_deserialize(value: Any, convert: Callable[[Duration], T] | None = None) -> Any:
    """Decode duration text, then optionally convert it with ``convert``."""
    if not isinstance(value, str):
        raise TypeError("expected a duration string")
    try:
        d = Duration.parse(value)
    except DurationError as err:
        raise ValueError(f"cannot deserialize duration: {err}") from err
    if convert is None:
        return d
    try:
        return convert(d)
    except (ValueError, TypeError, OverflowError) as err:
        raise ValueError(f"cannot convert duration: {err}") from err