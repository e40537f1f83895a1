"""Canonical RPC status codes."""

from __future__ import annotations

import enum


class Code(enum.IntEnum):
    """The canonical error codes of RPC status messages."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    def to_status_code(self) -> int:
        """Return the HTTP status code that corresponds to this code."""
        if self in (Code.INVALID_ARGUMENT, Code.FAILED_PRECONDITION, Code.OUT_OF_RANGE):
            return 400
        if self is Code.UNAUTHENTICATED:
            return 401
        if self is Code.PERMISSION_DENIED:
            return 403
        if self is Code.NOT_FOUND:
            return 404
        if self in (Code.ABORTED, Code.ALREADY_EXISTS):
            return 409
        if self is Code.RESOURCE_EXHAUSTED:
            return 429
        if self is Code.CANCELLED:
            return 499
        return 500

    @classmethod
    def from_name(cls, name: str) -> Code:
        """Look a code up by its protocol name, such as ``INVALID_ARGUMENT``."""
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown code name `{name}`") from None