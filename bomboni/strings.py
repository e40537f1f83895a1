"""Conversion of identifiers between letter cases."""

from __future__ import annotations

import enum
import re

_DELIMITERS = re.compile(r"[_\- ]+")


class Case(enum.Enum):
    """Target letter case for :func:`str_to_case`."""

    SNAKE = "snake"
    SCREAMING_SNAKE = "screaming_snake"
    KEBAB = "kebab"
    COBOL = "cobol"
    PASCAL = "pascal"
    CAMEL = "camel"
    TITLE = "title"
    TRAIN = "train"
    LOWER = "lower"
    UPPER = "upper"
    FLAT = "flat"
    UPPER_FLAT = "upper_flat"


def _is_lower(ch: str) -> bool:
    return ch.islower()


def _is_upper(ch: str) -> bool:
    return ch.isupper()


def _is_digit(ch: str) -> bool:
    return ch.isdigit()


def _split_chunk(chunk: str) -> list[str]:
    words: list[str] = []
    start = 0
    for i in range(1, len(chunk)):
        prev, cur = chunk[i - 1], chunk[i]
        nxt = chunk[i + 1] if i + 1 < len(chunk) else ""
        split = (
            (_is_lower(prev) and _is_upper(cur))
            or (_is_upper(prev) and _is_digit(cur))
            or (_is_digit(prev) and _is_upper(cur))
            or (_is_digit(prev) and _is_lower(cur))
            or (_is_upper(prev) and _is_upper(cur) and nxt != "" and _is_lower(nxt))
        )
        if split:
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return [word for word in words if word]


def _split_words(s: str) -> list[str]:
    return [word for chunk in _DELIMITERS.split(s) if chunk for word in _split_chunk(chunk)]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def str_to_case(s: str, case: Case) -> str:
    """Split ``s`` into words and join them again in the given case."""
    words = _split_words(s)
    if case is Case.SNAKE:
        return "_".join(w.lower() for w in words)
    if case is Case.SCREAMING_SNAKE:
        return "_".join(w.upper() for w in words)
    if case is Case.KEBAB:
        return "-".join(w.lower() for w in words)
    if case is Case.COBOL:
        return "-".join(w.upper() for w in words)
    if case is Case.PASCAL:
        return "".join(_capitalize(w) for w in words)
    if case is Case.CAMEL:
        if not words:
            return ""
        return words[0].lower() + "".join(_capitalize(w) for w in words[1:])
    if case is Case.TITLE:
        return " ".join(_capitalize(w) for w in words)
    if case is Case.TRAIN:
        return "-".join(_capitalize(w) for w in words)
    if case is Case.LOWER:
        return " ".join(w.lower() for w in words)
    if case is Case.UPPER:
        return " ".join(w.upper() for w in words)
    if case is Case.FLAT:
        return "".join(w.lower() for w in words)
    if case is Case.UPPER_FLAT:
        return "".join(w.upper() for w in words)
    raise ValueError(f"unsupported case: {case!r}")