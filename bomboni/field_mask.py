"""Sets of field paths that select parts of a message."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class FieldMask:
    """A list of dotted field paths."""

    paths: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.paths = [str(path) for path in self.paths]

    def contains(self, path: str) -> bool:
        """Whether ``path`` is one of the mask's paths exactly."""
        return path in self.paths

    def masks(self, field_path: str) -> bool:
        """Whether some path of the mask is ``field_path`` or one of its ancestors."""
        field_steps = field_path.split(".")
        for path in self.paths:
            path_steps = path.split(".")
            if field_steps[: len(path_steps)] == path_steps and len(path_steps) <= len(field_steps):
                return True
        return False

    def to_json(self) -> str:
        """Encode as a comma-separated string."""
        return ",".join(self.paths)

    @classmethod
    def from_json(cls, value: str) -> FieldMask:
        """Decode a comma-separated string."""
        if not isinstance(value, str):
            raise TypeError("expected a string containing comma-separated elements")
        return cls(value.split(","))

    @classmethod
    def _from_iterable(cls, paths: Iterable[object]) -> FieldMask:
        return cls(list(paths))