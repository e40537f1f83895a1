"""Maps fully-qualified Protobuf type names to values."""

from __future__ import annotations

from collections.abc import Iterable


class PathMap:
    """Ordered matcher table; the longest matching prefix wins."""

    def __init__(self, values: Iterable[tuple[object, object]] = ()) -> None:
        self._matchers: list[tuple[str, str]] = [(str(m), str(v)) for m, v in values]
        self._sort()

    def insert(self, matcher: object, value: object) -> None:
        self._matchers.append((str(matcher), str(value)))
        self._sort()

    def get_first(self, path: str) -> tuple[str, str] | None:
        """Return the exact match for ``path`` or else the last prefix match."""
        full_path = "." + path.strip().strip(".")
        best_match = None
        for matcher, value in self._matchers:
            if matcher == full_path:
                return matcher, value
            if full_path.startswith(matcher):
                best_match = (matcher, value)
        return best_match

    def get_first_field(self, path: str, field: str) -> tuple[str, str] | None:
        return self.get_first(f"{path}.{field}")

    def __len__(self) -> int:
        return len(self._matchers)

    def __repr__(self) -> str:
        return f"PathMap({self._matchers!r})"

    def _sort(self) -> None:
        self._matchers.sort(key=lambda item: item[0])