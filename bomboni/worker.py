"""Id generation for a single numbered worker."""

from __future__ import annotations

import time

from .date_time import UtcDateTime
from .id import Id

# Pause after the sequence number wraps, to avoid collisions.
_SLEEP_SECONDS = 1.0
_SEQUENCE_LIMIT = 0xFFFF


class WorkerIdGenerator:
    """Generates ids from the current time, a worker number and a sequence."""

    def __init__(self, worker: int) -> None:
        if not 0 <= worker <= 0xFFFF:
            raise ValueError(f"worker {worker} is out of range")
        self.worker = worker
        self.next_sequence = 0

    def __repr__(self) -> str:
        return f"WorkerIdGenerator(worker={self.worker}, next_sequence={self.next_sequence})"

    def _advance(self) -> bool:
        self.next_sequence += 1
        if self.next_sequence == _SEQUENCE_LIMIT:
            self.next_sequence = 0
            time.sleep(_SLEEP_SECONDS)
            return True
        return False

    def generate(self) -> Id:
        """Generate a new id."""
        item = Id.from_worker_parts(UtcDateTime.now(), self.worker, self.next_sequence)
        self._advance()
        return item

    def generate_multiple(self, count: int) -> list[Id]:
        """Generate ``count`` ids, reading the clock only when necessary."""
        ids: list[Id] = []
        if count <= 0:
            return ids
        now = UtcDateTime.now()
        for _ in range(count):
            ids.append(Id.from_worker_parts(now, self.worker, self.next_sequence))
            if self._advance():
                now = UtcDateTime.now()
        return ids