"""Application snapshot – Snapshot value and SnapshotCell holder.

A :class:`SnapshotCell` publishes a fully built :class:`Snapshot` with one
reference assignment.  Readers call :meth:`SnapshotCell.current` without
locking and always observe either the previous or the new snapshot, never a
mixture.  The write lock only serialises writers so generations stay
strictly increasing.
"""
from __future__ import annotations

import dataclasses
import threading
from datetime import UTC, datetime
from typing import Generic, TypeVar

T = TypeVar("T")

__all__ = ["Snapshot", "SnapshotCell"]


@dataclasses.dataclass(frozen=True, slots=True)
class Snapshot(Generic[T]):
    """Immutable snapshot of loaded items.

    Generation ``0`` is the empty placeholder present before the first
    successful refresh.
    """

    items: T
    generation: int = 0
    loaded_at: datetime | None = None

    @property
    def is_initialized(self) -> bool:
        return self.generation > 0


class SnapshotCell(Generic[T]):
    """Single-writer / multi-reader holder for the current snapshot."""

    def __init__(self, empty: T) -> None:
        self._current: Snapshot[T] = Snapshot(items=empty)
        self._write_lock = threading.Lock()

    def current(self) -> Snapshot[T]:
        return self._current

    def replace(self, items: T) -> Snapshot[T]:
        """Publish *items* as the next generation and return the new snapshot."""
        with self._write_lock:
            snapshot = Snapshot(
                items=items,
                generation=self._current.generation + 1,
                loaded_at=datetime.now(UTC),
            )
            self._current = snapshot
        return snapshot

    @property
    def generation(self) -> int:
        return self._current.generation
