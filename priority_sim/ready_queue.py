from __future__ import annotations

import heapq
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .process import ProcessState


def compare(a: ProcessState, b: ProcessState) -> int:
    """Return 1 if ``a`` should run before ``b``, -1 if after, 0 for the same process."""

    key_a = a.sort_key()
    key_b = b.sort_key()
    if key_a < key_b:
        return 1
    if key_a > key_b:
        return -1
    return 0


@dataclass(slots=True)
class _HeapItem:
    index: int
    process: ProcessState = field(repr=False, compare=False)

    def __lt__(self, other: _HeapItem) -> bool:
        # keys are read live so that aging only needs a heapify afterwards
        return self.process.sort_key() < other.process.sort_key()


class ReadyQueue:
    """Max-heap of process-table indices ordered by live effective priority."""

    def __init__(self, table: Sequence[ProcessState]) -> None:
        self._table = table
        self._heap: list[_HeapItem] = []

    def push(self, index: int) -> None:
        heapq.heappush(self._heap, _HeapItem(index, self._table[index]))

    def pop(self) -> int | None:
        if not self._heap:
            return None
        return heapq.heappop(self._heap).index

    def peek(self) -> int | None:
        if not self._heap:
            return None
        return self._heap[0].index

    def reheapify(self) -> None:
        """Restore heap order after priorities were changed in place."""

        heapq.heapify(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    @property
    def size(self) -> int:
        return len(self._heap)

    def indices(self) -> list[int]:
        """Raw heap contents, in heap (not priority) order."""

        return [item.index for item in self._heap]

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices())

    def __contains__(self, index: object) -> bool:
        return any(item.index == index for item in self._heap)
