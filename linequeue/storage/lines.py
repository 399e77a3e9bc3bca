"""LineQueue - insertion-ordered set of unique lines."""

import threading
from typing import Iterable, Iterator


class LineQueue:
    """
    Ordered unique collection of lines for one topic.

    Backed by a dict (insertion ordered) for O(1) add, remove and membership
    tests. A removed line that is added again lands at the tail.

    The collection is not thread-safe by itself. Callers that share an
    instance between threads must hold `lock` for every mutation and for
    every read that needs a consistent view:

        ```python
        with queue.lock:
            queue.add("foo")
        ```
    """

    __slots__ = ("_data", "lock")

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self._data: dict[str, None] = dict.fromkeys(lines or ())
        self.lock = threading.Lock()

    def add(self, line: str) -> bool:
        """Append `line` if absent, return if it was newly inserted"""
        if line in self._data:
            return False
        self._data[line] = None
        return True

    def remove(self, line: str) -> bool:
        """Remove `line` if present, return if it was removed"""
        try:
            del self._data[line]
        except KeyError:
            return False
        return True

    def contains(self, line: str) -> bool:
        return line in self._data

    def clear(self) -> int:
        """Remove all lines, return the previous size"""
        size = len(self._data)
        self._data.clear()
        return size

    def size(self) -> int:
        return len(self._data)

    def head(self) -> str | None:
        """The earliest inserted surviving line (without removing it)"""
        return next(iter(self._data), None)

    def snapshot(self) -> tuple[str, ...]:
        """Immutable point-in-time copy of the lines in insertion order"""
        return tuple(self._data)

    def __contains__(self, line: object) -> bool:
        return line in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(size={len(self._data)})>"
