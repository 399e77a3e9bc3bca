"""QueueStore - line level operations on named queues."""

from contextlib import contextmanager
from typing import Callable, Generator, Iterable

from anystore.logging import get_logger

from linequeue.model import Lines, TopicCount
from linequeue.storage import LineQueue, TopicDirectory

log = get_logger(__name__)

Extract = Callable[[LineQueue], Lines]


class QueueStore:
    """
    Named queues of unique lines.

    Every operation locks exactly the queue(s) it touches, one at a time.
    No operation holds two queue locks at once, therefore moving lines
    between topics is two-phase: extract under the source lock, release it,
    insert under the destination lock. Between the two phases the moved
    lines are in neither queue for concurrent observers.

    Queue objects are resolved from the directory on every call and never
    cached: a concurrent `replace` or topic deletion may detach a queue
    while another thread is still mutating it. That mutation completes on
    the detached queue and is not visible afterwards.

    Example:
        ```python
        store = QueueStore()
        store.push("foo", ["a", "b", "c"])  # 3
        store.shift("foo")  # "a"
        store.move_specific("foo", "bar", ["c", "x"])  # ["c"]
        ```
    """

    def __init__(self, directory: TopicDirectory | None = None) -> None:
        self.directory = directory or TopicDirectory()

    @contextmanager
    def locked(
        self, topic: str, create: bool = False
    ) -> Generator[LineQueue | None, None, None]:
        """Resolve the queue for `topic` and hold its lock. Yields `None` if
        the topic doesn't exist and `create` is not set."""
        if create:
            queue = self.directory.get_or_create(topic)
        else:
            queue = self.directory.get_if_present(topic)
        if queue is None:
            yield None
            return
        with queue.lock:
            yield queue

    def push(self, topic: str, lines: Iterable[str]) -> int:
        """
        Append lines to the queue, creating it if needed.

        Returns:
            Number of newly inserted lines (duplicates don't count)
        """
        with self.locked(topic, create=True) as queue:
            added = sum(1 for line in lines if queue.add(line))
        log.debug("Push", topic=topic, added=added)
        return added

    def delete_lines(self, topic: str, lines: Iterable[str]) -> int:
        """Remove the given lines, return how many were actually removed"""
        with self.locked(topic) as queue:
            if queue is None:
                return 0
            removed = sum(1 for line in lines if queue.remove(line))
        log.debug("Delete lines", topic=topic, removed=removed)
        return removed

    def clear(self, topic: str) -> int:
        """Empty the queue, return its previous size"""
        with self.locked(topic) as queue:
            if queue is None:
                return 0
            cleared = queue.clear()
        log.debug("Clear", topic=topic, cleared=cleared)
        return cleared

    def read_all(self, topic: str) -> Lines:
        with self.locked(topic) as queue:
            if queue is None:
                return []
            return list(queue.snapshot())

    def read_matching(self, topic: str, lines: Iterable[str]) -> Lines:
        """The given lines that are present in the queue, in the given
        order (not the queue order)"""
        with self.locked(topic) as queue:
            if queue is None:
                return []
            return [line for line in lines if queue.contains(line)]

    def shift(self, topic: str) -> str | None:
        """Remove and return the earliest inserted line"""
        with self.locked(topic) as queue:
            if queue is None:
                return None
            line = _shift(queue)
        log.debug("Shift", topic=topic, line=line)
        return line

    def move_specific(self, source: str, target: str, lines: Iterable[str]) -> Lines:
        """
        Move the given lines from `source` to `target`.

        Returns:
            The lines that were present in `source`, in the given order. If
            none were, `target` is left untouched (and not created).
        """
        lines = list(lines)
        return self._move(
            source, target, lambda q: [line for line in lines if q.remove(line)]
        )

    def shift_over(self, source: str, target: str) -> str | None:
        """Shift the first line of `source` and push it to `target`"""
        moved = self._move(source, target, _shift_many)
        if moved:
            return moved[0]
        return None

    def replace(self, topic: str, lines: Iterable[str]) -> int:
        return self.directory.replace(topic, lines)

    def remove(self, topic: str) -> LineQueue | None:
        return self.directory.remove(topic)

    def clear_all(self) -> int:
        return self.directory.clear_all()

    def list_non_empty(self) -> list[TopicCount]:
        return self.directory.list_non_empty()

    def _move(self, source: str, target: str, extract: Extract) -> Lines:
        with self.locked(source) as queue:
            if queue is None:
                return []
            moved = extract(queue)
        if moved:
            with self.locked(target, create=True) as queue:
                for line in moved:
                    queue.add(line)
            log.debug("Move", source=source, target=target, moved=len(moved))
        return moved

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.directory})>"


def _shift(queue: LineQueue) -> str | None:
    line = queue.head()
    if line is not None:
        queue.remove(line)
    return line


def _shift_many(queue: LineQueue) -> Lines:
    line = _shift(queue)
    if line is None:
        return []
    return [line]
