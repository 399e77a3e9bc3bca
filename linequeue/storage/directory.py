"""TopicDirectory - topic name to line queue mapping."""

import threading
from types import MappingProxyType
from typing import Generic, Iterable, Mapping, TypeVar

from anystore.logging import get_logger

from linequeue.model import TopicCount
from linequeue.storage.lines import LineQueue

log = get_logger(__name__)

T = TypeVar("T")

Topics = Mapping[str, LineQueue]

EMPTY: Topics = MappingProxyType({})


class AtomicReference(Generic[T]):
    """
    A reference cell with compare-and-set semantics. The internal lock is
    only held for the identity check and pointer swap, never while user
    code runs.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> T:
        return self._value

    def compare_and_set(self, expected: T, value: T) -> bool:
        """Set `value` if the current value is (identical to) `expected`"""
        with self._lock:
            if self._value is not expected:
                return False
            self._value = value
            return True


class TopicDirectory:
    """
    Mapping of topic names to their line queues.

    The mapping itself is an immutable snapshot held in an
    `AtomicReference`. Structural changes (create, replace, remove, clear
    all) build a new snapshot and install it via compare-and-set, retrying
    on conflict. They never touch the per-queue locks, so they can't
    deadlock with line mutations.

    Topics are not removed when their queue becomes empty. Empty queues
    stay in the directory (hidden from `list_non_empty`) until the topic is
    removed explicitly or everything is cleared.
    """

    def __init__(self) -> None:
        self._topics: AtomicReference[Topics] = AtomicReference(EMPTY)

    def snapshot(self) -> Topics:
        """The current (read-only) topic mapping"""
        return self._topics.get()

    def topics(self) -> list[str]:
        return list(self.snapshot())

    def get_if_present(self, topic: str) -> LineQueue | None:
        return self.snapshot().get(topic)

    def get_or_create(self, topic: str) -> LineQueue:
        """
        Get the queue for `topic`, install a new empty one if there is none.
        Concurrent callers for the same topic all observe the same queue.
        """
        while True:
            current = self.snapshot()
            queue = current.get(topic)
            if queue is not None:
                return queue
            queue = LineQueue()
            if self._topics.compare_and_set(current, _assoc(current, topic, queue)):
                log.debug("Create topic", topic=topic)
                return queue

    def replace(self, topic: str, lines: Iterable[str]) -> int:
        """
        Install a new queue built from `lines` for `topic`, discarding the
        previous one.

        Returns:
            The size of the new queue
        """
        queue = LineQueue(lines)
        while True:
            current = self.snapshot()
            if self._topics.compare_and_set(current, _assoc(current, topic, queue)):
                log.debug("Replace topic", topic=topic, size=len(queue))
                return len(queue)

    def remove(self, topic: str) -> LineQueue | None:
        """Detach and return the queue for `topic` (if any)"""
        while True:
            current = self.snapshot()
            queue = current.get(topic)
            if queue is None:
                return None
            if self._topics.compare_and_set(current, _dissoc(current, topic)):
                log.debug("Remove topic", topic=topic)
                return queue

    def clear_all(self) -> int:
        """
        Replace the whole directory with an empty one.

        Returns:
            The summed sizes of all detached queues. Each size is read under
            its queue's lock after the swap, so the sum is a best-effort
            aggregate if other threads still hold a detached queue.
        """
        while True:
            current = self.snapshot()
            if self._topics.compare_and_set(current, EMPTY):
                break
        deleted = 0
        for queue in current.values():
            with queue.lock:
                deleted += queue.size()
        log.debug("Clear all topics", topics=len(current), deleted=deleted)
        return deleted

    def list_non_empty(self) -> list[TopicCount]:
        """Topics with at least one line and their counts, sorted by name"""
        counts = []
        for topic, queue in sorted(self.snapshot().items()):
            with queue.lock:
                count = queue.size()
            if count > 0:
                counts.append(TopicCount(topic=topic, count=count))
        return counts

    def __len__(self) -> int:
        return len(self.snapshot())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(topics={len(self)})>"


def _assoc(topics: Topics, topic: str, queue: LineQueue) -> Topics:
    return MappingProxyType({**topics, topic: queue})


def _dissoc(topics: Topics, topic: str) -> Topics:
    return MappingProxyType({k: v for k, v in topics.items() if k != topic})
