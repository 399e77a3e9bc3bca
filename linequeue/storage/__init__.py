"""Layer 1: In-memory data structures.

The line queue is a plain ordered set, the directory maps topic names to
line queues. Neither knows about transport or request handling.
"""

from linequeue.storage.directory import AtomicReference, TopicDirectory
from linequeue.storage.lines import LineQueue

__all__ = [
    "AtomicReference",
    "LineQueue",
    "TopicDirectory",
]
