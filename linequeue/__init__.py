"""LQ: named queues of unique lines of text, in memory, over HTTP."""

from linequeue.storage import LineQueue, TopicDirectory
from linequeue.store import QueueStore

__version__ = "0.1.0"

__all__ = [
    "LineQueue",
    "QueueStore",
    "TopicDirectory",
]
