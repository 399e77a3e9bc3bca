"""Plain text request and response bodies: one line per item."""

import re
from typing import Any, Iterable

from linequeue.model import Lines, TopicCount

NEWLINES = re.compile(r"\n+")


def body_to_lines(body: bytes | str | None) -> Lines:
    """
    Split a request body into its non-empty lines. Duplicates are kept. Bytes that
    are not valid UTF-8 are replaced, never rejected.

    Examples:
        >>> body_to_lines(b"a\\n\\nb\\na\\n")
        ["a", "b", "a"]
    """
    if not body:
        return []
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return [line for line in NEWLINES.split(body) if line]


def to_line(value: Any) -> str:
    """Render a single value followed by a newline, `None` renders empty"""
    if value is None:
        return ""
    return f"{value}\n"


def to_lines(values: Iterable[Any] | None) -> str:
    if not values:
        return ""
    return "".join(to_line(v) for v in values)


def to_index(counts: Iterable[TopicCount]) -> str:
    return to_lines(f"{c.topic} {c.count}" for c in counts)
