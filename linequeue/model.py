from typing import TypeAlias

from anystore.model import BaseModel

Lines: TypeAlias = list[str]


class TopicCount(BaseModel):
    """Entry of the topic index"""

    topic: str
    """Topic name"""
    count: int
    """Number of lines currently in the topic's queue"""
