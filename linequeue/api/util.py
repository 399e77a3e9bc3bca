from typing import Annotated, Any

from anystore.logging import get_logger
from fastapi import Depends, Request
from fastapi.responses import PlainTextResponse

from linequeue.io import body_to_lines
from linequeue.model import Lines
from linequeue.store import QueueStore

log = get_logger("linequeue.api")

MEDIA_TYPE = "text/plain; charset=utf-8"


def get_store(request: Request) -> QueueStore:
    return request.app.state.store


async def get_lines(request: Request) -> Lines:
    return body_to_lines(await request.body())


Store = Annotated[QueueStore, Depends(get_store)]
BodyLines = Annotated[Lines, Depends(get_lines)]


def log_request(
    request: Request, topic: str | list[str], action: str, *lines: Any
) -> None:
    """Log the request once per line if the app runs in debug mode"""
    if not request.app.state.debug:
        return
    remote = request.client.host if request.client else None
    for line in lines or [""]:
        log.info(f"{action} {line}".strip(), remote=remote, topic=topic)


def empty_not_found(*_args: Any) -> PlainTextResponse:
    return PlainTextResponse("", status_code=404, media_type=MEDIA_TYPE)
