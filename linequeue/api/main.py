from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException

from linequeue import __version__
from linequeue.api.util import (
    MEDIA_TYPE,
    BodyLines,
    Store,
    empty_not_found,
    log_request,
)
from linequeue.core.settings import Settings
from linequeue.io import to_index, to_line, to_lines
from linequeue.store import QueueStore

settings = Settings()


def text(body: str) -> PlainTextResponse:
    return PlainTextResponse(body, media_type=MEDIA_TYPE)


def get_app(store: QueueStore | None = None, debug: bool | None = None) -> FastAPI:
    """
    Build the http api for the given (or a new, empty) store. The store is
    available as `app.state.store`. If `debug` is not set, it is taken from
    the settings.
    """
    app = FastAPI(
        title="LQ",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.store = store or QueueStore()
    app.state.debug = settings.debug if debug is None else debug

    @app.middleware("http")
    async def plain_text_response(request: Request, call_next):
        response = await call_next(request)
        response.headers["content-type"] = MEDIA_TYPE
        return response

    # any unmatched path or method
    app.add_exception_handler(HTTPException, empty_not_found)

    @app.get("/")
    def index(store: Store) -> PlainTextResponse:
        return text(to_index(store.list_non_empty()))

    @app.delete("/")
    def clear_all(request: Request, store: Store) -> PlainTextResponse:
        log_request(request, "*", "clear")
        return text(to_line(store.clear_all()))

    @app.get("/{topic}")
    def read(topic: str, lines: BodyLines, store: Store) -> PlainTextResponse:
        if lines:
            return text(to_lines(store.read_matching(topic, lines)))
        return text(to_lines(store.read_all(topic)))

    @app.post("/{topic}")
    def push(
        request: Request, topic: str, lines: BodyLines, store: Store
    ) -> PlainTextResponse:
        log_request(request, topic, "append", *lines)
        return text(to_line(store.push(topic, lines)))

    @app.put("/{topic}")
    def replace(
        request: Request, topic: str, lines: BodyLines, store: Store
    ) -> PlainTextResponse:
        log_request(request, topic, "recreate", *lines)
        return text(to_line(store.replace(topic, lines)))

    @app.delete("/{topic}")
    def delete(
        request: Request, topic: str, lines: BodyLines, store: Store
    ) -> PlainTextResponse:
        log_request(request, topic, "delete", *lines)
        if lines:
            return text(to_line(store.delete_lines(topic, lines)))
        return text(to_line(store.clear(topic)))

    @app.post("/{topic}/shift")
    def shift(request: Request, topic: str, store: Store) -> PlainTextResponse:
        line = store.shift(topic)
        log_request(request, topic, "shift", line or "")
        return text(to_line(line))

    @app.post("/{source}/to/{target}")
    def move(
        request: Request, source: str, target: str, lines: BodyLines, store: Store
    ) -> PlainTextResponse:
        log_request(request, [source, target], "to", *lines)
        if lines:
            return text(to_lines(store.move_specific(source, target, lines)))
        return text(to_line(store.shift_over(source, target)))

    return app
