from typing import Annotated, Optional

import typer
import uvicorn
from anystore.cli import ErrorHandler
from anystore.logging import configure_logging, get_logger
from rich.console import Console

from linequeue import __version__
from linequeue.api.main import get_app
from linequeue.core.settings import Settings
from linequeue.store import QueueStore

settings = Settings()
cli = typer.Typer(
    no_args_is_help=True,
    pretty_exceptions_enable=settings.debug,
    name="LQ",
)
console = Console(stderr=True)
log = get_logger(__name__)


@cli.callback(invoke_without_command=True)
def cli_lq(
    version: Annotated[Optional[bool], typer.Option(..., help="Show version")] = False,
    settings: Annotated[
        Optional[bool], typer.Option(..., help="Show current settings")
    ] = False,
):
    if version:
        console.print(__version__)
        raise typer.Exit()
    settings_ = Settings()
    configure_logging(level=settings_.log_level)
    if settings:
        console.print(settings_)
        raise typer.Exit()


@cli.command("serve")
def cli_serve(
    port: Annotated[int, typer.Argument(help="Port number", min=1, max=65535)],
    debug: Annotated[
        bool, typer.Option("-d", "--debug", help="Log every mutating request")
    ] = False,
    host: Annotated[Optional[str], typer.Option(help="Bind to this interface")] = None,
):
    """
    Start the LQ http server with a new, empty store
    """
    with ErrorHandler():
        host = host or settings.host
        app = get_app(QueueStore(), debug=debug or settings.debug)
        log.info(f"Start LQ server at port {port}", host=host, port=port)
        uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
