"""Start a pounce ASGI server with a live finch App.

Pounce's ``run()`` takes an import string, but finch has a live ``App``
object, so ``pounce.Server`` is used directly with the ASGI callable.
"""

from pounce.config import ServerConfig
from pounce.server import Server


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
) -> None:
    """Serve *app* on *host*:*port* until interrupted.

    Args:
        app: ASGI callable (finch App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        reload: Restart on source changes (development only).
    """
    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
    )
    server = Server(config, app)
    server.run()
