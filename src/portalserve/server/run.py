"""Start a pounce ASGI server with a live portalserve App."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portalserve.app import App


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    reload: bool = False,
    workers: int = 1,
    access_log: bool = True,
    log_level: str = "info",
    log_format: str = "text",
) -> None:
    """Serve *app* until interrupted.

    Pounce's ``run()`` takes an import string, but we hold a live App
    object, so ``pounce.Server`` is used directly with the ASGI callable.
    Reload mode forces a single worker.

    Args:
        app: ASGI callable (portalserve App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on source changes (development).
        workers: Worker count when not reloading.
        access_log: Log one line per request.
        log_level: Server log level name.
        log_format: ``"text"`` or ``"json"``.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        access_log=access_log,
        log_level=log_level,
        log_format=log_format,
    )
    Server(config, app).run()
