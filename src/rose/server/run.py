"""Server runner — serves an ASGI callable with pounce.

Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``), but
rose hands over a live ASGI callable, so ``pounce.Server`` is used
directly.
"""

from __future__ import annotations

import logging

from rose._internal.types import ASGIApp

logger = logging.getLogger("rose.server")


def run_server(
    app: ASGIApp,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app*.

    Args:
        app: ASGI callable (usually a rose App or a platform application).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count. Reload mode always uses a single worker.
        reload: Restart on source changes (development only).
        log_level: Server log level (debug, info, warning, error).
        app_path: Optional ``"module:attribute"`` import string. When
            provided with *reload*, pounce reimports the app on each
            reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        log_level=log_level,
    )
    logger.info("Listening on http://%s:%d", host, port)
    server = Server(config, app, app_path=app_path)
    server.run()
