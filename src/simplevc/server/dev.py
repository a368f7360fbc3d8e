"""Development server.

Serves a live ``App`` object with pounce in single-worker mode.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    log_level: str = "warning",
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app*.

    Pounce's ``run()`` takes an import string (``"myapp:app"``), but an
    ``App`` is a live object, so ``pounce.Server`` is used directly.

    Args:
        app: ASGI callable (an ``App`` instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        log_level: Pounce log level (debug, info, warning, error, critical).
        app_path: Optional ``"module:attribute"`` import string, so pounce
            can reimport the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
