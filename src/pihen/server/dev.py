"""Server start — runs a router on uvicorn.

The router is built by the entry point and handed over explicitly;
there is no process-wide registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pihen.errors import ConfigurationError

if TYPE_CHECKING:
    from pihen.router import Router


def run(
    router: Router,
    host: str | None = None,
    port: int | None = None,
    *,
    reload: bool | None = None,
    app_path: str | None = None,
    factory: bool = False,
) -> None:
    """Serve *router* until interrupted.

    Args:
        router: The bound router to serve.
        host: Bind address; defaults to ``router.config.host``.
        port: Bind port; defaults to ``router.config.port``.
        reload: Restart on code changes; defaults to ``router.config.reload``.
        app_path: ``"module:attribute"`` import string for the router.
            Required for reload, since uvicorn re-imports the app on
            every restart.
        factory: Whether *app_path* names a function returning the router
            rather than the router itself.
    """
    import uvicorn

    config = router.config
    reload = config.reload if reload is None else reload
    if reload and app_path is None:
        msg = "Reload needs an import string (e.g. 'myapi:router'), not a live router."
        raise ConfigurationError(msg)

    router.freeze()
    uvicorn.run(
        app_path if reload else router,
        host=config.host if host is None else host,
        port=config.port if port is None else port,
        reload=reload,
        factory=reload and factory,
        log_level=config.log_level,
    )
