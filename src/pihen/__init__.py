"""Pihen — JSON collections over HTTP, with CORS.

Bind a handful of HTTP methods under a URL, let pihen answer CORS
preflights, turn ``RequestError`` into status codes and encode results
as JSON.

Basic usage::

    from pihen import Collection, RequestError, Router, run

    def get_item(ctx, request, user):
        item = store.get(request.query.get("id"))
        if item is None:
            raise RequestError(404, "not found")
        return item

    router = Router().bind([
        Collection("/api/item", {"GET": get_item}, allowed_origin="https://app.example.com"),
    ])

    run(router)
"""

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "Collection",
    "ConfigurationError",
    "Context",
    "Method",
    "PihenError",
    "Request",
    "RequestError",
    "Response",
    "Router",
    "User",
    "bind",
    "get_context",
    "run",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pihen`` cheap; uvicorn is only imported by ``run``.
    """
    if name in ("Router", "bind"):
        from pihen import router as _router

        return getattr(_router, name)

    if name in ("Collection", "Method"):
        from pihen import collection as _collection

        return getattr(_collection, name)

    if name == "AppConfig":
        from pihen.config import AppConfig

        return AppConfig

    if name in ("Context", "get_context"):
        from pihen import context as _context

        return getattr(_context, name)

    if name == "Request":
        from pihen.http.request import Request

        return Request

    if name == "Response":
        from pihen.http.response import Response

        return Response

    if name == "User":
        from pihen.identity import User

        return User

    if name in ("PihenError", "ConfigurationError", "RequestError"):
        from pihen import errors as _errors

        return getattr(_errors, name)

    if name == "run":
        from pihen.server.dev import run

        return run

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
