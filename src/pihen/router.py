"""Router — the dispatch table, as an ASGI application.

Collections are bound during setup; the first request (or the ASGI
lifespan startup) freezes the table into an immutable lookup.

Matching follows the familiar server pattern rules:

- ``/api/items`` serves exactly ``/api/items``;
- ``/api/items/`` serves ``/api/items/`` and everything below it;
- the longest matching url wins;
- ``/api/items`` is redirected to ``/api/items/`` when only the
  subtree form is bound.

Usage::

    router = Router()
    router.bind([
        Collection("/api/items", {"GET": list_items}, allowed_origin="*"),
    ])
    run(router)
"""

from __future__ import annotations

import html
import logging
import threading
from collections.abc import Iterable

from pihen._internal.asgi import Receive, Scope, Send
from pihen.collection import Collection
from pihen.config import AppConfig
from pihen.errors import ConfigurationError
from pihen.http.response import Response, text_error
from pihen.server.handler import CollectionHandler
from pihen.server.sender import send_response

logger = logging.getLogger("pihen.server")


class Router:
    """Maps request paths to collection handlers.

    Read-only once frozen, so concurrent requests share it without locks.
    """

    __slots__ = ("_collections", "_exact", "_freeze_lock", "_frozen", "_subtrees", "config")

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self._collections: dict[str, Collection] = {}
        self._exact: dict[str, CollectionHandler] = {}
        self._subtrees: tuple[tuple[str, CollectionHandler], ...] = ()
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Setup --

    def bind(self, collections: Iterable[Collection]) -> Router:
        """Register *collections*. Returns the router for chaining.

        Raises:
            ConfigurationError: A url is already bound.
            RuntimeError: The router is already serving requests.
        """
        if self._frozen:
            msg = "Cannot bind collections after the router has started serving."
            raise RuntimeError(msg)

        batch: dict[str, Collection] = {}
        for collection in collections:
            if collection.url in self._collections or collection.url in batch:
                msg = f"Multiple collections bound to {collection.url!r}"
                raise ConfigurationError(msg)
            batch[collection.url] = collection

        self._collections.update(batch)
        for collection in batch.values():
            logger.debug("Bound %s [%s]", collection.url, collection.allow_methods)
        return self

    @property
    def collections(self) -> tuple[Collection, ...]:
        """Bound collections, in binding order."""
        return tuple(self._collections.values())

    def freeze(self) -> None:
        """Compile the lookup tables. Idempotent and thread-safe."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            handlers = {
                url: CollectionHandler(collection, self.config)
                for url, collection in self._collections.items()
            }
            self._exact = handlers
            self._subtrees = tuple(
                sorted(
                    (item for item in handlers.items() if item[1].collection.is_subtree),
                    key=lambda item: len(item[0]),
                    reverse=True,
                )
            )
            self._frozen = True

    # -- Lookup --

    def match(self, path: str) -> CollectionHandler | None:
        """Return the handler serving *path*, or ``None``.

        A bare subtree path is never served, even when a shorter subtree
        covers it; ``redirect_target()`` answers it instead.
        """
        self.freeze()
        handler = self._exact.get(path)
        if handler is not None:
            return handler
        if self.redirect_target(path) is not None:
            return None
        for url, subtree_handler in self._subtrees:
            if path.startswith(url):
                return subtree_handler
        return None

    def redirect_target(self, path: str) -> str | None:
        """The slash-terminated path to redirect to, if *path* names a bare subtree."""
        self.freeze()
        candidate = f"{path}/"
        if candidate in self._exact:
            return candidate
        return None

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        path = scope["path"]
        handler = self.match(path)
        if handler is not None:
            await handler(scope, receive, send)
            return

        target = self.redirect_target(path)
        if target is not None:
            query = scope.get("query_string", b"")
            if query:
                target = f"{target}?{query.decode('latin-1')}"
            await send_response(_moved_permanently(target, scope["method"]), send)
            return

        await send_response(text_error("404 page not found", 404), send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze on startup so the first request pays nothing."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self.freeze()
                logger.info("Serving %d collection(s)", len(self._collections))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def _moved_permanently(location: str, method: str) -> Response:
    if method not in ("GET", "HEAD"):
        return Response(status=301).with_header("Location", location)
    return Response(
        body=f'<a href="{html.escape(location)}">Moved Permanently</a>.\n\n',
        status=301,
        content_type="text/html; charset=utf-8",
    ).with_header("Location", location)


def bind(collections: Iterable[Collection], router: Router | None = None) -> Router:
    """Bind *collections* on *router*, creating one when none is given."""
    if router is None:
        router = Router()
    return router.bind(collections)
