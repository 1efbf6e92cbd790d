"""Immutable HTTP request handed to collection methods.

Metadata is frozen at creation. The body is read lazily; parsing it is
the handler's business.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from pihen._internal.asgi import Receive, Scope
from pihen.http.headers import Headers
from pihen.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An incoming HTTP request.

    ``method``, ``path``, ``headers`` and ``query`` are plain attributes.
    The body is available through ``await request.body()``,
    ``.text()`` and ``.json()``; the first read is cached.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str
    client: tuple[str, int] | None

    _receive: Receive

    # The field reference is frozen; the dict contents hold the cached body.
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def origin(self) -> str | None:
        """The ``Origin`` header sent by browsers on cross-origin calls."""
        return self.headers.get("origin")

    @property
    def url(self) -> str:
        """Path plus query string, as requested."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw.decode('latin-1')}"
        return self.path

    async def body(self) -> bytes:
        """Read the full request body. Cached after the first call."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield the body in the chunks the server delivers."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` on bad input."""
        return json.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
