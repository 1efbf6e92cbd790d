"""Collections — a set of HTTP methods bound to one URL.

A ``Collection`` is one row of the dispatch table::

    items = Collection(
        url="/api/items",
        methods={"GET": list_items, "POST": create_item},
        allowed_origin="https://app.example.com",
    )

Each method receives ``(ctx, request, user)`` and returns any
JSON-encodable value, or raises ``RequestError`` to fail the request.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias

from pihen.context import Context
from pihen.errors import ConfigurationError
from pihen.http.request import Request
from pihen.identity import User

Method: TypeAlias = Callable[[Context, Request, User | None], Any]


@dataclass(frozen=True, slots=True)
class Collection:
    """Methods bound to a URL, plus the origin allowed to call them.

    ``url`` follows the usual server pattern rules: a url ending in
    ``/`` serves the whole subtree below it, anything else serves only
    that exact path.

    Verb names are normalised to upper case and the mapping is frozen
    on construction, so a collection never changes after startup.
    """

    url: str
    methods: Mapping[str, Method]
    allowed_origin: str = "*"

    def __post_init__(self) -> None:
        if not self.url.startswith("/"):
            msg = f"Collection url must start with '/', got {self.url!r}"
            raise ConfigurationError(msg)

        normalised: dict[str, Method] = {}
        for verb, handler in self.methods.items():
            key = verb.strip().upper()
            if not key:
                msg = f"Empty HTTP method name in collection {self.url!r}"
                raise ConfigurationError(msg)
            if key in normalised:
                msg = f"HTTP method {key} bound twice in collection {self.url!r}"
                raise ConfigurationError(msg)
            if not callable(handler):
                msg = f"{key} {self.url}: handler must be callable, got {type(handler).__name__}"
                raise ConfigurationError(msg)
            normalised[key] = handler
        object.__setattr__(self, "methods", MappingProxyType(normalised))

    @property
    def is_subtree(self) -> bool:
        """True if the url serves every path below it."""
        return self.url.endswith("/")

    @property
    def allow_methods(self) -> str:
        """Comma-joined verb names for ``Access-Control-Allow-Methods``."""
        return ",".join(self.methods)

    def handler_for(self, verb: str) -> Method | None:
        return self.methods.get(verb)
