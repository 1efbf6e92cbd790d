"""Per-request execution context.

The dispatcher builds one ``Context`` per request and passes it as the
first argument to the collection method. It carries the request id and
a logger that tags every line with it.

The current context is also published in a ``ContextVar`` so helpers
deep in a handler's call stack can reach it via ``get_context()``.
``ContextVar`` is task-local under asyncio, so no locking is needed.
"""

import logging
import uuid
from collections.abc import MutableMapping
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from pihen.config import AppConfig
from pihen.http.request import Request

logger = logging.getLogger("pihen.request")


class RequestLogger(logging.LoggerAdapter):
    """Prefixes messages with the request id and exposes it as ``extra``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        request_id = self.extra["request_id"] if self.extra else "-"
        kwargs.setdefault("extra", {}).update(self.extra or {})
        return f"[{request_id}] {msg}", kwargs


@dataclass(frozen=True, slots=True)
class Context:
    """What a collection method knows about the request beyond the request."""

    request_id: str
    collection_url: str
    config: AppConfig
    log: RequestLogger


context_var: ContextVar[Context] = ContextVar("pihen_context")


def new_context(request: Request, collection_url: str, config: AppConfig) -> Context:
    """Build the context for *request*, reusing a caller-supplied request id."""
    request_id = request.headers.get(config.request_id_header) or uuid.uuid4().hex
    return Context(
        request_id=request_id,
        collection_url=collection_url,
        config=config,
        log=RequestLogger(logger, {"request_id": request_id}),
    )


def get_context() -> Context:
    """Return the context of the request being handled.

    Raises ``LookupError`` outside a request.
    """
    return context_var.get()
