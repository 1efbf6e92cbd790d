"""Collection dispatcher — the ASGI app behind one bound URL.

For every request it:

1. stamps ``Access-Control-Allow-Origin`` with the collection's origin;
2. answers ``OPTIONS`` preflights from the collection's verb set,
   without calling any method;
3. answers 405 when no method is bound for the verb;
4. otherwise calls the method with ``(ctx, request, None)`` and turns
   its result into a JSON response, or its exception into an error.
"""

from pihen._internal.asgi import Receive, Scope, Send
from pihen._internal.invoke import invoke
from pihen.collection import Collection
from pihen.config import AppConfig
from pihen.context import context_var, new_context
from pihen.errors import RequestError
from pihen.http.request import Request
from pihen.http.response import JSON_CONTENT_TYPE, Response, text_error
from pihen.server.encoding import encode_json
from pihen.server.errors import handle_internal_error, handle_request_error
from pihen.server.sender import send_response


class CollectionHandler:
    """Serve one ``Collection``. Stateless; safe to share across requests."""

    __slots__ = ("collection", "config")

    def __init__(self, collection: Collection, config: AppConfig) -> None:
        self.collection = collection
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request.from_asgi(scope, receive)
        response = await self.dispatch(request)
        await send_response(response, send)

    async def dispatch(self, request: Request) -> Response:
        """Produce the response for *request*. Never raises for handler errors."""
        response = await self._respond(request)
        return response.with_header("Access-Control-Allow-Origin", self.collection.allowed_origin)

    async def _respond(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return (
                Response()
                .with_header("Access-Control-Allow-Headers", "Content-Type")
                .with_header("Access-Control-Allow-Methods", self.collection.allow_methods)
            )

        method = self.collection.handler_for(request.method)
        if method is None:
            return text_error("Method not allowed.", 405)

        ctx = new_context(request, self.collection.url, self.config)
        token = context_var.set(ctx)
        try:
            result = await invoke(method, ctx, request, None)
            # Encode before anything is sent, so an unencodable result
            # still becomes a clean 500.
            body = encode_json(result)
        except RequestError as exc:
            return handle_request_error(exc, ctx)
        except Exception as exc:
            return handle_internal_error(exc, ctx)
        finally:
            context_var.reset(token)

        return Response(body=body, content_type=JSON_CONTENT_TYPE)
