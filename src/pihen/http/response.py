"""HTTP response built through chainable ``.with_*()`` transformations.

Each transformation returns a new Response; nothing is mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# The content type the dispatcher stamps on JSON results. Not the
# registered MIME type, but what existing clients expect.
JSON_CONTENT_TYPE = "text/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response.

    ``content_type`` of ``None`` sends no Content-Type header at all,
    which is what an empty preflight answer looks like.
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        name = name.lower()
        if name == "content-type":
            return self.content_type
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def text_error(message: str, status: int) -> Response:
    """A plain-text error response: *message* plus a newline.

    Matches the body and headers a stock HTTP server writes for errors,
    so clients that already parse those keep working.
    """
    return Response(
        body=f"{message}\n",
        status=status,
        content_type=TEXT_CONTENT_TYPE,
        headers=(("X-Content-Type-Options", "nosniff"),),
    )
