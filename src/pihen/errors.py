"""Pihen exception hierarchy.

Handlers raise ``RequestError`` for expected, user-facing failures.
Anything else that escapes a handler is treated as unexpected and
answered with a 500.
"""


class PihenError(Exception):
    """Base for all pihen-specific errors."""


class ConfigurationError(PihenError):
    """Raised when a collection or router is set up incorrectly.

    Surfaces at bind time, never while serving a request.
    """


class RequestError(PihenError):
    """A classified request failure with an explicit HTTP status.

    Raise it from a handler to answer with ``status`` and ``message``::

        def get_item(ctx, request, user):
            raise RequestError(404, "not found")

    Unexpected errors should bubble up unchanged.
    """

    status: int
    message: str

    def __init__(self, status: int, message: str = "") -> None:
        if not 100 <= status <= 599:
            msg = f"RequestError status must be a valid HTTP status code, got {status}"
            raise ValueError(msg)
        super().__init__(status, message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} ({self.status})"
