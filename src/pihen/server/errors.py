"""Failure handling for collection methods.

Two kinds of failure reach the dispatcher:

- ``RequestError``: expected and user-facing. Answered with its own
  status and message, logged at INFO.
- anything else: unexpected. Answered with 500 and the error text,
  logged at ERROR with the traceback.
"""

from pihen.context import Context
from pihen.errors import RequestError
from pihen.http.response import Response, text_error


def handle_request_error(exc: RequestError, ctx: Context) -> Response:
    ctx.log.info("Api failure: %d %s", exc.status, exc.message)
    return text_error(exc.message, exc.status)


def handle_internal_error(exc: Exception, ctx: Context) -> Response:
    """Map an unexpected exception to a 500 carrying its text."""
    ctx.log.error("Unexpected error: %s", exc, exc_info=exc)
    return text_error(str(exc), 500)
