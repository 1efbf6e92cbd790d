"""Call sync or async handlers uniformly.

Collection methods can be ``def`` or ``async def``.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any) -> Any:
    """Call *handler* and await the result if it is awaitable::

        def list_items(ctx, request, user):
            return store.all()

        async def list_items(ctx, request, user):
            return await store.fetch_all()
    """
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
