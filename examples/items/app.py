"""Items — a JSON collection API for a browser front end on another origin.

Two collections:

- ``/api/items``: GET lists items, POST creates one.
- ``/api/item/``: GET, PUT and DELETE a single item at ``/api/item/<id>``.

Run:
    cd examples/items && python app.py
"""

import threading
from dataclasses import dataclass, replace

from pihen import Collection, RequestError, Router, run

FRONTEND_ORIGIN = "http://localhost:3000"


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool = False


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _item_id(ctx, request) -> int:
    raw = request.path.removeprefix(ctx.collection_url)
    if not raw.isdigit():
        raise RequestError(400, f"invalid item id {raw!r}")
    return int(raw)


def _lookup(item_id: int) -> Item:
    item = _items.get(item_id)
    if item is None:
        raise RequestError(404, "not found")
    return item


async def _payload(request) -> dict:
    try:
        payload = await request.json()
    except ValueError:
        raise RequestError(400, "body must be JSON") from None
    if not isinstance(payload, dict):
        raise RequestError(400, "body must be a JSON object")
    return payload


async def _title(request) -> str:
    title = (await _payload(request)).get("title")
    if not isinstance(title, str) or not title.strip():
        raise RequestError(400, "title is required")
    return title.strip()


# -- /api/items -------------------------------------------------------------


def list_items(ctx, request, user):
    return sorted(_items.values(), key=lambda item: item.id)


async def create_item(ctx, request, user):
    global _next_id
    title = await _title(request)
    with _lock:
        item = Item(id=_next_id, title=title)
        _items[item.id] = item
        _next_id += 1
    ctx.log.info("created item %d", item.id)
    return item


# -- /api/item/<id> ---------------------------------------------------------


def get_item(ctx, request, user):
    return _lookup(_item_id(ctx, request))


async def update_item(ctx, request, user):
    item = _lookup(_item_id(ctx, request))
    payload = await _payload(request)
    updated = replace(
        item,
        title=payload.get("title", item.title),
        done=bool(payload.get("done", item.done)),
    )
    with _lock:
        _items[item.id] = updated
    return updated


def delete_item(ctx, request, user):
    item = _lookup(_item_id(ctx, request))
    with _lock:
        del _items[item.id]
    return {"deleted": item.id}


router = Router().bind(
    [
        Collection(
            "/api/items",
            {"GET": list_items, "POST": create_item},
            allowed_origin=FRONTEND_ORIGIN,
        ),
        Collection(
            "/api/item/",
            {"GET": get_item, "PUT": update_item, "DELETE": delete_item},
            allowed_origin=FRONTEND_ORIGIN,
        ),
    ]
)


if __name__ == "__main__":
    run(router)
