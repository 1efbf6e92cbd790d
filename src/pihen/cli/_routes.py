"""``pihen routes`` — list bound collections.

Prints one row per (url, method) with the collection's allowed origin
and the handler name.
"""

import argparse
import sys

from pihen.cli._resolve import resolve_router


def run_routes(args: argparse.Namespace) -> None:
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows: list[tuple[str, str, str, str]] = []
    for collection in router.collections:
        for verb, handler in collection.methods.items():
            handler_name = getattr(handler, "__qualname__", None) or repr(handler)
            rows.append((verb, collection.url, collection.allowed_origin, handler_name))

    if not rows:
        print("No collections bound.")
        return

    header = ("METHOD", "URL", "ORIGIN", "HANDLER")
    widths = [max(len(row[i]) for row in (header, *rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*header))
    print("-" * min(sum(widths) + 6 + max(len(row[3]) for row in rows), 80))
    for row in rows:
        print(fmt.format(*row))
