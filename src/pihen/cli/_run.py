"""``pihen run`` — serve a router on uvicorn."""

import argparse
import sys

from pihen.cli._resolve import app_import_string, resolve_router


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.router`` and serve it.

    ``--host``/``--port``/``--reload`` override the router's AppConfig.
    The import string is forwarded so reload can re-import the router.
    """
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from pihen.server.dev import run

    app_path, factory = app_import_string(args.router)
    run(
        router,
        args.host,
        args.port,
        reload=args.reload or router.config.reload,
        app_path=app_path,
        factory=factory,
    )
