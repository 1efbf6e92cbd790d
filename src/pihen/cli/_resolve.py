"""Resolve ``"module:attribute"`` strings to Router instances.

Shared by ``pihen run`` and ``pihen routes``.
"""

import importlib

from pihen.router import Router


def _split(import_string: str) -> tuple[str, str]:
    module_path, _, attr_name = import_string.partition(":")
    return module_path, attr_name or "router"


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a pihen ``Router``.

    The attribute defaults to ``router`` (``"myapi"`` means
    ``myapi.router``). A callable that is not a Router is treated as a
    factory and called with no arguments.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The attribute does not exist on the module.
        TypeError: The object (or the factory's result) is not a Router.
    """
    module_path, attr_name = _split(import_string)
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a pihen.Router"
        raise TypeError(msg)
    return obj


def app_import_string(import_string: str) -> tuple[str, bool]:
    """The ``"module:attribute"`` form of *import_string* for re-importing.

    Returns the normalised string and whether the attribute is a router
    factory rather than a router. Call after ``resolve_router()`` has
    succeeded, so the module is already imported.
    """
    module_path, attr_name = _split(import_string)
    obj = getattr(importlib.import_module(module_path), attr_name)
    return f"{module_path}:{attr_name}", not isinstance(obj, Router)
