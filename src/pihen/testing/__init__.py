"""Test utilities for pihen routers::

    from pihen.testing import TestClient
"""

from pihen.testing.client import TestClient

__all__ = ["TestClient"]
