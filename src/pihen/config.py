"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation, handed to
the router at construction and to every request context.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Server and request settings. Immutable after creation.

    Override what you need::

        config = AppConfig(port=8080, log_level="debug")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False  # Restart on code changes (requires an import string)

    # Logging
    log_level: str = "info"

    # Incoming header carrying a caller-supplied request id
    request_id_header: str = "X-Request-Id"
