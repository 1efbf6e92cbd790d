"""Caller identity passed to handlers.

Every handler receives ``user: User | None`` as its third argument.
Identity lookup is not wired up yet, so the dispatcher always passes
``None``; handlers that need a caller must cope with its absence.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    """A signed-in user as reported by the hosting platform."""

    email: str
    user_id: str = ""
    auth_domain: str = ""
    admin: bool = False
    federated_identity: str = ""

    def __str__(self) -> str:
        return self.email
