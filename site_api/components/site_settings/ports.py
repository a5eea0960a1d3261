"""
Site settings component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class OptionStorePort(Protocol):
    """Key/value option store owned by the host application."""

    def get(self, key: str) -> Any | None:
        """Get the stored value, or None if the key was never set."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value (upsert). Raises StoreFailure on failure."""
        ...


class AuthorizationPort(Protocol):
    """Capability check for the caller of the current request."""

    def current_caller_can(self, capability: str) -> bool:
        ...
