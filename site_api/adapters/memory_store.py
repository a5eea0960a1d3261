"""In-memory option store adapter.

Implements OptionStorePort for development and tests.
Values live only as long as the process.
"""

from copy import deepcopy
from typing import Any


class InMemoryOptionStore:
    """Dict-backed option storage - suitable for single-process deployments."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return deepcopy(self._options.get(key))

    def set(self, key: str, value: Any) -> None:
        self._options[key] = deepcopy(value)

    def snapshot(self) -> dict[str, Any]:
        """Copy of every stored option - useful for asserting on writes."""
        return deepcopy(self._options)

    def clear(self) -> None:
        """Clear all options - useful for testing."""
        self._options.clear()
