"""
Site settings component models.

Field descriptors, component input/output types and the error taxonomy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

ValueType = Literal["string", "integer", "boolean"]
Context = Literal["view", "edit"]

Sanitizer = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldDescriptor:
    """One externally visible site setting."""

    name: str
    storage_key: str | None
    value_type: ValueType
    description: str = ""
    default: Any = None
    sanitizer: Sanitizer | None = None
    contexts: frozenset[str] = frozenset({"view", "edit"})
    format: str | None = None

    @property
    def is_mapped(self) -> bool:
        """True when the field is backed by a storage key."""
        return bool(self.storage_key)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def sanitize(self, raw_value: Any) -> Any:
        """Apply the declared sanitizer, or return the input unchanged."""
        if self.sanitizer is None:
            return raw_value
        return self.sanitizer(raw_value)


# --- Component Inputs / Outputs ---


@dataclass(frozen=True)
class ListFieldsInput:
    """Input for reading every mapped field."""

    context: Context = "view"


@dataclass(frozen=True)
class GetFieldInput:
    """Input for reading a single field."""

    name: str
    context: Context = "view"


@dataclass(frozen=True)
class UpdateFieldInput:
    """Input for updating a single field."""

    name: str
    value: Any


@dataclass(frozen=True)
class FieldsOutput:
    """Resolved field values keyed by external name."""

    values: dict[str, Any] = field(default_factory=dict)


# --- Error Types ---


class SiteSettingsError(Exception):
    """Base site settings error."""

    pass


class Forbidden(SiteSettingsError):
    """Caller lacks the capability required for the operation."""

    def __init__(self, capability: str, action: str = "manage") -> None:
        self.capability = capability
        self.action = action
        super().__init__(f"Sorry, you are not allowed to {action} site options.")


class UnknownFieldError(SiteSettingsError):
    """Field name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid site option name: {name!r}")


class StoreFailure(SiteSettingsError):
    """The underlying option store failed to read or write."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Option store failure for '{key}': {reason}")
