"""
SiteSettingsFacade - site options exposed as named, typed fields.

Maps each public field name to a storage key in the host's option store,
coerces stored values to the declared type on read, and sanitizes input
before it is written.

Key behaviors:
- Reads substitute the declared default when the stored value is empty
- Listing skips descriptors without a storage key
- Writes re-read the field so the response reflects what was stored
- Every read and write requires the manage_options capability
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from site_api.domain.coerce import coerce, is_empty
from site_api.domain.policy import MANAGE_OPTIONS
from site_api.domain.sanitize import absint, sanitize_text_field

from .models import Context, FieldDescriptor, Forbidden, UnknownFieldError
from .ports import AuthorizationPort, OptionStorePort

logger = logging.getLogger(__name__)

SCHEMA_DRAFT = "http://json-schema.org/draft-04/schema#"


# --- Field Registry ---


class FieldRegistry:
    """Immutable, ordered table of field descriptors."""

    def __init__(self, descriptors: Iterable[FieldDescriptor], title: str = "site") -> None:
        fields: dict[str, FieldDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in fields:
                raise ValueError(f"Duplicate field name in registry: {descriptor.name!r}")
            fields[descriptor.name] = descriptor
        self._fields = fields
        self._ordered = tuple(fields.values())
        self.title = title

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._ordered)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def lookup(self, name: str) -> FieldDescriptor:
        """
        Find a descriptor by external name.

        Raises:
            UnknownFieldError: If no field has that name.
        """
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def list_all(self) -> tuple[FieldDescriptor, ...]:
        return self._ordered

    def mapped(self) -> tuple[FieldDescriptor, ...]:
        """Descriptors backed by a storage key, in registration order."""
        return tuple(d for d in self._ordered if d.is_mapped)

    def mappings(self) -> dict[str, str]:
        """External name to storage key for every mapped descriptor."""
        return {d.name: d.storage_key for d in self._ordered if d.storage_key}

    def schema(self) -> dict[str, Any]:
        """JSON Schema document describing every registered field."""
        properties: dict[str, Any] = {}
        for d in self._ordered:
            prop: dict[str, Any] = {
                "description": d.description,
                "type": d.value_type,
                "context": [c for c in ("view", "edit") if c in d.contexts],
            }
            if d.format:
                prop["format"] = d.format
            if d.has_default:
                prop["default"] = d.default
            properties[d.name] = prop

        return {
            "$schema": SCHEMA_DRAFT,
            "title": self.title,
            "type": "object",
            "properties": properties,
        }


DEFAULT_FIELDS = (
    FieldDescriptor(
        name="title",
        storage_key="blogname",
        value_type="string",
        description="Site Title",
        sanitizer=sanitize_text_field,
    ),
    FieldDescriptor(
        name="tagline",
        storage_key="blogdescription",
        value_type="string",
        description="Tagline",
        sanitizer=sanitize_text_field,
    ),
    FieldDescriptor(
        name="wordpress_url",
        storage_key="siteurl",
        value_type="string",
        description="WordPress Address (URL)",
        format="uri",
    ),
    FieldDescriptor(
        name="url",
        storage_key="home",
        value_type="string",
        description="Site Address (URL)",
        format="uri",
    ),
    FieldDescriptor(
        name="users_can_register",
        storage_key="users_can_register",
        value_type="boolean",
        description="Membership",
    ),
    FieldDescriptor(
        name="timezone_string",
        storage_key="timezone_string",
        value_type="string",
        description="Timezone",
        default="UTC",
    ),
    FieldDescriptor(
        name="date_format",
        storage_key="date_format",
        value_type="string",
        description="Date Format",
    ),
    FieldDescriptor(
        name="time_format",
        storage_key="time_format",
        value_type="string",
        description="Time Format",
    ),
    FieldDescriptor(
        name="start_of_week",
        storage_key="start_of_week",
        value_type="integer",
        description="Week Starts On",
        sanitizer=absint,
    ),
    FieldDescriptor(
        name="locale",
        storage_key="WPLANG",
        value_type="string",
        description="Site Language",
        default="en_US",
    ),
    FieldDescriptor(
        name="permalink_structure",
        storage_key="permalink_structure",
        value_type="string",
        description="Permalink Settings",
    ),
    FieldDescriptor(
        name="permalink_category_base",
        storage_key="category_base",
        value_type="string",
        description="Category base",
    ),
    FieldDescriptor(
        name="permalink_tag_base",
        storage_key="tag_base",
        value_type="string",
        description="Tag base",
    ),
)

DEFAULT_REGISTRY = FieldRegistry(DEFAULT_FIELDS)


# --- Facade ---


def resolve_value(descriptor: FieldDescriptor, stored: Any) -> Any:
    """Apply the default-if-empty rule, then coerce to the field type."""
    value = stored
    if is_empty(value) and descriptor.has_default:
        value = descriptor.default
    return coerce(value, descriptor.value_type)


class SiteSettingsFacade:
    """
    Read/write access to site options through the field registry.

    Provides:
    - get_all_fields: every mapped field, resolved
    - get_field: one field, resolved
    - update_field: sanitize, persist, re-read
    """

    def __init__(
        self,
        store: OptionStorePort,
        authorizer: AuthorizationPort,
        registry: FieldRegistry | None = None,
    ) -> None:
        self._store = store
        self._authorizer = authorizer
        self._registry = registry or DEFAULT_REGISTRY

    @property
    def registry(self) -> FieldRegistry:
        return self._registry

    def _require(self, action: str) -> None:
        if not self._authorizer.current_caller_can(MANAGE_OPTIONS):
            logger.warning("Denied %s of site options: missing %s", action, MANAGE_OPTIONS)
            raise Forbidden(MANAGE_OPTIONS, action)

    def _read(self, descriptor: FieldDescriptor) -> Any:
        assert descriptor.storage_key
        return resolve_value(descriptor, self._store.get(descriptor.storage_key))

    def get_all_fields(self, context: Context = "view") -> dict[str, Any]:
        """Resolve every field that has a storage mapping."""
        self._require("view")
        return {d.name: self._read(d) for d in self._registry.mapped()}

    def get_field(self, name: str, context: Context = "view") -> Any:
        """
        Resolve a single field.

        Unknown names fail before authorization is consulted.

        Raises:
            UnknownFieldError: Name not registered, or registered without storage.
            Forbidden: Caller lacks manage_options.
        """
        descriptor = self._registry.lookup(name)
        self._require("view")
        if not descriptor.is_mapped:
            raise UnknownFieldError(name)
        return self._read(descriptor)

    def check_update(self, name: str) -> FieldDescriptor:
        """
        Authorize an update and resolve its target descriptor.

        Raises:
            Forbidden: Caller lacks manage_options.
            UnknownFieldError: Name not registered, or registered without storage.
        """
        self._require("edit")
        descriptor = self._registry.lookup(name)
        if not descriptor.is_mapped:
            raise UnknownFieldError(name)
        return descriptor

    def update_field(self, name: str, raw_value: Any) -> Any:
        """
        Sanitize and persist a field, then return the stored value.

        Store failures propagate unchanged; nothing is rolled back.
        """
        descriptor = self.check_update(name)
        assert descriptor.storage_key
        value = descriptor.sanitize(raw_value)
        self._store.set(descriptor.storage_key, value)
        logger.info("Updated site option %s (%s)", name, descriptor.storage_key)
        return self.get_field(name, "edit")
