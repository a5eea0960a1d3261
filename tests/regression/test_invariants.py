"""
Regression tests for registry and read-path invariants.
"""

from site_api.adapters.memory_store import InMemoryOptionStore
from site_api.components.site_settings import (
    DEFAULT_REGISTRY,
    SiteSettingsFacade,
    resolve_value,
)


class AllowAll:
    def current_caller_can(self, capability: str) -> bool:
        return True


def test_names_are_unique():
    names = [d.name for d in DEFAULT_REGISTRY.list_all()]
    assert len(names) == len(set(names))


def test_every_descriptor_documents_both_contexts():
    for descriptor in DEFAULT_REGISTRY.list_all():
        assert descriptor.contexts == frozenset({"view", "edit"})
        assert descriptor.description


def test_defaults_already_match_their_type():
    for descriptor in DEFAULT_REGISTRY.list_all():
        if descriptor.has_default:
            assert resolve_value(descriptor, None) == descriptor.default


def test_list_size_equals_mapping_count():
    facade = SiteSettingsFacade(InMemoryOptionStore(), AllowAll())
    assert len(facade.get_all_fields()) == len(DEFAULT_REGISTRY.mappings())


def test_resolved_values_have_declared_types():
    python_types = {"string": str, "integer": int, "boolean": bool}
    store = InMemoryOptionStore({"blogname": 1, "start_of_week": "2", "users_can_register": "x"})
    values = SiteSettingsFacade(store, AllowAll()).get_all_fields("edit")

    for descriptor in DEFAULT_REGISTRY.mapped():
        assert type(values[descriptor.name]) is python_types[descriptor.value_type]


def test_write_then_read_reflects_write_for_every_text_field():
    facade = SiteSettingsFacade(InMemoryOptionStore(), AllowAll())
    for descriptor in DEFAULT_REGISTRY.mapped():
        if descriptor.value_type == "string":
            assert facade.update_field(descriptor.name, "value") == "value"
            assert facade.get_field(descriptor.name) == "value"
