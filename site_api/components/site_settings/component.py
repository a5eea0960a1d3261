"""
Site settings component - site options exposed as typed fields.

Functional entry points over SiteSettingsFacade. Ports are passed as
keyword arguments so callers decide which store and authorizer back a call.
"""

from __future__ import annotations

from ._impl import FieldRegistry, SiteSettingsFacade
from .models import FieldsOutput, GetFieldInput, ListFieldsInput, UpdateFieldInput
from .ports import AuthorizationPort, OptionStorePort


def run_list(
    inp: ListFieldsInput,
    *,
    store: OptionStorePort,
    authorizer: AuthorizationPort,
    registry: FieldRegistry | None = None,
) -> FieldsOutput:
    """
    Read every mapped field.

    Args:
        inp: Input carrying the request context.
        store: Option store port.
        authorizer: Authorization port.
        registry: Optional custom field registry.

    Returns:
        FieldsOutput with one entry per mapped field.
    """
    facade = SiteSettingsFacade(store, authorizer, registry)
    return FieldsOutput(values=facade.get_all_fields(inp.context))


def run_get(
    inp: GetFieldInput,
    *,
    store: OptionStorePort,
    authorizer: AuthorizationPort,
    registry: FieldRegistry | None = None,
) -> FieldsOutput:
    """Read a single field; the output holds exactly one entry."""
    facade = SiteSettingsFacade(store, authorizer, registry)
    return FieldsOutput(values={inp.name: facade.get_field(inp.name, inp.context)})


def run_update(
    inp: UpdateFieldInput,
    *,
    store: OptionStorePort,
    authorizer: AuthorizationPort,
    registry: FieldRegistry | None = None,
) -> FieldsOutput:
    """Update a single field; the output holds the value as stored."""
    facade = SiteSettingsFacade(store, authorizer, registry)
    return FieldsOutput(values={inp.name: facade.update_field(inp.name, inp.value)})


def run(
    inp: ListFieldsInput | GetFieldInput | UpdateFieldInput,
    *,
    store: OptionStorePort,
    authorizer: AuthorizationPort,
    registry: FieldRegistry | None = None,
) -> FieldsOutput:
    """
    Main entry point for the site settings component.

    Dispatches to the appropriate handler based on input type.
    """
    if isinstance(inp, ListFieldsInput):
        return run_list(inp, store=store, authorizer=authorizer, registry=registry)
    elif isinstance(inp, GetFieldInput):
        return run_get(inp, store=store, authorizer=authorizer, registry=registry)
    elif isinstance(inp, UpdateFieldInput):
        return run_update(inp, store=store, authorizer=authorizer, registry=registry)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
