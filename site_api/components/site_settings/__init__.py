"""
Site settings component - site options exposed as typed REST fields.
"""

from ._impl import (
    DEFAULT_FIELDS,
    DEFAULT_REGISTRY,
    FieldRegistry,
    SiteSettingsFacade,
    resolve_value,
)
from .component import run, run_get, run_list, run_update
from .models import (
    Context,
    FieldDescriptor,
    FieldsOutput,
    Forbidden,
    GetFieldInput,
    ListFieldsInput,
    SiteSettingsError,
    StoreFailure,
    UnknownFieldError,
    UpdateFieldInput,
    ValueType,
)
from .ports import AuthorizationPort, OptionStorePort

__all__ = [
    # Component entry points
    "run",
    "run_get",
    "run_list",
    "run_update",
    # Registry / facade
    "DEFAULT_FIELDS",
    "DEFAULT_REGISTRY",
    "FieldRegistry",
    "SiteSettingsFacade",
    "resolve_value",
    # Models
    "Context",
    "FieldDescriptor",
    "FieldsOutput",
    "GetFieldInput",
    "ListFieldsInput",
    "UpdateFieldInput",
    "ValueType",
    # Errors
    "SiteSettingsError",
    "Forbidden",
    "StoreFailure",
    "UnknownFieldError",
    # Ports
    "AuthorizationPort",
    "OptionStorePort",
]
