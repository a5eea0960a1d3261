"""
Site Settings API.

Collection and item endpoints for the site's global options, plus OPTIONS
discovery documents describing the field schema.

- GET /site: every mapped field
- GET /site/{option}: one field
- POST|PUT|PATCH /site/{option}: sanitize, persist and return one field
- OPTIONS /site, /site/{option}: schema and endpoint arguments
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query

from site_api.adapters.authorizer import PolicyAuthorizer
from site_api.api.deps import get_authorizer, get_field_registry, get_site_settings_facade
from site_api.components.site_settings import (
    FieldRegistry,
    Forbidden,
    SiteSettingsFacade,
    UnknownFieldError,
)

NAMESPACE = "wp/v2"
REST_BASE = "site"

READABLE = ["GET"]
EDITABLE = ["POST", "PUT", "PATCH"]

router = APIRouter()

ContextParam = Annotated[
    Literal["view", "edit"],
    Query(description="Scope under which the request is made; determines fields present in response."),
]
OptionParam = Annotated[str, Path(description="Site option name")]

# Names outside this pattern never reach a field; they are reported as not found
OPTION_NAME = re.compile(r"[\w-]+")


# --- Helper Functions ---


def rest_error(code: str, message: str, status_code: int) -> HTTPException:
    """Build an HTTPException carrying the REST error envelope."""
    return HTTPException(
        status_code=status_code,
        detail={"code": code, "message": message, "data": {"status": status_code}},
    )


def _forbidden(err: Forbidden, authorizer: PolicyAuthorizer) -> HTTPException:
    # 401 asks the client to authenticate; 403 means credentials were not enough
    status_code = 403 if authorizer.is_authenticated else 401
    return rest_error("rest_forbidden", str(err), status_code)


def _invalid_option() -> HTTPException:
    return rest_error("rest_site_invalid_option", "Invalid site option name.", 404)


def require_option_name(option: str) -> None:
    if not OPTION_NAME.fullmatch(option):
        raise _invalid_option()


def context_arg() -> dict[str, Any]:
    return {
        "required": False,
        "default": "view",
        "enum": ["view", "edit"],
        "description": (
            "Scope under which the request is made; determines fields present in response."
        ),
    }


def editable_args(registry: FieldRegistry) -> dict[str, Any]:
    """Endpoint arguments accepted by the update route, derived from the schema."""
    args: dict[str, Any] = {}
    for name, prop in registry.schema()["properties"].items():
        arg = {"required": False, "type": prop["type"], "description": prop["description"]}
        if "format" in prop:
            arg["format"] = prop["format"]
        args[name] = arg
    return args


# --- Routes ---


@router.get(
    f"/{REST_BASE}",
    summary="List site settings",
    responses={401: {"description": "Not authenticated"}, 403: {"description": "Forbidden"}},
)
def get_items(
    context: ContextParam = "view",
    facade: SiteSettingsFacade = Depends(get_site_settings_facade),
    authorizer: PolicyAuthorizer = Depends(get_authorizer),
) -> dict[str, Any]:
    """Every field that has a storage mapping, keyed by field name."""
    try:
        return facade.get_all_fields(context)
    except Forbidden as e:
        raise _forbidden(e, authorizer) from e


@router.get(
    f"/{REST_BASE}/{{option}}",
    summary="Get a site setting",
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Forbidden"},
        404: {"description": "Invalid site option name"},
    },
)
def get_item(
    option: OptionParam,
    context: ContextParam = "view",
    facade: SiteSettingsFacade = Depends(get_site_settings_facade),
    authorizer: PolicyAuthorizer = Depends(get_authorizer),
) -> dict[str, Any]:
    """A single field, as a one-entry mapping."""
    require_option_name(option)
    try:
        return {option: facade.get_field(option, context)}
    except UnknownFieldError as e:
        raise _invalid_option() from e
    except Forbidden as e:
        raise _forbidden(e, authorizer) from e


@router.api_route(
    f"/{REST_BASE}/{{option}}",
    methods=EDITABLE,
    summary="Update a site setting",
    responses={
        400: {"description": "Missing value for the option"},
        401: {"description": "Not authenticated"},
        403: {"description": "Forbidden"},
        404: {"description": "Invalid site option name"},
    },
)
def update_item(
    option: OptionParam,
    payload: Annotated[dict[str, Any] | None, Body()] = None,
    facade: SiteSettingsFacade = Depends(get_site_settings_facade),
    authorizer: PolicyAuthorizer = Depends(get_authorizer),
) -> dict[str, Any]:
    """
    Update one field.

    The body carries the new value under the option's own name, e.g.
    {"title": "New Title"}. The response holds the value as stored.
    """
    require_option_name(option)
    body = payload or {}
    try:
        facade.check_update(option)
        if option not in body:
            raise rest_error(
                "rest_missing_callback_param", f"Missing parameter(s): {option}", 400
            )
        return {option: facade.update_field(option, body[option])}
    except UnknownFieldError as e:
        raise _invalid_option() from e
    except Forbidden as e:
        raise _forbidden(e, authorizer) from e


@router.options(f"/{REST_BASE}", summary="Describe the site settings collection")
def describe_items(registry: FieldRegistry = Depends(get_field_registry)) -> dict[str, Any]:
    return {
        "namespace": NAMESPACE,
        "methods": READABLE,
        "endpoints": [{"methods": READABLE, "args": {"context": context_arg()}}],
        "schema": registry.schema(),
    }


@router.options(f"/{REST_BASE}/{{option}}", summary="Describe a site setting")
def describe_item(
    option: OptionParam,
    registry: FieldRegistry = Depends(get_field_registry),
) -> dict[str, Any]:
    require_option_name(option)
    return {
        "namespace": NAMESPACE,
        "methods": READABLE + EDITABLE,
        "endpoints": [
            {"methods": READABLE, "args": {"context": context_arg()}},
            {"methods": EDITABLE, "args": editable_args(registry)},
        ],
        "schema": registry.schema(),
    }
