import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from site_api.adapters.authorizer import PolicyAuthorizer
from site_api.adapters.sqlite.repos import SQLiteOptionStore
from site_api.api.auth_utils import caller_from_payload, decode_access_token
from site_api.components.site_settings import (
    DEFAULT_REGISTRY,
    FieldRegistry,
    SiteSettingsFacade,
)
from site_api.domain.entities import Caller
from site_api.domain.policy import PolicyEngine
from site_api.rules.loader import load_rules
from site_api.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("SITE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "site.db")
        self.rules_path = Path(os.environ.get("SITE_RULES_PATH", self.base_dir / "rules.yaml"))
        self.migrations_dir = os.environ.get(
            "SITE_MIGRATIONS_DIR", str(self.base_dir / "migrations")
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)


# --- Store ---
def get_option_store(settings: Settings = Depends(get_settings)) -> SQLiteOptionStore:
    return SQLiteOptionStore(settings.db_path)


def get_field_registry() -> FieldRegistry:
    return DEFAULT_REGISTRY


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token", auto_error=False)


async def get_current_caller(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    rules: Rules = Depends(get_rules),
) -> Caller | None:
    """
    Resolve the caller from a bearer token.

    Returns None for anonymous requests; a token that is present but
    invalid is rejected outright.
    """
    # 1. Cookie first (HttpOnly), then the Authorization header
    cookie_token = request.cookies.get(rules.auth.cookie_name)
    if cookie_token and cookie_token.startswith("Bearer "):
        token = cookie_token.split(" ", 1)[1]

    if not token:
        return None

    payload = decode_access_token(token, algorithm=rules.auth.token_algorithm)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    caller = caller_from_payload(payload)
    if caller is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )
    return caller


def get_authorizer(
    caller: Caller | None = Depends(get_current_caller),
    policy: PolicyEngine = Depends(get_policy),
) -> PolicyAuthorizer:
    return PolicyAuthorizer(policy, caller)


# --- Component Services ---
def get_site_settings_facade(
    store: SQLiteOptionStore = Depends(get_option_store),
    authorizer: PolicyAuthorizer = Depends(get_authorizer),
    registry: FieldRegistry = Depends(get_field_registry),
) -> SiteSettingsFacade:
    """Get site settings facade bound to the current caller."""
    return SiteSettingsFacade(store, authorizer, registry)
