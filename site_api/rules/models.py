from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class RbacRules(BaseModel):
    roles: dict[str, list[str]]
    public_capabilities: list[str] = Field(default_factory=list)


class AuthRules(BaseModel):
    token_algorithm: str = "HS256"
    token_ttl_minutes: int = Field(default=60, gt=0)
    cookie_name: str = "access_token"


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    migrate_on_startup: bool = True


class Rules(BaseModel):
    project: ProjectRules
    rbac: RbacRules
    auth: AuthRules = Field(default_factory=AuthRules)
    ops: OpsRules = Field(default_factory=OpsRules)
