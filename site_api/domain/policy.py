from collections.abc import Sequence

from site_api.domain.entities import Caller
from site_api.rules.models import Rules

MANAGE_OPTIONS = "manage_options"


class PolicyEngine:
    def __init__(self, rules: Rules):
        self.rules = rules

    def check_permission(
        self,
        caller: Caller | None,
        capability: str,
        roles: Sequence[str] | None = None,
    ) -> bool:
        """
        Check if the caller holds a capability.

        Order of precedence:
        1. Public capabilities (granted to everyone, even anonymous callers)
        2. Role-based grants from the rules file
        """
        if capability in self.rules.rbac.public_capabilities:
            return True

        if caller is None:
            return False

        user_roles = caller.roles if roles is None else roles
        for role in user_roles:
            allowed = self.rules.rbac.roles.get(role, [])
            if "*" in allowed or capability in allowed:
                return True

            # Scoped wildcards, e.g. "options:*" matches "options:edit"
            if ":" in capability:
                scope = capability.split(":")[0]
                if f"{scope}:*" in allowed:
                    return True

        return False

    def can_manage_options(self, caller: Caller | None) -> bool:
        return self.check_permission(caller, MANAGE_OPTIONS)
