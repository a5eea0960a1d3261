from site_api.domain.entities import Caller
from site_api.domain.policy import PolicyEngine


class PolicyAuthorizer:
    """Adapts PolicyEngine and the request's caller to AuthorizationPort."""

    def __init__(self, policy: PolicyEngine, caller: Caller | None):
        self.policy = policy
        self.caller = caller

    @property
    def is_authenticated(self) -> bool:
        return self.caller is not None

    def current_caller_can(self, capability: str) -> bool:
        return self.policy.check_permission(self.caller, capability)
