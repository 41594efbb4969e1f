"""Application authz – AclAuthorizer.

Decides whether a principal may perform an operation on a resource using
only the already-published rule snapshot; it never touches the database.

Evaluation order (first match wins)::

    1. non-literal pattern type      -> Err(UnsupportedRequestError)
    2. principal is a superuser      -> ALLOWED
    3. resource type CLUSTER         -> DENIED
    4. TRANSACTIONAL_ID / DELEGATION_TOKEN -> ALLOWED
    5. first rule that applies and permits the operation -> ALLOWED
       otherwise                                         -> DENIED

There is no deny rule: the absence of a matching grant is the only way a
table-driven request is denied.

Per-request ``authorization_decided`` lines are only emitted with
``log_decisions=True``.
"""

from __future__ import annotations

from collections.abc import Iterable

from broker_auth.application.snapshot import RuleStore
from broker_auth.kernel.errors import UnsupportedRequestError
from broker_auth.kernel.security import (
    AclOperation,
    Action,
    AuthorizationDecision,
    AuthorizationRequest,
    PatternMatcher,
    PatternType,
    ResourceType,
)
from broker_auth.kernel.types import Err, Ok, Result
from broker_auth.observability.logging import get_logger

_log = get_logger(__name__)

_ALLOWED = Ok(AuthorizationDecision.ALLOWED)
_DENIED = Ok(AuthorizationDecision.DENIED)

# Never delegated to the rule table.
_ALWAYS_DENIED_TYPES = frozenset({ResourceType.CLUSTER})
_ALWAYS_ALLOWED_TYPES = frozenset({ResourceType.TRANSACTIONAL_ID, ResourceType.DELEGATION_TOKEN})


def parse_super_users(raw: str | None, *, delimiter: str = ";") -> frozenset[str]:
    """Split the ``super.users`` setting into a set of exact principal names."""
    if not raw:
        return frozenset()
    return frozenset(name.strip() for name in raw.split(delimiter) if name.strip())


class AclAuthorizer:
    """Table-driven authorizer over a :class:`RuleStore` snapshot.

    Example::

        authorizer = AclAuthorizer(store, superusers={"admin"})
        result = authorizer.decide("alice1", ResourceType.TOPIC, "orders-2024", AclOperation.WRITE)
        if result.is_err():
            raise result.error
        allowed = result.value is AuthorizationDecision.ALLOWED
    """

    def __init__(
        self,
        store: RuleStore,
        *,
        superusers: Iterable[str] = (),
        matcher: PatternMatcher | None = None,
        log_decisions: bool = False,
    ) -> None:
        self._store = store
        self._superusers = frozenset(superusers)
        self._matcher = matcher or PatternMatcher()
        self._log_decisions = log_decisions

    @property
    def superusers(self) -> frozenset[str]:
        return self._superusers

    def decide(
        self,
        principal: str,
        resource_type: ResourceType,
        resource_name: str,
        operation: AclOperation,
        pattern_type: PatternType = PatternType.LITERAL,
    ) -> Result[AuthorizationDecision, UnsupportedRequestError]:
        if pattern_type is not PatternType.LITERAL:
            return Err(
                UnsupportedRequestError(
                    f"Only literal resources are supported. Got: {pattern_type.value}",
                    pattern_type=pattern_type.value,
                )
            )
        result = self._evaluate(principal, resource_type, resource_name, operation)
        if self._log_decisions:
            _log.debug(
                "authorization_decided",
                principal=principal,
                resource_type=resource_type.value,
                resource_name=resource_name,
                operation=operation.value,
                decision=result.value.value,
            )
        return result

    def _evaluate(
        self,
        principal: str,
        resource_type: ResourceType,
        resource_name: str,
        operation: AclOperation,
    ) -> Ok[AuthorizationDecision]:
        if principal in self._superusers:
            return _ALLOWED
        if resource_type in _ALWAYS_DENIED_TYPES:
            return _DENIED
        if resource_type in _ALWAYS_ALLOWED_TYPES:
            return _ALLOWED

        # One read of the published reference; the scan sees a single generation.
        rules = self._store.current_rules().items
        matcher = self._matcher
        for rule in rules:
            if rule.applies_to(principal, resource_type, resource_name, matcher) and rule.permits(operation):
                return _ALLOWED
        return _DENIED

    def authorize(self, request: AuthorizationRequest) -> Result[AuthorizationDecision, UnsupportedRequestError]:
        resource = request.resource
        return self.decide(
            request.principal,
            resource.resource_type,
            resource.name,
            request.operation,
            resource.pattern_type,
        )

    def authorize_all(
        self, principal: str, actions: Iterable[Action]
    ) -> list[Result[AuthorizationDecision, UnsupportedRequestError]]:
        """Decide every action for *principal*; one result per action, in order."""
        return [
            self.decide(
                principal,
                action.resource.resource_type,
                action.resource.name,
                action.operation,
                action.resource.pattern_type,
            )
            for action in actions
        ]
