"""Kernel security – ACL rules, credential records and decision values.

Rules and credential records are immutable once loaded; a refresh replaces
the whole snapshot holding them instead of mutating them in place.
"""

from __future__ import annotations

import dataclasses
from enum import Enum

from broker_auth.kernel.security.pattern import PatternMatcher


class _LenientEnum(str, Enum):
    """String enum whose ``from_string`` maps unknown names to ``UNKNOWN``."""

    @classmethod
    def from_string(cls, value: str | None):  # type: ignore[no-untyped-def]
        if value is None:
            return cls["UNKNOWN"]
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return cls["UNKNOWN"]


class ResourceType(_LenientEnum):
    UNKNOWN = "UNKNOWN"
    ANY = "ANY"
    TOPIC = "TOPIC"
    GROUP = "GROUP"
    CLUSTER = "CLUSTER"
    TRANSACTIONAL_ID = "TRANSACTIONAL_ID"
    DELEGATION_TOKEN = "DELEGATION_TOKEN"
    USER = "USER"


class AclOperation(_LenientEnum):
    UNKNOWN = "UNKNOWN"
    ANY = "ANY"
    ALL = "ALL"
    READ = "READ"
    WRITE = "WRITE"
    CREATE = "CREATE"
    DELETE = "DELETE"
    ALTER = "ALTER"
    DESCRIBE = "DESCRIBE"
    CLUSTER_ACTION = "CLUSTER_ACTION"
    DESCRIBE_CONFIGS = "DESCRIBE_CONFIGS"
    ALTER_CONFIGS = "ALTER_CONFIGS"
    IDEMPOTENT_WRITE = "IDEMPOTENT_WRITE"
    CREATE_TOKENS = "CREATE_TOKENS"
    DESCRIBE_TOKENS = "DESCRIBE_TOKENS"


class PatternType(_LenientEnum):
    UNKNOWN = "UNKNOWN"
    ANY = "ANY"
    MATCH = "MATCH"
    LITERAL = "LITERAL"
    PREFIXED = "PREFIXED"


class AuthorizationDecision(str, Enum):
    ALLOWED = "ALLOWED"
    DENIED = "DENIED"


class AuthenticationDecision(str, Enum):
    AUTHENTICATED = "AUTHENTICATED"
    REJECTED = "REJECTED"


# Any of these grants also lets the principal DESCRIBE the resource.
DESCRIBE_IMPLYING_OPERATIONS: frozenset[AclOperation] = frozenset(
    {AclOperation.READ, AclOperation.WRITE, AclOperation.DELETE, AclOperation.ALTER}
)


def parse_operations(raw: str) -> tuple[bool, frozenset[AclOperation]]:
    """Parse an operation column value into ``(grants_all, operations)``.

    ``"ALL"`` (any case) grants everything; otherwise the value is a
    comma-separated list of operation names.
    """
    if raw.strip().upper() == AclOperation.ALL.value:
        return True, frozenset()
    ops = frozenset(AclOperation.from_string(part) for part in raw.split(",") if part.strip())
    return False, ops


@dataclasses.dataclass(frozen=True, slots=True)
class AclRule:
    """One row of the ACL table, parsed once at snapshot-build time."""

    user_pattern: str
    resource_type: ResourceType
    resource_pattern: str
    operations: frozenset[AclOperation] = frozenset()
    grants_all: bool = False

    @classmethod
    def from_row(
        cls,
        user_pattern: str,
        resource_type: str | ResourceType,
        resource_pattern: str,
        operation: str,
    ) -> "AclRule":
        rtype = resource_type if isinstance(resource_type, ResourceType) else ResourceType.from_string(resource_type)
        grants_all, ops = parse_operations(operation)
        return cls(
            user_pattern=user_pattern,
            resource_type=rtype,
            resource_pattern=resource_pattern,
            operations=ops,
            grants_all=grants_all,
        )

    def applies_to(
        self,
        principal: str,
        resource_type: ResourceType,
        resource_name: str,
        matcher: PatternMatcher,
    ) -> bool:
        return (
            self.resource_type is resource_type
            and matcher.match(self.resource_pattern, resource_name)
            and matcher.match(self.user_pattern, principal)
        )

    def permits(self, operation: AclOperation) -> bool:
        if self.grants_all:
            return True
        if operation is AclOperation.DESCRIBE and not self.operations.isdisjoint(DESCRIBE_IMPLYING_OPERATIONS):
            return True
        return operation in self.operations


@dataclasses.dataclass(frozen=True, slots=True)
class CredentialRecord:
    """Username and stored secret; the secret is kept out of ``repr``."""

    username: str
    secret: str = dataclasses.field(repr=False)


@dataclasses.dataclass(frozen=True, slots=True)
class ResourcePattern:
    resource_type: ResourceType
    name: str
    pattern_type: PatternType = PatternType.LITERAL


@dataclasses.dataclass(frozen=True, slots=True)
class Action:
    """A requested operation on one resource, as delivered by the broker."""

    resource: ResourcePattern
    operation: AclOperation


@dataclasses.dataclass(frozen=True, slots=True)
class AuthorizationRequest:
    principal: str
    resource: ResourcePattern
    operation: AclOperation

    @classmethod
    def of(
        cls,
        principal: str,
        resource_type: ResourceType,
        resource_name: str,
        operation: AclOperation,
        pattern_type: PatternType = PatternType.LITERAL,
    ) -> "AuthorizationRequest":
        return cls(principal, ResourcePattern(resource_type, resource_name, pattern_type), operation)


__all__ = [
    "DESCRIBE_IMPLYING_OPERATIONS",
    "AclOperation",
    "AclRule",
    "Action",
    "AuthenticationDecision",
    "AuthorizationDecision",
    "AuthorizationRequest",
    "CredentialRecord",
    "PatternType",
    "ResourcePattern",
    "ResourceType",
    "parse_operations",
]
