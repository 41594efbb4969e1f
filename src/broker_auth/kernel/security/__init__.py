"""Kernel security – ACL model, decisions and the wildcard pattern matcher."""
from broker_auth.kernel.security.acl import (
    DESCRIBE_IMPLYING_OPERATIONS,
    AclOperation,
    AclRule,
    Action,
    AuthenticationDecision,
    AuthorizationDecision,
    AuthorizationRequest,
    CredentialRecord,
    PatternType,
    ResourcePattern,
    ResourceType,
)
from broker_auth.kernel.security.pattern import PatternMatcher, simple_match

__all__ = [
    "DESCRIBE_IMPLYING_OPERATIONS",
    "AclOperation",
    "AclRule",
    "Action",
    "AuthenticationDecision",
    "AuthorizationDecision",
    "AuthorizationRequest",
    "CredentialRecord",
    "PatternMatcher",
    "PatternType",
    "ResourcePattern",
    "ResourceType",
    "simple_match",
]
