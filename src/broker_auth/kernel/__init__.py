"""Kernel – framework-agnostic building blocks (errors, result types, ACL model)."""

from broker_auth.kernel.errors import (
    ApplicationError,
    AuthenticationLookupError,
    BaseError,
    InfrastructureError,
    RefreshError,
    UnsupportedOperationError,
    UnsupportedRequestError,
)

__all__ = [
    "ApplicationError",
    "AuthenticationLookupError",
    "BaseError",
    "InfrastructureError",
    "RefreshError",
    "UnsupportedOperationError",
    "UnsupportedRequestError",
]
