"""Application-layer errors – raised or returned at the decision boundary."""

from __future__ import annotations

from typing import Any

from broker_auth.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnsupportedRequestError(ApplicationError):
    """The request cannot be evaluated, e.g. a non-literal resource pattern type.

    Returned as the ``Err`` variant of an authorization result so that callers
    never mistake it for a DENIED decision.
    """

    default_code = "unsupported_request"

    def __init__(
        self,
        message: str,
        *,
        pattern_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.pattern_type = pattern_type


class UnsupportedOperationError(ApplicationError):
    """The ACL cache is read-only; create/delete/list are not offered."""

    default_code = "unsupported_operation"


class AuthenticationLookupError(ApplicationError):
    """The dynamic credential tier could not be consulted."""

    default_code = "authentication_lookup_failed"

    def __init__(
        self,
        username: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Credential lookup failed for '{username}'", **kwargs)
        self.username = username


__all__ = [
    "ApplicationError",
    "AuthenticationLookupError",
    "UnsupportedOperationError",
    "UnsupportedRequestError",
]
