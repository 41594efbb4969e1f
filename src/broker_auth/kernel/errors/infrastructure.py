"""Infrastructure errors – I/O failures against the external store."""

from __future__ import annotations

from typing import Any

from broker_auth.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a decision outcome."""

    default_code = "infrastructure_error"


class RefreshError(InfrastructureError):
    """A scheduled snapshot refresh failed (connection, query or row mapping)."""

    default_code = "refresh_failed"

    def __init__(
        self,
        snapshot: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Refresh of '{snapshot}' snapshot failed", **kwargs)
        self.snapshot = snapshot


__all__ = ["InfrastructureError", "RefreshError"]
