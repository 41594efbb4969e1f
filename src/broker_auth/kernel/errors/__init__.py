"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError             (application.py)
    │   ├── UnsupportedRequestError
    │   ├── UnsupportedOperationError
    │   └── AuthenticationLookupError
    ├── InfrastructureError          (infrastructure.py)
    │   └── RefreshError
    └── ConfigurationError           (broker_auth.config.validation)
"""

from broker_auth.kernel.errors.application import (
    ApplicationError,
    AuthenticationLookupError,
    UnsupportedOperationError,
    UnsupportedRequestError,
)
from broker_auth.kernel.errors.base import BaseError
from broker_auth.kernel.errors.infrastructure import InfrastructureError, RefreshError

__all__ = [
    "ApplicationError",
    "AuthenticationLookupError",
    "BaseError",
    "InfrastructureError",
    "RefreshError",
    "UnsupportedOperationError",
    "UnsupportedRequestError",
]
