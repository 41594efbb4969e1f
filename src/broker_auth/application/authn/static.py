"""Application authn – StaticCredentials (config-supplied, never refreshed)."""
from __future__ import annotations

import hmac
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

__all__ = ["StaticCredentials", "secrets_equal"]

USER_OPTION_PREFIX = "user_"


def secrets_equal(presented: str, stored: str) -> bool:
    """Exact comparison of two plain-text secrets.

    Lone surrogates are encoded as-is so that no ``str`` input can raise.
    """
    return hmac.compare_digest(
        presented.encode("utf-8", "surrogatepass"),
        stored.encode("utf-8", "surrogatepass"),
    )


class StaticCredentials:
    """Fixed ``username -> secret`` table loaded once at startup."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: Mapping[str, str] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_options(cls, options: Mapping[str, Any], prefix: str = USER_OPTION_PREFIX) -> "StaticCredentials":
        """Build from login-module options such as ``user_alice="alice-secret"``."""
        return cls(
            {
                key[len(prefix):]: str(value)
                for key, value in options.items()
                if key.startswith(prefix) and len(key) > len(prefix) and value is not None
            }
        )

    def verify(self, username: str, secret: str) -> bool:
        expected = self._entries.get(username)
        return expected is not None and secrets_equal(secret, expected)

    def __contains__(self, username: object) -> bool:
        return username in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"StaticCredentials(users={sorted(self._entries)})"
