"""Config settings – AclSettings and CredentialSettings.

Environment variables use the class prefix, e.g. ``BROKER_AUTH_ACL_TABLE``
or ``BROKER_AUTH_CREDENTIALS_ENABLE_DB_AUTH``.
"""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from broker_auth.config.settings.base import Settings
from broker_auth.config.validation import InvalidSettingValueError


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise InvalidSettingValueError(name, value, "must be at least 1 second")


@dataclasses.dataclass
class AclSettings(Settings):
    """Where the ACL table lives and how often it is re-read."""

    _prefix: ClassVar[str] = "BROKER_AUTH_ACL"

    database_url: str
    table: str
    user_pattern_column: str
    resource_type_column: str
    resource_pattern_column: str
    operation_column: str
    sync_interval_seconds: int = 60
    super_users: str = ""
    case_sensitive: bool = True
    log_decisions: bool = False

    def _validate(self) -> None:
        _require_positive("sync_interval_seconds", self.sync_interval_seconds)
        for name in (
            "table",
            "user_pattern_column",
            "resource_type_column",
            "resource_pattern_column",
            "operation_column",
        ):
            if not getattr(self, name):
                raise InvalidSettingValueError(name, getattr(self, name), "must not be empty")


@dataclasses.dataclass
class CredentialSettings(Settings):
    """Dynamic credential tier: feature flag, table mapping and refresh interval."""

    _prefix: ClassVar[str] = "BROKER_AUTH_CREDENTIALS"

    enable_db_auth: bool = False
    database_url: str = ""
    table: str = ""
    username_column: str = "name"
    password_column: str = "password"
    sync_interval_seconds: int = 60
    log_decisions: bool = False

    def _validate(self) -> None:
        _require_positive("sync_interval_seconds", self.sync_interval_seconds)
        if self.enable_db_auth:
            if not self.table:
                raise InvalidSettingValueError("table", self.table, "required when enable_db_auth is set")
            if not self.database_url:
                raise InvalidSettingValueError(
                    "database_url", self.database_url, "required when enable_db_auth is set"
                )


__all__ = ["AclSettings", "CredentialSettings"]
