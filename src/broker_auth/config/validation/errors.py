"""Config validation errors.

All of them are fatal at startup: a component that raises one must not be
started by the host.
"""
from broker_auth.kernel.errors import BaseError


class ConfigurationError(BaseError):
    """Raised when configuration is invalid or incomplete."""
    default_code = "configuration_error"


class MissingRequiredSettingError(ConfigurationError):
    """A required setting (table or column mapping, interval, ...) is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigurationError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigurationError", "InvalidSettingValueError", "MissingRequiredSettingError"]
