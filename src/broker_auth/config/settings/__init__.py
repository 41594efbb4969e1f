"""Config settings – 12-factor env-based configuration."""
from broker_auth.config.settings.base import Settings
from broker_auth.config.settings.auth import AclSettings, CredentialSettings
from broker_auth.config.settings.factory import SettingsFactory
from broker_auth.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "AclSettings",
    "CredentialSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
