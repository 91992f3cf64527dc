"""Config settings – 12-factor env-based configuration."""
from mp_outbox.config.settings.base import Settings
from mp_outbox.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_outbox.config.settings.outbox import InboxSettings, OutboxSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InboxSettings",
    "OutboxSettings",
    "Settings",
    "SettingsLoader",
]
