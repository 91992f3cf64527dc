"""Config validation – errors raised while loading or validating settings.

All of them are :class:`~mp_outbox.kernel.errors.ConfigurationError`
subclasses, so a worker started with bad settings fails fast instead of
retrying.
"""
from mp_outbox.kernel.errors import ConfigurationError


class ConfigError(ConfigurationError):
    """Settings could not be loaded (bad environment, unreadable ``.env``)."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A field without a default has no ``<PREFIX>_<FIELD>`` variable."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used, e.g. ``OUTBOX_REDELIVER_TIMEOUT=0``."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
