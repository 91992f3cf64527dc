"""Unit tests for outbox / inbox settings and the env loaders."""

import pytest

from mp_outbox.config.settings import DotenvSettingsLoader, EnvSettingsLoader, InboxSettings, OutboxSettings
from mp_outbox.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_outbox.kernel.errors import ConfigurationError


class TestOutboxSettings:
    def test_defaults(self) -> None:
        settings = OutboxSettings()
        assert settings.table_name == "messenger_outbox"
        assert settings.queue_name == "outbox"
        assert settings.redeliver_timeout == 3600.0
        assert settings.auto_setup is False
        assert settings.routing_overrides == {}

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OUTBOX_REDELIVER_TIMEOUT", "120")
        monkeypatch.setenv("OUTBOX_AUTO_SETUP", "true")
        monkeypatch.setenv("OUTBOX_DEFAULT_CHANNEL_DEPTH", "1")
        monkeypatch.setenv("OUTBOX_ROUTING_OVERRIDES", '{"order.placed": {"channel": "orders"}}')
        settings = EnvSettingsLoader().load(OutboxSettings)
        assert settings.redeliver_timeout == 120.0
        assert settings.auto_setup is True
        assert settings.default_channel_depth == 1
        assert settings.routing_overrides == {"order.placed": {"channel": "orders"}}

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            OutboxSettings(redeliver_timeout=0)
        assert info.value.setting_name == "redeliver_timeout"

    def test_empty_table_name_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            OutboxSettings(table_name="")

    def test_invalid_env_value_is_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OUTBOX_REDELIVER_TIMEOUT", "soon")
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader().load(OutboxSettings)
        assert info.value.setting_name == "OUTBOX_REDELIVER_TIMEOUT"

    def test_validation_error_from_env_keeps_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OUTBOX_REDELIVER_TIMEOUT", "-5")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(OutboxSettings)

    def test_overrides_must_be_json_object(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OUTBOX_ROUTING_OVERRIDES", "[1, 2]")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(OutboxSettings)


class TestInboxSettings:
    def test_defaults(self) -> None:
        settings = InboxSettings()
        assert settings.deduplication_table == "message_broker_deduplication"
        assert settings.prefetch_count == 10
        assert settings.retention_days == 30

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INBOX_QUEUE_NAME", "orders")
        monkeypatch.setenv("INBOX_PREFETCH_COUNT", "50")
        settings = EnvSettingsLoader().load(InboxSettings)
        assert settings.queue_name == "orders"
        assert settings.prefetch_count == 50

    def test_non_positive_retention_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            InboxSettings(retention_days=0)


class TestSettingsBase:
    def test_env_key_uses_prefix(self) -> None:
        assert OutboxSettings.env_key("table_name") == "OUTBOX_TABLE_NAME"
        assert InboxSettings.env_key("prefetch_count") == "INBOX_PREFETCH_COUNT"

    @pytest.mark.parametrize("field", ["deduplication_table", "queue_name"])
    def test_inbox_names_must_not_be_empty(self, field: str) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            InboxSettings(**{field: ""})
        assert info.value.setting_name == field
        assert info.value.reason == "must not be empty"

    def test_zero_prefetch_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            InboxSettings(prefetch_count=0)
        assert info.value.setting_name == "prefetch_count"


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INBOX_QUEUE_NAME", "unset")
        monkeypatch.delenv("INBOX_QUEUE_NAME")
        env_file = tmp_path / ".env"
        env_file.write_text("INBOX_QUEUE_NAME=billing\n")
        settings = DotenvSettingsLoader(str(env_file)).load(InboxSettings)
        assert settings.queue_name == "billing"


class TestConfigErrors:
    def test_config_errors_are_configuration_errors(self) -> None:
        assert issubclass(ConfigError, ConfigurationError)
        assert InvalidSettingValueError("x", 1, "bad").retryable is False

    def test_errors_carry_setting_detail(self) -> None:
        assert InvalidSettingValueError("queue_name", "", "must not be empty").detail == {
            "setting": "queue_name",
            "reason": "must not be empty",
        }
        assert MissingRequiredSettingError("OUTBOX_DATABASE_URL").detail == {"setting": "OUTBOX_DATABASE_URL"}
