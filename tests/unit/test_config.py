"""Test Settings loading and store validation."""

import pytest

from cqrs_order.core.config import Settings, load_settings
from cqrs_order.core.enums import LogFormat, StoreBackend
from cqrs_order.core.errors import ConfigError


class TestSettingsLoadFromDict:
    def test_default_settings(self):
        settings = Settings()
        assert settings.store.backend == StoreBackend.MEMORY
        assert settings.store.path == "data/events.jsonl"
        assert settings.observability.log_level == "INFO"
        assert settings.observability.log_format == LogFormat.CONSOLE

    def test_load_with_backend_override(self):
        settings = Settings(store={"backend": "jsonl"})
        assert settings.store.backend == StoreBackend.JSONL

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ORDERS_STORE__BACKEND", "jsonl")
        monkeypatch.setenv("ORDERS_OBSERVABILITY__LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.store.backend == StoreBackend.JSONL
        assert settings.observability.log_level == "DEBUG"


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.store.backend == StoreBackend.MEMORY

    def test_toml_file(self, tmp_path):
        path = tmp_path / "orders.toml"
        path.write_text(
            '[store]\nbackend = "jsonl"\npath = "var/orders.jsonl"\n'
            '[observability]\nlog_format = "json"\n'
        )
        settings = load_settings(path)
        assert settings.store.backend == StoreBackend.JSONL
        assert settings.store.path == "var/orders.jsonl"
        assert settings.observability.log_format == LogFormat.JSON

    def test_overrides_merge_into_file_sections(self, tmp_path):
        path = tmp_path / "orders.toml"
        path.write_text('[store]\nbackend = "jsonl"\npath = "var/orders.jsonl"\n')
        settings = load_settings(path, overrides={"store": {"path": "other.jsonl"}})
        assert settings.store.backend == StoreBackend.JSONL
        assert settings.store.path == "other.jsonl"


class TestValidateStore:
    def test_memory_passes(self):
        Settings().validate_store()  # Should not raise

    def test_jsonl_with_path_passes(self):
        Settings(store={"backend": "jsonl", "path": "e.jsonl"}).validate_store()

    def test_jsonl_blank_path_raises(self):
        settings = Settings(store={"backend": "jsonl", "path": ""})
        with pytest.raises(ConfigError, match="non-empty store.path"):
            settings.validate_store()
