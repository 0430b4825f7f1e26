"""Tests for configuration sources."""

import os

import pytest

from src.config.errors import ConfigError, ConfigErrorKind
from src.config.loader import load_config
from src.config.sources import dotenv_source, environment_source, layered_source


class TestDotenvSource:
    def test_reads_values(self, tmp_path):
        env_file = tmp_path / "photo-sync.env"
        env_file.write_text(
            "SYNOLOGY_ACCOUNTS=pete\n"
            "SYNOLOGY_pete_HOST=10.0.0.1\n"
            "# comment\n"
            "GOOGLE_ACCOUNTS=pete\n"
        )
        source = dotenv_source(env_file)

        assert source["SYNOLOGY_pete_HOST"] == "10.0.0.1"
        config = load_config(source=source)
        assert config.get_paired_synology_account("pete").host == "10.0.0.1"

    def test_does_not_touch_environment(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PHOTO_SYNC_ONLY_IN_FILE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("PHOTO_SYNC_ONLY_IN_FILE=1\n")

        dotenv_source(env_file)

        assert "PHOTO_SYNC_ONLY_IN_FILE" not in os.environ

    def test_drops_keys_without_value(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("DRY_RUN\nLOG_LEVEL=debug\n")

        source = dotenv_source(env_file)

        assert "DRY_RUN" not in source
        assert source["LOG_LEVEL"] == "debug"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            dotenv_source(tmp_path / "missing.env")
        assert exc_info.value.kind is ConfigErrorKind.SOURCE_ERROR


class TestLayeredSource:
    def test_earlier_source_wins(self):
        source = layered_source({"LOG_LEVEL": "debug"}, {"LOG_LEVEL": "warning", "DRY_RUN": "true"})
        config = load_config(source=source)

        assert config.log_level == "debug"
        assert config.dry_run is True

    def test_slots_found_across_layers(self):
        source = layered_source(
            {"SYNOLOGY_ACCOUNT_2_NAME": "NAS2"},
            {"SYNOLOGY_ACCOUNT_1_NAME": "NAS1"},
        )
        config = load_config(source=source)
        assert config.get_synology_account_names() == ["NAS1", "NAS2"]


class TestEnvironmentSource:
    def test_returns_process_environment(self, no_dotenv):
        assert environment_source() is os.environ

    def test_existing_variables_not_overridden(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_LEVEL", "error")
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=debug\n")

        source = environment_source(env_file)

        assert source["LOG_LEVEL"] == "error"

    def test_missing_explicit_file_raises(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            environment_source(tmp_path / "nope.env")
        assert exc_info.value.kind is ConfigErrorKind.SOURCE_ERROR
