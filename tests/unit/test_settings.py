"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from famlyeml.config import Config, get_config


class TestConfig:
    """Tests for Config defaults and environment overrides."""

    def test_defaults(self) -> None:
        """Test default settings."""
        config = Config()

        assert config.data_table_id == "emailFieldsTable"
        assert config.default_charset == "utf-8"
        assert config.export_filename == "famly-parsed-data.json"
        assert config.json_indent == 2
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_environment_override(self, monkeypatch) -> None:
        """Test FAMLYEML_ environment variables override defaults."""
        monkeypatch.setenv("FAMLYEML_DATA_TABLE_ID", "otherTable")
        monkeypatch.setenv("FAMLYEML_JSON_INDENT", "4")

        config = Config()

        assert config.data_table_id == "otherTable"
        assert config.json_indent == 4

    def test_normalization(self, monkeypatch) -> None:
        """Test log level and charset are normalized."""
        monkeypatch.setenv("FAMLYEML_LOG_LEVEL", "debug")
        monkeypatch.setenv("FAMLYEML_DEFAULT_CHARSET", " ISO-8859-1 ")

        config = Config()

        assert config.log_level == "DEBUG"
        assert config.default_charset == "iso-8859-1"

    def test_invalid_indent(self, monkeypatch) -> None:
        """Test an out-of-range indent is rejected."""
        monkeypatch.setenv("FAMLYEML_JSON_INDENT", "20")

        with pytest.raises(ValidationError):
            Config()

    def test_get_config_is_cached(self) -> None:
        """Test get_config returns one shared instance."""
        assert get_config() is get_config()
