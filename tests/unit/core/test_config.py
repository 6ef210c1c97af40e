"""
Tests for configuration loading.
"""
from unittest.mock import MagicMock

import pytest

from rlist.core.config import (
    DEFAULT_DATETIME_FORMAT,
    RlistConfig,
    config_from_content,
    datetime_format_is_valid,
    load_config,
)
from rlist.core.exceptions import ConfigError
from rlist.core.logging_manager import RlistLogger
from rlist.core.paths import default_config_path, default_db_path


class TestDatetimeFormat:
    """Tests for datetime_format_is_valid()."""

    @pytest.mark.parametrize("fmt", ["%Y-%m-%d", "%d %b %Y, %H:%M", "%c"])
    def test_valid_formats(self, fmt):
        assert datetime_format_is_valid(fmt) is True

    @pytest.mark.parametrize("fmt", ["", "plain text", 42, None])
    def test_invalid_formats(self, fmt):
        assert datetime_format_is_valid(fmt) is False


class TestConfigFromContent:
    """Tests for config_from_content()."""

    def test_empty_content_gives_defaults(self, isolated_home):
        config = config_from_content(None)

        assert config.db_file == default_db_path()
        assert config.datetime_format == DEFAULT_DATETIME_FORMAT

    def test_reads_both_keys(self, tmp_dir):
        config = config_from_content(
            {"db_file": str(tmp_dir / "list.sqlite"), "datetime_format": "%d/%m/%Y"}
        )

        assert config.db_file == tmp_dir / "list.sqlite"
        assert config.datetime_format == "%d/%m/%Y"

    def test_expands_home(self, isolated_home):
        config = config_from_content({"db_file": "~/lists/rlist.sqlite"})
        assert config.db_file == isolated_home / "lists" / "rlist.sqlite"

    def test_relative_db_file_is_rejected(self):
        with pytest.raises(ConfigError):
            config_from_content({"db_file": "relative/rlist.sqlite"})

    def test_non_mapping_is_rejected(self):
        with pytest.raises(ConfigError):
            config_from_content(["db_file"])

    def test_invalid_format_falls_back_with_warning(self):
        mock_logger = MagicMock(spec=RlistLogger)

        config = config_from_content(
            {"datetime_format": "no directives"}, logger=mock_logger
        )

        assert config.datetime_format == DEFAULT_DATETIME_FORMAT
        mock_logger.log_warning.assert_called_once()


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_default_file_gives_defaults(self, isolated_home):
        config = load_config()

        assert config == RlistConfig()

    def test_reads_default_location(self, isolated_home, tmp_dir):
        path = default_config_path()
        path.parent.mkdir(parents=True)
        path.write_text(f"db_file: {tmp_dir / 'x.sqlite'}\n", encoding="utf-8")

        config = load_config()

        assert config.db_file == tmp_dir / "x.sqlite"

    def test_explicit_path(self, tmp_dir):
        path = tmp_dir / "custom.yml"
        path.write_text("datetime_format: '%Y'\n", encoding="utf-8")

        assert load_config(path).datetime_format == "%Y"

    def test_explicit_missing_path_raises(self, tmp_dir):
        with pytest.raises(ConfigError):
            load_config(tmp_dir / "missing.yml")

    def test_invalid_yaml_raises(self, tmp_dir):
        path = tmp_dir / "broken.yml"
        path.write_text("db_file: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_xdg_config_home_is_honored(self, isolated_home, tmp_dir, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_dir / "xdg"))
        assert default_config_path() == tmp_dir / "xdg" / "rlist.yml"
