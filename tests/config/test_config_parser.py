"""
Tests for configuration parsing.
"""

import pytest

from baro.config.parser import (
    ZIG_INDEX_URL,
    BaroConfig,
    ToolConfig,
    load_config,
    parse_config,
    parse_config_data,
)
from baro.core.exceptions import ConfigError


class TestDefaults:
    """Test default configuration values."""

    def test_defaults(self, isolated_home):
        """Test defaults follow the XDG layout."""
        config = BaroConfig()

        assert config.appdata_path == isolated_home / ".local" / "share" / "baro"
        assert config.cache_file_path == isolated_home / ".cache" / "baro" / "cache.json"
        assert config.log_level == "INFO"
        assert config.timeout is None
        assert config.tool("compiler") == ToolConfig()
        assert config.tool("lsp") is None

    def test_missing_default_file(self, isolated_home):
        """Test a missing default file yields the defaults."""
        config = load_config()

        assert config.source is None
        assert config.tool("compiler").index_url == ZIG_INDEX_URL

    def test_missing_explicit_file(self, tmp_path):
        """Test a missing explicit file is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_ensure_directories(self, tmp_path):
        """Test the data and cache roots are created."""
        config = BaroConfig(appdata_path=tmp_path / "data", cache_path=tmp_path / "cache")

        config.ensure_directories()

        assert (tmp_path / "data").is_dir()
        assert (tmp_path / "cache").is_dir()


class TestParseConfig:
    """Test parsing config.yaml files."""

    def test_full_file(self, tmp_path):
        """Test every key is read."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"appdata_path: {tmp_path / 'data'}\n"
            f"cache_path: {tmp_path / 'cache'}\n"
            "cache_file: tokens.json\n"
            "log_level: debug\n"
            "timeout: 30\n"
            "tools:\n"
            "  compiler:\n"
            "    check_for_update: false\n"
            "    index_url: https://mirror.example.com/index.json\n"
        )

        config = load_config(config_file)

        assert config.source == config_file
        assert config.appdata_path == tmp_path / "data"
        assert config.cache_file_path == tmp_path / "cache" / "tokens.json"
        assert config.log_level == "DEBUG"
        assert config.timeout == 30
        compiler = config.tool("compiler")
        assert compiler.enabled is True
        assert compiler.check_for_update is False
        assert compiler.index_url == "https://mirror.example.com/index.json"

    def test_empty_file(self, tmp_path):
        """Test an empty file yields the defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = parse_config(config_file)

        assert config.log_level == "INFO"
        assert config.source == config_file

    def test_invalid_yaml(self, tmp_path):
        """Test broken YAML raises ConfigError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("tools: [unclosed\n")

        with pytest.raises(ConfigError, match="invalid YAML"):
            parse_config(config_file)

    def test_home_is_expanded(self, isolated_home):
        """Test ~ is expanded in paths."""
        config = parse_config_data({"appdata_path": "~/zig-data"})

        assert config.appdata_path == isolated_home / "zig-data"

    def test_disabled_tool(self):
        """Test tools can be disabled and configured."""
        config = parse_config_data({"tools": {"lsp": {"enabled": False}}})

        assert config.tool("lsp").enabled is False
        assert config.tool("compiler") == ToolConfig()


class TestValidation:
    """Test invalid configuration is rejected."""

    @pytest.mark.parametrize(
        "data, message",
        [
            (["a"], "mapping"),
            ({"appdata_path": "relative/path"}, "absolute"),
            ({"cache_path": 5}, "non-empty string"),
            ({"cache_file": "dir/cache.json"}, "plain file name"),
            ({"log_level": "LOUD"}, "log_level"),
            ({"timeout": 0}, "timeout"),
            ({"timeout": True}, "timeout"),
            ({"timeout": "ten"}, "timeout"),
            ({"tools": []}, "'tools' must be a mapping"),
            ({"tools": {"debugger": {}}}, "unknown tool"),
            ({"tools": {"compiler": "yes"}}, "must be a mapping"),
            ({"tools": {"compiler": {"enabled": "yes"}}}, "boolean"),
            ({"tools": {"compiler": {"index_url": "ftp://x"}}}, "http"),
        ],
    )
    def test_invalid(self, data, message):
        """Test each invalid value raises ConfigError."""
        with pytest.raises(ConfigError, match=message):
            parse_config_data(data)

    def test_null_timeout_allowed(self):
        """Test an explicit null timeout keeps the transport default."""
        assert parse_config_data({"timeout": None}).timeout is None
