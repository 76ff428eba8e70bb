"""
Tests for vertag.config and the config commands.
"""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from vertag.cli import cli
from vertag.config import (
    apply_env_overrides,
    configure_logging,
    get_config_path,
    get_default_config,
    load_config,
    merge_configs,
    save_config,
)
from vertag.exit_codes import CONFIG_ERROR, ConfigError


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    formatters = [(h, h.formatter) for h in root.handlers]
    yield root
    root.setLevel(level)
    for handler, formatter in formatters:
        handler.setFormatter(formatter)


class TestDefaults:
    """Tests for the default configuration."""

    def test_sections(self):
        config = get_default_config()

        assert config['general']['repository'] == "."
        assert config['general']['interactive'] is True
        assert config['general']['history_limit'] == 10
        assert config['versioning']['policy'] == "capped"
        assert 'level' in config['logging']
        assert 'format' in config['logging']

    def test_fresh_copy(self):
        config = get_default_config()
        config['versioning']['policy'] = "unbounded"

        assert get_default_config()['versioning']['policy'] == "capped"


class TestConfigPath:
    """Tests for locating the configuration file."""

    def test_default_path(self, isolated_home):
        assert get_config_path() == isolated_home / ".vertag" / "config.json"

    def test_existing_yaml(self, isolated_home):
        path = isolated_home / ".vertag" / "config.yaml"
        path.parent.mkdir()
        path.write_text("versioning:\n  policy: unbounded\n")

        assert get_config_path() == path

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text("{}")
        monkeypatch.setenv("VERTAG_CONFIG", str(path))

        assert get_config_path() == path


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file(self):
        assert load_config() == get_default_config()

    def test_json_file(self, isolated_home):
        path = isolated_home / ".vertag" / "config.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"general": {"history_limit": 25}}))

        config = load_config()

        assert config['general']['history_limit'] == 25
        assert config['general']['interactive'] is True

    def test_toml_file(self, isolated_home):
        path = isolated_home / ".vertag" / "config.toml"
        path.parent.mkdir()
        path.write_text('[versioning]\npolicy = "unbounded"\n')

        assert load_config()['versioning']['policy'] == "unbounded"

    def test_yaml_file(self, isolated_home):
        path = isolated_home / ".vertag" / "config.yaml"
        path.parent.mkdir()
        path.write_text("general:\n  interactive: false\n")

        assert load_config()['general']['interactive'] is False

    def test_broken_file_falls_back_to_defaults(self, isolated_home):
        path = isolated_home / ".vertag" / "config.json"
        path.parent.mkdir()
        path.write_text("{not json")

        assert load_config() == get_default_config()


class TestEnvOverrides:
    """Tests for VERTAG_* environment overrides."""

    def test_string(self, monkeypatch):
        monkeypatch.setenv("VERTAG_VERSIONING_POLICY", "unbounded")
        assert apply_env_overrides(get_default_config())['versioning']['policy'] == "unbounded"

    def test_bool(self, monkeypatch):
        monkeypatch.setenv("VERTAG_GENERAL_INTERACTIVE", "off")
        assert apply_env_overrides(get_default_config())['general']['interactive'] is False

    def test_underscore_key(self, monkeypatch):
        monkeypatch.setenv("VERTAG_GENERAL_HISTORY_LIMIT", "3")
        assert apply_env_overrides(get_default_config())['general']['history_limit'] == 3

    def test_unknown_key_ignored(self, monkeypatch):
        monkeypatch.setenv("VERTAG_NOPE_VALUE", "x")
        assert apply_env_overrides(get_default_config()) == get_default_config()

    def test_applied_by_load_config(self, monkeypatch):
        monkeypatch.setenv("VERTAG_VERSIONING_POLICY", "unbounded")
        assert load_config()['versioning']['policy'] == "unbounded"


class TestSaveAndMerge:
    """Tests for save_config and merge_configs."""

    @pytest.mark.parametrize("suffix", ["json", "toml", "yaml"])
    def test_save_and_load(self, isolated_home, suffix):
        config = get_default_config()
        config['versioning']['policy'] = "unbounded"
        path = isolated_home / ".vertag" / f"config.{suffix}"

        assert save_config(config, path) == path
        assert load_config()['versioning']['policy'] == "unbounded"

    def test_yaml_written_block_style(self, tmp_path):
        path = save_config(get_default_config(), tmp_path / "config.yaml")
        assert yaml.safe_load(path.read_text()) == get_default_config()

    def test_merge_nested(self):
        merged = merge_configs(
            {"a": {"x": 1, "y": 2}, "b": 1},
            {"a": {"y": 3}, "c": 4},
        )
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_merge_leaves_inputs_alone(self):
        base = {"a": {"x": 1}}
        merge_configs(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}

    def test_save_failure_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(ConfigError, match="Cannot write configuration"):
            save_config(get_default_config(), blocker / "config.json")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_from_config(self, restore_root_logger):
        config = get_default_config()
        config['logging']['level'] = "warning"

        configure_logging(config)
        assert restore_root_logger.level == logging.WARNING

    def test_debug_flag_wins(self, restore_root_logger):
        configure_logging(get_default_config(), debug=True)
        assert restore_root_logger.level == logging.DEBUG


class TestConfigCommands:
    """Tests for `vertag config`."""

    def test_show(self):
        result = CliRunner().invoke(cli, ['config', 'show'])

        assert result.exit_code == 0
        assert json.loads(result.output) == get_default_config()

    def test_path(self, isolated_home):
        result = CliRunner().invoke(cli, ['config', 'path'])

        assert result.exit_code == 0
        assert json.loads(result.output)['config_path'] == str(isolated_home / ".vertag" / "config.json")

    def test_init(self, isolated_home):
        result = CliRunner().invoke(cli, ['config', 'init', '--format', 'toml'])

        path = isolated_home / ".vertag" / "config.toml"
        assert result.exit_code == 0
        assert path.exists()
        assert load_config()['general']['history_limit'] == 10

    def test_init_does_not_overwrite(self, isolated_home):
        path = isolated_home / ".vertag" / "config.json"
        path.parent.mkdir()
        path.write_text('{"general": {"history_limit": 3}}')

        result = CliRunner().invoke(cli, ['config', 'init'])

        assert result.exit_code == 0
        assert json.loads(path.read_text()) == {"general": {"history_limit": 3}}

    def test_init_unwritable(self, isolated_home):
        (isolated_home / ".vertag").write_text("not a directory")
        path = isolated_home / ".vertag" / "config.json"

        result = CliRunner().invoke(cli, ['config', 'init'])

        assert result.exit_code == CONFIG_ERROR
        assert str(path) not in result.output.splitlines()
