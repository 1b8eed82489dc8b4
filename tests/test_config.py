"""Tests for loading agog configuration."""

from pathlib import Path

import pytest
import yaml

from agog.config import DEFAULT_HOME, AgogConfig, ConfigManager, EraseConfig


def test_defaults_without_config_file(tmp_path):
    config = ConfigManager(tmp_path / "config.yaml").load_config()

    assert config.home == DEFAULT_HOME
    assert config.projects_dir == DEFAULT_HOME / "projects"
    assert config.erase == EraseConfig(strict=False, skip_hidden=True)


def test_config_file_loading(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
home: /srv/agog
erase:
  strict: true
  skip_hidden: false
"""
    )

    config = ConfigManager(config_path).load_config()

    assert config.home == Path("/srv/agog")
    assert config.projects_dir == Path("/srv/agog/projects")
    assert config.erase.strict is True
    assert config.erase.skip_hidden is False


def test_config_is_loaded_once(tmp_path):
    config_path = tmp_path / "config.yaml"
    manager = ConfigManager(config_path)
    first = manager.load_config()

    config_path.write_text("home: /elsewhere\n")

    assert manager.load_config() is first


def test_invalid_yaml_falls_back_to_defaults(tmp_path, caplog):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("home: [unterminated\n")

    config = ConfigManager(config_path).load_config()

    assert config.home == DEFAULT_HOME
    assert "Error loading config" in caplog.text


def test_non_mapping_config_falls_back_to_defaults(tmp_path, caplog):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n")

    config = ConfigManager(config_path).load_config()

    assert config == AgogConfig()
    assert "Error loading config" in caplog.text


@pytest.mark.parametrize("home_value", ["5", "[a, b]", "{nested: value}"])
def test_non_string_home_falls_back_to_defaults(tmp_path, caplog, home_value):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"home: {home_value}\n")

    config = ConfigManager(config_path).load_config()

    assert config == AgogConfig()
    assert "'home' must be a path string" in caplog.text


def test_env_overrides(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("home: /from/file\n")
    monkeypatch.setenv("AGOG_HOME", str(tmp_path / "from-env"))
    monkeypatch.setenv("AGOG_ERASE_STRICT", "yes")
    monkeypatch.setenv("AGOG_ERASE_SKIP_HIDDEN", "0")

    config = ConfigManager(config_path).load_config()

    assert config.home == tmp_path / "from-env"
    assert config.erase.strict is True
    assert config.erase.skip_hidden is False


def test_unparseable_env_boolean_is_ignored(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("AGOG_ERASE_STRICT", "sometimes")

    config = ConfigManager(tmp_path / "config.yaml").load_config()

    assert config.erase.strict is False
    assert "AGOG_ERASE_STRICT" in caplog.text


def test_save_config(tmp_path):
    config_path = tmp_path / "nested" / "config.yaml"
    config = AgogConfig(home=tmp_path / "home", erase=EraseConfig(strict=True))

    ConfigManager(config_path).save_config(config)

    data = yaml.safe_load(config_path.read_text())
    assert data == {
        "home": str(tmp_path / "home"),
        "erase": {"strict": True, "skip_hidden": True},
    }
    assert ConfigManager(config_path).load_config() == config
