from pathlib import Path

import pytest

from airdrop.adapters.config.loader import AppConfig, ConfigLoader
from airdrop.core.constants import DEFAULT_LOG_LEVEL, DEFAULT_SERVICE_NAME
from airdrop.core.exceptions import ConfigError


def test_defaults():
    config = ConfigLoader(environ={}).load()

    assert config == AppConfig()
    assert config.log_level == DEFAULT_LOG_LEVEL
    assert config.service_name == DEFAULT_SERVICE_NAME
    assert config.log_file is None


def test_toml_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('log_level = "debug"\nlog_file = "~/logs/airdrop.log"\n')

    config = ConfigLoader(environ={}).load(toml_path=path)

    assert config.log_level == "DEBUG"
    assert config.log_file == Path("~/logs/airdrop.log").expanduser()


def test_env_overrides_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('log_level = "debug"\nservice_name = "from.toml"\n')
    environ = {"AIRDROP_CONFIG": str(path), "AIRDROP_LOG_LEVEL": "error"}

    config = ConfigLoader(environ=environ).load()

    assert config.log_level == "ERROR"
    assert config.service_name == "from.toml"


def test_default_config_location_is_used_when_present():
    path = Path.home() / ".config" / "airdrop" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text('service_name = "custom.service"\n')

    assert ConfigLoader(environ={}).load().service_name == "custom.service"


def test_explicit_missing_file(tmp_path):
    loader = ConfigLoader(environ={"AIRDROP_CONFIG": str(tmp_path / "missing.toml")})

    with pytest.raises(ConfigError):
        loader.load()


def test_malformed_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("log_level = \n")

    with pytest.raises(ConfigError):
        ConfigLoader(environ={}).load(toml_path=path)


def test_non_string_log_level():
    with pytest.raises(ConfigError):
        AppConfig.from_dict({"log_level": 10})
