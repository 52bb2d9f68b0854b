"""Tests for settings loading from the config directory and environment."""

import json

from tvdbclient.auth import DEFAULT_BASE_URL
from tvdbclient.config import Config


def test_defaults_written_on_first_use(config):
    settings_file = f"{config.config_dir}/settings.json"

    with open(settings_file, encoding="utf-8") as f:
        saved = json.load(f)

    assert saved["base_url"] == DEFAULT_BASE_URL
    assert saved["retry_max"] == 3
    assert config.base_url == DEFAULT_BASE_URL


def test_file_values_override_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("TVDB_BASE_URL", raising=False)
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.json").write_text(json.dumps({
        "base_url": "http://localhost:9000/v4/",
        "retry_max": 1,
        "timeout": 5,
    }))

    config = Config(str(config_dir))

    assert config.base_url == "http://localhost:9000/v4"
    assert config.settings["retry_max"] == 1
    assert config.settings["retry_wait_max"] == 5


def test_environment_overrides_file(config, monkeypatch):
    monkeypatch.setenv("TVDB_BASE_URL", "https://staging.example/v4")

    reloaded = Config(config.config_dir)

    assert reloaded.base_url == "https://staging.example/v4"


def test_create_transport_uses_retry_settings(config):
    config.settings.update(retry_max=2, retry_status_codes=[502], timeout=7)

    transport = config.create_transport()

    assert transport.retry.total == 2
    assert set(transport.retry.status_forcelist) == {502}
    assert transport.timeout == 7
    transport.close()
