"""Tests for ConfigManager."""

import pytest

from bitdefender.config import ConfigManager


class TestConfigManager:
    def test_defaults_without_file(self):
        config = ConfigManager().get_config()
        assert config.timeout == 60
        assert config.elasticsearch_url == ""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("timeout: 120\nport: 8000\nupload_dir: /tmp/uploads\n")
        config = ConfigManager(str(path)).get_config()

        assert config.timeout == 120
        assert config.port == 8000
        assert config.upload_dir == "/tmp/uploads"

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert ConfigManager(str(path)).get_config().timeout == 60

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(str(tmp_path / "nope.yaml"))

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("timeout: 120\n")
        monkeypatch.setenv("MALICE_TIMEOUT", "15")
        monkeypatch.setenv("MALICE_ELASTICSEARCH_URL", "http://es:9200")
        monkeypatch.setenv("MALICE_SCANID", "abc")
        config = ConfigManager(str(path)).get_config()

        assert config.timeout == 15
        assert config.elasticsearch_url == "http://es:9200"
        assert config.scanid == "abc"

    def test_update_config_ignores_none(self):
        manager = ConfigManager()
        config = manager.update_config({"timeout": None, "elasticsearch_url": "http://es"})

        assert config.timeout == 60
        assert config.elasticsearch_url == "http://es"
        assert manager.get_config() is config

    def test_signature_stamp(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MALICE_UPDATED_FILE", str(tmp_path / "UPDATED"))
        monkeypatch.setenv("MALICE_BUILD_TIME", "20200101")
        stamp = ConfigManager().signature_stamp()

        assert stamp.read() == "20200101"

    def test_tool_manager_uses_bdscan_path(self, tmp_path, monkeypatch):
        exe = tmp_path / "bdscan"
        exe.write_text("fake")
        monkeypatch.setenv("MALICE_BDSCAN_PATH", str(exe))
        tm = ConfigManager().tool_manager()

        assert tm.get_tool_path("bdscan") == exe
