"""Unit tests for settings loading."""

from pathlib import Path

import pytest

from wmi_exporter.config import Settings, get_settings, reload_settings
from wmi_exporter.exceptions import ConfigError
from wmi_exporter.scrape import ScrapeMode


@pytest.fixture
def config_file(tmp_path: Path):
    def write(text: str) -> Path:
        path = tmp_path / "wmi_exporter.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return write


class TestDefaults:
    """Test default settings."""

    def test_default_settings(self):
        settings = Settings()

        assert settings.listen_address == "0.0.0.0"
        assert settings.listen_port == 9182
        assert settings.enabled_collectors == ["cs", "logical_disk", "system"]
        assert settings.scrape_mode == ScrapeMode.PARALLEL
        assert settings.scrape_timeout == 10.0
        assert settings.wmi_namespace == "root\\cimv2"
        assert settings.logical_disk.volume_exclude == "_Total"

    def test_comma_separated_collectors(self):
        settings = Settings(enabled_collectors="system, cs,,")
        assert settings.enabled_collectors == ["system", "cs"]

    def test_effective_timeout(self):
        assert Settings(scrape_timeout=2.5).effective_timeout == 2.5
        assert Settings(scrape_timeout=0).effective_timeout is None

    def test_port_out_of_range(self):
        with pytest.raises(ValueError):
            Settings(listen_port=70000)


class TestEnvironment:
    """Test WMI_EXPORTER_* environment overrides."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("WMI_EXPORTER_LISTEN_PORT", "9999")
        monkeypatch.setenv("WMI_EXPORTER_ENABLED_COLLECTORS", "system")
        monkeypatch.setenv("WMI_EXPORTER_SCRAPE_MODE", "sequential")

        settings = Settings()

        assert settings.listen_port == 9999
        assert settings.enabled_collectors == ["system"]
        assert settings.scrape_mode == ScrapeMode.SEQUENTIAL

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("WMI_EXPORTER_LOGICAL_DISK__VOLUME_EXCLUDE", "_Total|HarddiskVolume.+")
        assert Settings().logical_disk.volume_exclude == "_Total|HarddiskVolume.+"


class TestYamlLoading:
    """Test YAML configuration files."""

    def test_none_gives_defaults(self):
        assert Settings.load_from_yaml(None) == Settings()

    def test_load_from_yaml(self, config_file):
        path = config_file(
            "listen_port: 9200\n"
            "enabled_collectors: [system]\n"
            "scrape_timeout: 3\n"
            "logical_disk:\n"
            "  volume_include: 'C:'\n"
        )

        settings = Settings.load_from_yaml(path)

        assert settings.listen_port == 9200
        assert settings.enabled_collectors == ["system"]
        assert settings.scrape_timeout == 3.0
        assert settings.logical_disk.volume_include == "C:"
        assert settings.logical_disk.volume_exclude == "_Total"

    def test_empty_file_gives_defaults(self, config_file):
        assert Settings.load_from_yaml(config_file("")).listen_port == 9182

    def test_env_beats_yaml(self, config_file, monkeypatch):
        monkeypatch.setenv("WMI_EXPORTER_LISTEN_PORT", "9300")
        settings = Settings.load_from_yaml(config_file("listen_port: 9200\n"))
        assert settings.listen_port == 9300

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            Settings.load_from_yaml(tmp_path / "nope.yaml")
        assert exc_info.value.config_path.endswith("nope.yaml")

    def test_malformed_yaml(self, config_file):
        with pytest.raises(ConfigError):
            Settings.load_from_yaml(config_file("listen_port: [9200\n"))

    def test_non_mapping(self, config_file):
        with pytest.raises(ConfigError):
            Settings.load_from_yaml(config_file("- system\n- cs\n"))

    def test_invalid_value(self, config_file):
        with pytest.raises(ConfigError):
            Settings.load_from_yaml(config_file("scrape_mode: sometimes\n"))


class TestCache:
    """Test settings caching."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()

    def test_reload_settings(self, monkeypatch):
        get_settings.cache_clear()
        first = get_settings()
        monkeypatch.setenv("WMI_EXPORTER_LISTEN_PORT", "9555")

        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.listen_port == 9555
        get_settings.cache_clear()
