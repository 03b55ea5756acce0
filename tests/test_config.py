"""Tests for configuration loading."""

import os

import pytest

from bundle_insight.config import InsightConfig, load_config
from bundle_insight.exceptions import ConfigFileError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test away from real global/project config and env vars."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("BUNDLE_INSIGHT_"):
            monkeypatch.delenv(key)


class TestInsightConfig:
    def test_defaults(self):
        config = InsightConfig()
        assert config.project_root is None
        assert config.path_separator == os.sep
        assert config.reports_enabled is False
        assert config.json_indent == 2
        assert config.verbosity == "normal"

    def test_empty_separator_rejected(self):
        with pytest.raises(InvalidConfigError):
            InsightConfig(path_separator="")

    def test_negative_indent_rejected(self):
        with pytest.raises(InvalidConfigError):
            InsightConfig(json_indent=-1)

    def test_unknown_verbosity_rejected(self):
        with pytest.raises(InvalidConfigError):
            InsightConfig(verbosity="loud")

    def test_root_path_defaults_to_cwd(self, tmp_path):
        assert InsightConfig().root_path == tmp_path.resolve()


class TestLoadConfig:
    def test_project_file(self, tmp_path):
        (tmp_path / "bundle-insight.toml").write_text("json_indent = 4\n")
        assert load_config().json_indent == 4

    def test_explicit_file_beats_project_file(self, tmp_path):
        (tmp_path / "bundle-insight.toml").write_text("json_indent = 4\n")
        custom = tmp_path / "custom.toml"
        custom.write_text('json_indent = 0\npath_separator = "/"\n')
        config = load_config(config_file=custom)
        assert config.json_indent == 0
        assert config.path_separator == "/"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        (tmp_path / "bundle-insight.toml").write_text("reports_enabled = false\n")
        monkeypatch.setenv("BUNDLE_INSIGHT_REPORTS_ENABLED", "yes")
        monkeypatch.setenv("BUNDLE_INSIGHT_PROJECT_ROOT", "/srv/app")
        config = load_config()
        assert config.reports_enabled is True
        assert config.project_root == "/srv/app"

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("BUNDLE_INSIGHT_JSON_INDENT", "8")
        assert load_config(json_indent=1).json_indent == 1

    def test_none_override_ignored(self, monkeypatch):
        monkeypatch.setenv("BUNDLE_INSIGHT_JSON_INDENT", "8")
        assert load_config(json_indent=None).json_indent == 8

    def test_verbose_flag(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("BUNDLE_INSIGHT_REPORTS_ENABLED", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_config(config_file=tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("json_indent = = 3\n")
        with pytest.raises(ConfigFileError):
            load_config(config_file=bad)

    def test_unknown_key(self, tmp_path):
        (tmp_path / "bundle-insight.toml").write_text("colour = 'red'\n")
        with pytest.raises(InvalidConfigError, match="colour"):
            load_config()
