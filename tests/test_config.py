"""Tests for configuration loading (config.py)."""

import os
from pathlib import Path

import pytest

from gradle_model.config import ModelConfig, load_config, parse_bool
from gradle_model.exceptions import ConfigurationError, InvalidConfigError
from gradle_model.quality import ProjectQuality


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No global/project config files or GRADLE_MODEL_* variables leak in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("GRADLE_MODEL_"):
            monkeypatch.delenv(key)
    return home


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config == ModelConfig()
        assert config.fallback_project_quality is ProjectQuality.FALLBACK
        assert config.property_prefix == "ide."

    def test_invalid_quality(self):
        with pytest.raises(InvalidConfigError) as exc:
            ModelConfig(fallback_quality="excellent")
        assert exc.value.key == "fallback_quality"

    def test_absolute_build_dir_rejected(self):
        with pytest.raises(InvalidConfigError):
            ModelConfig(build_dir_name="/tmp/build")

    def test_invalid_verbosity(self):
        with pytest.raises(InvalidConfigError):
            ModelConfig(verbosity="loud")


class TestSources:
    def test_project_file(self, tmp_path):
        (tmp_path / "gradle-model.toml").write_text('fallback_quality = "SIMPLE"\n')
        assert load_config().fallback_project_quality is ProjectQuality.SIMPLE

    def test_section_in_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[gradle-model]\nbuild_dir_name = "out"\n')
        assert load_config(config_file=path).build_dir_name == "out"

    def test_priority(self, tmp_path, isolated, monkeypatch):
        (isolated / ".gradle-model.toml").write_text('jdk_platform = "global"\nlibs_dir_name = "g"\n')
        (tmp_path / "gradle-model.toml").write_text('jdk_platform = "project"\n')
        monkeypatch.setenv("GRADLE_MODEL_COMPILE_ON_SAVE", "yes")
        config = load_config(verbose=True, augmented_build=False)
        assert config.libs_dir_name == "g"
        assert config.jdk_platform == "project"
        assert config.compile_on_save is True
        assert config.augmented_build is False
        assert config.verbosity == "verbose"

    def test_env_overridden_by_kwargs(self, monkeypatch):
        monkeypatch.setenv("GRADLE_MODEL_JDK_PLATFORM", "env")
        assert load_config(jdk_platform="cli").jdk_platform == "cli"
        assert load_config().jdk_platform == "env"

    def test_quiet_flag(self):
        assert load_config(quiet=True, verbose=False).verbosity == "quiet"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("GRADLE_MODEL_AUGMENTED_BUILD", "perhaps")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "nope.toml")

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("this is = = not toml")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(config_file=path)

    def test_unknown_key(self, tmp_path):
        (tmp_path / "gradle-model.toml").write_text("colour = 'blue'\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config()


class TestParseBool:
    @pytest.mark.parametrize("text", ["true", "1", "YES", " on "])
    def test_true(self, text):
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["false", "0", "No", "off"])
    def test_false(self, text):
        assert parse_bool(text) is False

    def test_garbage(self):
        with pytest.raises(ValueError):
            parse_bool("maybe")
