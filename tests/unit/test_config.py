"""Tests for generator settings."""

import pytest
from gen_mode.config import GeneratorSettings, get_settings, reset_settings


class TestGeneratorSettings:
    def test_defaults(self):
        settings = GeneratorSettings()
        assert settings.package == "main"
        assert settings.target == "python"
        assert settings.env_var == "MODE"
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GEN_MODE_TARGET", "go")
        monkeypatch.setenv("GEN_MODE_PACKAGE", "modes")
        settings = GeneratorSettings()
        assert settings.target == "go"
        assert settings.package == "modes"

    def test_target_case_insensitive(self):
        assert GeneratorSettings(target="Go").target == "go"

    def test_invalid_target(self):
        with pytest.raises(ValueError, match="Invalid target"):
            GeneratorSettings(target="rust")

    def test_invalid_package(self):
        with pytest.raises(ValueError, match="Invalid package name"):
            GeneratorSettings(package="my-pkg")

    def test_empty_package(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            GeneratorSettings(package="")

    def test_invalid_env_var(self):
        with pytest.raises(ValueError, match="Invalid environment variable"):
            GeneratorSettings(env_var="APP-MODE")

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            GeneratorSettings(log_level="LOUD")


class TestGlobalSettings:
    def test_cached_until_reset(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("GEN_MODE_ENV_VAR", "APP_MODE")
        assert get_settings().env_var == "MODE"

        reset_settings()
        assert get_settings().env_var == "APP_MODE"
