"""Configuration for gen-mode via Pydantic Settings.

Settings supply the defaults for the CLI options and can be overridden with
``GEN_MODE_*`` environment variables.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TARGETS = ("python", "go")


class GeneratorSettings(BaseSettings):
    """Defaults for a generation run."""

    package: str = Field(default="main", description="Package name used in the generated code")
    target: str = Field(default="python", description="Target language: python or go")
    env_var: str = Field(default="MODE", description="Environment variable read at start-up")
    log_level: str = Field(default="INFO", description="Log level for the generator")
    log_format: str = Field(default="console", description="console or json")

    model_config = SettingsConfigDict(env_prefix="GEN_MODE_")

    @field_validator("package")
    @classmethod
    def validate_package(cls, v):
        if not v:
            raise ValueError("package cannot be empty")
        if not all(part.isidentifier() for part in v.split(".")):
            raise ValueError(f"Invalid package name: {v}")
        return v

    @field_validator("target")
    @classmethod
    def validate_target(cls, v):
        v = v.lower()
        if v not in TARGETS:
            raise ValueError(f"Invalid target: {v}")
        return v

    @field_validator("env_var")
    @classmethod
    def validate_env_var(cls, v):
        if not v or not v.replace("_", "a").isalnum():
            raise ValueError(f"Invalid environment variable name: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid log level: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ["console", "json"]:
            raise ValueError(f"Invalid log format: {v}")
        return v


# Global settings instance
_global_settings: Optional[GeneratorSettings] = None


def get_settings() -> GeneratorSettings:
    """Get the global settings instance."""
    global _global_settings
    if _global_settings is None:
        _global_settings = GeneratorSettings()
    return _global_settings


def reset_settings():
    """Reset the global settings so the next call re-reads the environment."""
    global _global_settings
    _global_settings = None
