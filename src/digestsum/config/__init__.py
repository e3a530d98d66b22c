"""Configuration models and loaders for digestsum."""

from .loader import CONFIG_ENV_VAR, ConfigError, default_config_path, load_config
from .models import DigestsumConfig, OutputConfig, RuntimeConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "DigestsumConfig",
    "OutputConfig",
    "RuntimeConfig",
    "default_config_path",
    "load_config",
]
