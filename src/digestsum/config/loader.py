"""Config loading entry points for digestsum."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from digestsum.errors import EX_USAGE, DigestsumError

from .models import DigestsumConfig

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for earlier interpreters
    import tomli as tomllib  # type: ignore[assignment]

APP_NAME = "digestsum"
CONFIG_ENV_VAR = "DIGESTSUM_CONFIG"
CONFIG_FILENAME = "config.toml"


class ConfigError(DigestsumError):
    """Raised when configuration files cannot be loaded or validated."""

    exit_code = EX_USAGE


def default_config_path() -> Path | None:
    """Return the config file to use when none is given explicitly.

    ``$DIGESTSUM_CONFIG`` wins; otherwise the per-user file under
    ``$XDG_CONFIG_HOME`` (``~/.config``) is used when it exists.
    """

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    base = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    candidate = Path(base).expanduser() / APP_NAME / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> DigestsumConfig:
    """Load the configuration, layering the file and optional overrides on the defaults."""

    config_path = path if path is not None else default_config_path()
    if config_path is not None:
        config_data = _expect_mapping(_read_structured_file(config_path), config_path)
    else:
        config_data = {}

    merged: dict[str, Any] = _deep_merge(DigestsumConfig().model_dump(mode="json"), config_data)

    if overrides:
        merged = _deep_merge(merged, _expand_override_keys(overrides))

    try:
        return DigestsumConfig.model_validate(merged)
    except ValidationError as exc:
        source = config_path if config_path is not None else "overrides"
        raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc


def _expect_mapping(payload: Any, source: Path) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Expected mapping data in {source}, got {type(payload)!r}.")
    return dict(payload)


def _read_structured_file(path: Path) -> Any:
    """Return the parsed contents of a YAML/TOML/JSON file."""

    if not path.exists():
        raise ConfigError(f"Config file {path} does not exist.")

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read the config from {path}: {exc}") from exc

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text) or {}
        if suffix == ".toml":
            return tomllib.loads(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to parse the config from {path}: {exc}") from exc

    raise ConfigError(f"Unsupported config format for {path}")


def _deep_merge(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two mappings returning a new dictionary."""

    result: dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in extra.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(value, Mapping)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_override_keys(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Support dotted-notation overrides like ``output.style``."""

    result: dict[str, Any] = {}
    for key, value in overrides.items():
        converted = _expand_single_override(key, value)
        result = _deep_merge(result, converted)
    return result


def _expand_single_override(key: Any, value: Any) -> dict[str, Any]:
    if isinstance(key, str) and "." in key:
        parts = key.split(".")
        cursor: dict[str, Any] = {}
        root = cursor
        for segment in parts[:-1]:
            next_cursor: dict[str, Any] = {}
            cursor[segment] = next_cursor
            cursor = next_cursor
        cursor[parts[-1]] = value
        return root
    return {key: value}


__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "default_config_path",
    "load_config",
]
