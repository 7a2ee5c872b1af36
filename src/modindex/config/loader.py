"""
Configuration loader with deep merge.

Precedence order (lowest to highest):
1. Defaults (defined in the Pydantic schemas)
2. YAML file
3. Environment variables
4. CLI arguments

The merge is recursive to preserve every key at every level.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import AppConfig


class ConfigError(Exception):
    """Error raised when the configuration cannot be loaded or is inconsistent."""
    pass


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursive dictionary merge.

    Args:
        base: Base dictionary
        override: Dictionary whose values override the base

    Returns:
        New merged dictionary. Override wins on leaf conflicts.

    Example:
        >>> base = {"a": {"b": 1, "c": 2}, "d": 3}
        >>> override = {"a": {"b": 99}, "e": 4}
        >>> deep_merge(base, override)
        {"a": {"b": 99, "c": 2}, "d": 3, "e": 4}
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file, or None to skip

    Returns:
        Dictionary with the configuration, or an empty dict without a file
    """
    if not config_path:
        return {}

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {config_path} must be a mapping")
    return data


def load_env_overrides() -> dict[str, Any]:
    """Load overrides from environment variables.

    Supported variables:
        MODINDEX_BASE_DIR: overrides project.base_dir
        MODINDEX_LOG_LEVEL: overrides logging.level
        MODINDEX_PROGRESS_INTERVAL: overrides progress.interval_seconds

    Returns:
        Dictionary with overrides from env vars
    """
    overrides: dict[str, Any] = {}

    if base_dir := os.environ.get("MODINDEX_BASE_DIR"):
        overrides.setdefault("project", {})["base_dir"] = base_dir

    if log_level := os.environ.get("MODINDEX_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = log_level.lower()

    if interval := os.environ.get("MODINDEX_PROGRESS_INTERVAL"):
        overrides.setdefault("progress", {})["interval_seconds"] = interval

    return overrides


def apply_cli_overrides(config_dict: dict[str, Any], cli_args: dict[str, Any]) -> dict[str, Any]:
    """Apply overrides from CLI arguments.

    Args:
        config_dict: Base configuration (already merged with YAML and env)
        cli_args: Dictionary with CLI arguments

    Returns:
        Configuration with the CLI overrides applied
    """
    overrides: dict[str, Any] = {}

    if cli_args.get("base_dir"):
        overrides.setdefault("project", {})["base_dir"] = str(cli_args["base_dir"])

    if cli_args.get("log_file"):
        overrides.setdefault("logging", {})["file"] = str(cli_args["log_file"])

    if cli_args.get("verbose") is not None:
        overrides.setdefault("logging", {})["verbose"] = cli_args["verbose"]

    if cli_args.get("progress_interval") is not None:
        overrides.setdefault("progress", {})["interval_seconds"] = cli_args["progress_interval"]

    return deep_merge(config_dict, overrides)


def load_config(
    config_path: Path | None = None,
    cli_args: dict[str, Any] | None = None,
) -> AppConfig:
    """Load and validate the complete application configuration.

    Relative ``project.base_dir`` values coming from the YAML file are
    anchored at the directory holding that file.

    Args:
        config_path: Path to the YAML configuration file
        cli_args: Dictionary with CLI arguments

    Returns:
        Validated AppConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigError: If the file cannot be parsed or validated
    """
    cli_args = cli_args or {}

    yaml_config = load_yaml_config(config_path)
    if config_path and isinstance(yaml_config.get("project"), dict):
        base_dir = Path(yaml_config["project"].get("base_dir", "."))
        if not base_dir.is_absolute():
            yaml_config["project"]["base_dir"] = str(config_path.parent / base_dir)

    merged = deep_merge(yaml_config, load_env_overrides())
    merged = apply_cli_overrides(merged, cli_args)

    try:
        return AppConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
