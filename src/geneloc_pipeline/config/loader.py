"""Configuration loading with YAML parsing and validation."""

from pathlib import Path
from typing import Any

import pydantic_yaml

from .schema import PipelineConfig


def load_config(config_path: Path | str) -> PipelineConfig:
    """
    Load and validate pipeline configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PipelineConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        yaml_content = f.read()

    return pydantic_yaml.parse_yaml_raw_as(PipelineConfig, yaml_content)


def load_config_with_overrides(
    config_path: Path | str | None,
    overrides: dict[str, Any],
) -> PipelineConfig:
    """
    Load config from YAML (or defaults) and apply dictionary overrides.

    Used by CLI flags that override config file values.

    Args:
        config_path: Path to YAML configuration file, or None for defaults
        overrides: Values to override; dotted keys address nested sections,
            e.g. "annotation.backend". None values are ignored.

    Returns:
        Validated PipelineConfig with overrides applied
    """
    if config_path is None:
        config = PipelineConfig.default()
    else:
        config = load_config(config_path)

    config_dict = config.model_dump()

    for key, value in overrides.items():
        if value is None:
            continue
        if "." in key:
            parts = key.split(".")
            target = config_dict
            for part in parts[:-1]:
                target = target[part]
            target[parts[-1]] = value
        else:
            config_dict[key] = value

    return PipelineConfig.model_validate(config_dict)
