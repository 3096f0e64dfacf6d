"""
Classification settings loader.
Builds a ClassificationConfig from config.py defaults, an optional YAML file
and command-line overrides (applied in that order).
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from pipeline.step3_region_classifiers import ClassificationConfig

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when classification settings cannot be loaded."""


_FIELD_TYPES = {
    "target_leg_angle_degrees": float,
    "tolerance_factor": float,
    "gate_untracked_joints": bool,
}


def _coerce(key: str, value: Any) -> Any:
    expected = _FIELD_TYPES[key]
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false, got {value!r}")
        return value
    # bool is an int subclass; reject it for numeric fields
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    return float(value)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    # Allow either a flat file or one nested under "classification"
    if "classification" in data and isinstance(data["classification"], dict):
        data = data["classification"]
    return data


def load_classification_config(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any
) -> ClassificationConfig:
    """
    Load classification settings.

    Args:
        path: Optional YAML file with keys target_leg_angle_degrees,
            tolerance_factor, gate_untracked_joints
        **overrides: Values that win over the file; None values are ignored

    Returns:
        ClassificationConfig

    Raises:
        ConfigError: unreadable file, unknown key or wrong value type
    """
    values: Dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        values.update(_read_yaml(path))
        logger.debug("Loaded classification settings from %s", path)

    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(values) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigError(f"Unknown classification settings: {', '.join(unknown)}")

    coerced = {key: _coerce(key, value) for key, value in values.items()}
    return dataclasses.replace(ClassificationConfig(), **coerced)
