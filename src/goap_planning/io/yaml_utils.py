"""Define utility functions for importing data from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml_data(yaml_path: Path, required_keys: set[str] | None = None) -> dict[str, Any]:
    """Load a YAML file whose top level is a mapping from strings to values.

    :param yaml_path: Path to the YAML file to be imported
    :param required_keys: Set of keys required at the top level (if None, ignored)
    :return: Dictionary of the loaded data (empty if the file is empty)
    :raises FileNotFoundError: If the file doesn't exist
    :raises RuntimeError: If the file isn't valid YAML or its top level isn't a mapping
    :raises KeyError: If a required key is missing in the loaded data
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        with yaml_path.open() as yaml_file:
            yaml_data = yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to load from YAML file: {yaml_path}") from error

    if yaml_data is None:
        yaml_data = {}
    if not isinstance(yaml_data, dict):
        found_type = type(yaml_data).__name__
        raise RuntimeError(f"Expected a mapping at the top level of {yaml_path}, got {found_type}")

    missing = sorted((required_keys or set()) - yaml_data.keys())
    if missing:
        raise KeyError(f"Required keys {missing} were missing in data loaded from {yaml_path}")

    return yaml_data
