# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""YAML utilities for rustsmith.

Provides the YAML operations used by the settings layer and the
declaration front end:
- load_yaml(): Load YAML with no processing
- expand_env_vars(): Recursively expand ${VAR} syntax
- dump_yaml(): Write YAML to file

None of these mutate os.environ.
"""

import os
from pathlib import Path
from typing import Any

import yaml


def load_yaml(file_path: str | Path) -> dict[str, Any]:
    """Load YAML with no processing (for env var expansion, see expand_env_vars()).

    Raises:
        FileNotFoundError: If the YAML file doesn't exist
        yaml.YAMLError: If the YAML is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with open(file_path) as f:
        return yaml.safe_load(f) or {}


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables (supports ${VAR} and $VAR).

    Undefined variables are left unchanged.
    """
    if isinstance(data, str):
        return os.path.expandvars(data)
    elif isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    else:
        return data


def dump_yaml(data: dict[str, Any], file_path: str | Path, **kwargs) -> None:
    """Write a YAML file in block style, preserving key order.

    Args:
        data: Dictionary to write
        file_path: Output file path, parent directories are created
        **kwargs: Additional arguments passed to yaml.safe_dump()
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    default_kwargs = {
        'default_flow_style': False,
        'sort_keys': False,
        'allow_unicode': True,
        'width': 80,
        'indent': 2,
    }
    default_kwargs.update(kwargs)

    with open(file_path, 'w') as f:
        yaml.safe_dump(data, f, **default_kwargs)
