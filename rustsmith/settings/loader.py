# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration loading and management for rustsmith."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional
from unittest.mock import patch

from pydantic import ValidationError
from rich.console import Console

from .schema import SystemConfig

console = Console(stderr=True)


def _is_path_field(key: str) -> bool:
    """Fields ending with _dir, _out, _path or _file are treated as paths."""
    return key.endswith(('_dir', '_out', '_path', '_file'))


def _resolve_cli_paths(cli_overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Resolve relative paths in CLI overrides to CWD."""
    result = {}
    cwd = Path.cwd()

    for key, value in cli_overrides.items():
        if _is_path_field(key) and value is not None and isinstance(value, (str, Path)):
            path = Path(value)
            result[key] = str((cwd / path).resolve()) if not path.is_absolute() else str(value)
        else:
            result[key] = value

    return result


def load_config(
    project_file: Optional[Path] = None,
    **cli_overrides
) -> SystemConfig:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed as kwargs)
    2. Environment variables (RSMITH_* prefix)
    3. Project config file (rustsmith.yaml)
    4. Built-in defaults

    RSMITH_LOG_LEVEL is accepted as shorthand for RSMITH_LOGGING__LEVEL.

    Raises:
        pydantic.ValidationError: If the merged configuration is invalid
    """
    try:
        cli_overrides = _resolve_cli_paths(cli_overrides)

        if 'logging' not in cli_overrides and 'RSMITH_LOG_LEVEL' in os.environ:
            cli_overrides['logging'] = {'level': os.environ['RSMITH_LOG_LEVEL']}

        if project_file:
            cli_overrides['project_file'] = Path(project_file)

        return SystemConfig(**cli_overrides)

    except ValidationError as e:
        console.print("[bold red]Configuration validation failed:[/bold red]")
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            console.print(f"  [red]{field}: {error['msg']}[/red]")
        raise


@lru_cache(maxsize=1)
def get_config() -> SystemConfig:
    """Get cached configuration instance."""
    return load_config()


def reset_config() -> None:
    """Reset the cached configuration (mainly for testing)."""
    get_config.cache_clear()


def get_default_config(**overrides) -> SystemConfig:
    """Get a configuration with only default values (no files or env vars)."""
    filtered_env = {
        k: v for k, v in os.environ.items()
        if not k.startswith('RSMITH_')
    }

    with patch.dict(os.environ, filtered_env, clear=True):
        return load_config(project_file=Path(os.devnull), **overrides)
