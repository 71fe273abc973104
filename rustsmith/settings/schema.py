# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""rustsmith configuration schema using Pydantic.

Path Resolution Rules
---------------------
"Paths resolve relative to where they're specified"

1. **Full paths**: Always used as-is
2. **Relative paths from CLI**: Resolve to current working directory
3. **Relative paths from YAML/env/defaults**: Resolve to project directory

Project directory is where rustsmith.yaml lives, found by walking up from
CWD (or taken from RSMITH_PROJECT_DIR). Without a project file the CWD is
the project directory.

Configuration Priority
----------------------
1. CLI arguments (passed to SystemConfig constructor)
2. Environment variables (RSMITH_* prefix, nested with __)
3. Project config file (rustsmith.yaml)
4. Built-in defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from rustsmith._internal.io.yaml import expand_env_vars

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "rustsmith.yaml"
ENV_PROJECT_DIR = "RSMITH_PROJECT_DIR"

_KNOWN_ARCHES = ("arm", "arm64", "x86", "x86_64")
# Host toolchains exist only for these
_HOST_ARCHES = ("x86", "x86_64")


def find_project_config() -> Path | None:
    """Find the project configuration file.

    If RSMITH_PROJECT_DIR is set only that directory is checked, otherwise
    walk up from CWD looking for rustsmith.yaml.
    """
    if project_dir_override := os.environ.get(ENV_PROJECT_DIR):
        candidate = Path(project_dir_override).resolve() / PROJECT_CONFIG_FILE
        return candidate if candidate.exists() else None

    current = Path.cwd().resolve()
    while current != current.parent:
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.exists():
            return candidate
        current = current.parent

    return None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading the project rustsmith.yaml."""

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        self.project_file_used = None

        if project_file is not None:
            if project_file.exists() and project_file.is_file():
                self.project_file_used = project_file
        else:
            self.project_file_used = find_project_config()

        self._data = self._load(self.project_file_used) if self.project_file_used else {}

    @staticmethod
    def _load(yaml_file: Path) -> dict[str, Any]:
        try:
            with open(yaml_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            if hasattr(e, "problem_mark"):
                mark = e.problem_mark
                location = f"line {mark.line + 1}, column {mark.column + 1}"
            else:
                location = "unknown location"
            raise yaml.YAMLError(
                f"\n\nInvalid YAML in config file: {yaml_file}\n"
                f"Error at {location}: {getattr(e, 'problem', None) or str(e)}\n"
            ) from e

        return expand_env_vars(data)

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data = self._data.copy()
        if self.project_file_used:
            data.setdefault("project_file", self.project_file_used)
        return data


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="normal", description="Console verbosity level: quiet | normal | verbose | debug"
    )

    model_config = ConfigDict(extra="forbid")


class SystemConfig(BaseSettings):
    """Build configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed to constructor)
    2. Environment variables (RSMITH_* prefix)
    3. Project config (rustsmith.yaml)
    4. Built-in defaults
    """

    project_file: Path | None = Field(default=None, description="Project config file in use")
    project_dir: Path | None = Field(
        default=None, description="Project root; defaults to the project file's directory or CWD"
    )

    build_dir: Path = Field(default=Path("out"), description="Root of generated and intermediate artifacts")
    product_out: Path | None = Field(default=None, description="Device install root")
    host_out: Path | None = Field(default=None, description="Host install root")

    device_arch: str = Field(default="arm64", description="Primary device architecture")
    device_secondary_arch: str | None = Field(
        default="arm", description="Secondary device architecture (empty disables multilib)"
    )
    host_arch: str = Field(default="x86_64", description="Primary host architecture")
    host_secondary_arch: str | None = Field(default="x86", description="Secondary host architecture")

    multilib_conflicts: list[str] = Field(
        default_factory=list,
        description="Device architectures whose install directories must be arch-qualified",
    )

    default_edition: str = Field(default="2018", description="Rust edition used when a module sets none")

    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    model_config = SettingsConfigDict(
        env_prefix="RSMITH_",
        env_nested_delimiter="__",
        validate_assignment=False,
        extra="ignore",
        case_sensitive=False,
        env_file=None,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init args, then RSMITH_* environment, then the project YAML file."""
        init_dict = init_settings()
        project_file = init_dict.get("project_file")
        if project_file is not None:
            project_file = Path(project_file)

        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, project_file=project_file),
        )

    def model_post_init(self, __context: Any) -> None:
        """Resolve all paths to absolute."""
        self.project_dir = self._detect_project_root()
        self.build_dir = self._resolve(self.build_dir, self.project_dir)

        if self.product_out is None:
            self.product_out = self.build_dir / "target" / "product" / "generic"
        else:
            self.product_out = self._resolve(self.product_out, self.project_dir)

        if self.host_out is None:
            self.host_out = self.build_dir / "host" / "linux-x86"
        else:
            self.host_out = self._resolve(self.host_out, self.project_dir)

        if not self.device_secondary_arch:
            self.device_secondary_arch = None
        if not self.host_secondary_arch:
            self.host_secondary_arch = None

    def _detect_project_root(self) -> Path:
        if self.project_dir is not None:
            return Path(self.project_dir).resolve()
        if self.project_file is not None and Path(self.project_file).is_file():
            return Path(self.project_file).parent.resolve()
        if ENV_PROJECT_DIR in os.environ:
            return Path(os.environ[ENV_PROJECT_DIR]).resolve()
        return Path.cwd().resolve()

    @staticmethod
    def _resolve(path: Path, base: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else (base / path).resolve()

    @field_validator("device_arch", "device_secondary_arch")
    @classmethod
    def validate_arch(cls, v: str | None) -> str | None:
        if v and v not in _KNOWN_ARCHES:
            raise ValueError(f"Unknown architecture '{v}'. Must be one of: {', '.join(_KNOWN_ARCHES)}")
        return v

    @field_validator("host_arch", "host_secondary_arch")
    @classmethod
    def validate_host_arch(cls, v: str | None) -> str | None:
        if v and v not in _HOST_ARCHES:
            raise ValueError(f"Unsupported host architecture '{v}'. Must be one of: {', '.join(_HOST_ARCHES)}")
        return v

    @field_validator("multilib_conflicts")
    @classmethod
    def validate_conflicts(cls, v: list[str]) -> list[str]:
        unknown = [arch for arch in v if arch not in _KNOWN_ARCHES]
        if unknown:
            raise ValueError(f"Unknown architectures in multilib_conflicts: {', '.join(unknown)}")
        return v

    def has_multilib_conflict(self, arch: str) -> bool:
        return arch in self.multilib_conflicts
