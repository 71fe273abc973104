# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Per-module, per-variant build context.

A ModuleContext is what capability layers see of the build host: the
module's name and source directory, the target being built, the system
configuration, an error side channel and sinks for build rules and
installs. Errors are collected rather than raised so a module's other
work still completes and all diagnostics surface together.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .arch import Target
from .errors import BuildError, ModuleError, PropertyError
from .rules import BuildRule, InstallRecord, WriteFileRule

logger = logging.getLogger(__name__)


class ModuleContext:
    """Build host view for one module variant."""

    def __init__(self, name: str, module_dir: Path, target: Target, config, toolchain=None):
        self._name = name
        self.module_dir = Path(module_dir)
        self.target = target
        self.config = config
        self.toolchain = toolchain

        self.errors: list[BuildError] = []
        self.rules: list[Union[BuildRule, WriteFileRule]] = []
        self.installs: list[InstallRecord] = []

    def module_name(self) -> str:
        return self._name

    @property
    def host(self) -> bool:
        return self.target.host

    @property
    def device(self) -> bool:
        return self.target.device

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    # ------------------------------------------------------------------
    # Error side channel
    # ------------------------------------------------------------------

    def property_error(self, field: str, message: str) -> None:
        """Record a configuration error against one declared property."""
        error = PropertyError(self._name, field, message)
        logger.debug(f"Property error in {self._name} ({self.target}): {field}: {message}")
        self.errors.append(error)

    def module_error(self, message: str, cause: Optional[BaseException] = None) -> None:
        """Record an error against the module as a whole."""
        error = ModuleError(self._name, message, cause=cause)
        if cause is not None:
            error.__cause__ = cause
        logger.debug(f"Module error in {self._name} ({self.target}): {message}")
        self.errors.append(error)

    def report(self, error: BuildError) -> None:
        """Record an error raised by a build step, unchanged."""
        self.errors.append(error)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def path_for_module_src(self, rel: str) -> Path:
        """Resolve a declared path relative to the module's directory."""
        return (self.module_dir / rel).resolve()

    def optional_path_for_module_src(self, rel: str) -> Optional[Path]:
        """Like path_for_module_src(), but None when the file doesn't exist."""
        path = self.path_for_module_src(rel)
        return path if path.exists() else None

    def path_for_module_out(self, *parts: str) -> Path:
        """Path in this variant's intermediate directory."""
        out = self.config.build_dir / ".intermediates"
        try:
            rel = self.module_dir.resolve().relative_to(Path(self.config.project_dir).resolve())
        except ValueError:
            rel = Path(self.module_dir.name)
        return out.joinpath(rel, self._name, self.target.variant_name, *parts)

    def install_root(self) -> Path:
        return self.config.host_out if self.host else self.config.product_out

    # ------------------------------------------------------------------
    # Sinks
    # ------------------------------------------------------------------

    def build(self, rule: BuildRule) -> None:
        self.rules.append(rule)

    def write_file(self, path: Path, content: str) -> None:
        self.rules.append(WriteFileRule(output=Path(path), content=content))

    def install_file(self, install_dir: Path, name: str, src: Path) -> Path:
        """Record an install of src as install_dir/name and return the destination."""
        dest = Path(install_dir) / name
        self.installs.append(InstallRecord(src=Path(src), dest=dest))
        logger.debug(f"Install {src} -> {dest}")
        return dest

    def __repr__(self) -> str:
        return f"ModuleContext({self._name!r}, {self.target})"

    def summary(self) -> dict[str, Any]:
        return {
            'rules': [r.to_dict() for r in self.rules],
            'installs': [i.to_dict() for i in self.installs],
            'errors': [str(e) for e in self.errors],
        }
