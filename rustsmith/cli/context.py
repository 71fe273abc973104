# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

# Type hints only - settings imported lazily inside methods
if TYPE_CHECKING:
    from rustsmith.build.registry import ModuleTypeRegistry
    from rustsmith.settings import SystemConfig

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """CLI execution context: loaded SystemConfig plus the module-type registry."""

    no_progress: bool = False
    config_file: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)

    config: "SystemConfig | None" = None
    registry: "ModuleTypeRegistry | None" = None

    @classmethod
    def from_cli_args(
        cls,
        config_file: Path | None,
        build_dir_override: Path | None,
        log_level: str | None,
        no_progress: bool,
    ) -> "ApplicationContext":
        """Create context from CLI arguments: load configuration and set up logging.

        The configured logging level applies unless log_level is given.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        from rustsmith._internal.logging import setup_logging

        context = cls(config_file=config_file, no_progress=no_progress)

        if build_dir_override:
            context.overrides["build_dir"] = str(build_dir_override)
        if log_level:
            context.overrides["logging"] = {"level": log_level}

        context.load_configuration()

        level = context.config.logging.level
        setup_logging(level=level)
        logger.debug(f"CLI initialized with logs={level}, no_progress={no_progress}")
        return context

    def load_configuration(self) -> None:
        from pydantic import ValidationError

        from rustsmith.settings import load_config

        from .exceptions import ConfigurationError

        try:
            self.config = load_config(project_file=self.config_file, **self.overrides)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration",
                details=[f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()],
            ) from e

    def get_effective_config(self) -> "SystemConfig":
        if not self.config:
            self.load_configuration()
        return self.config

    def get_registry(self) -> "ModuleTypeRegistry":
        """The module-type registry, bootstrapped on first use."""
        if self.registry is None:
            from rustsmith.rust import default_registry

            self.registry = default_registry()
        return self.registry
