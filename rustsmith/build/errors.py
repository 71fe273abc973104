# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Build error hierarchy.

PropertyError and ModuleError are diagnostics: they are recorded on a
ModuleContext and surfaced after the module's work completes. The other
classes are raised.
"""

from typing import Optional


class BuildError(Exception):
    """Base exception for all build errors."""


class PropertyError(BuildError):
    """Configuration error attributed to one declared property of a module."""

    def __init__(self, module: str, field: str, message: str):
        self.module = module
        self.field = field
        self.message = message
        super().__init__(f"{module}: {field}: {message}")


class ModuleError(BuildError):
    """Error attributed to a module as a whole."""

    def __init__(self, module: str, message: str, cause: Optional[BaseException] = None):
        self.module = module
        self.message = message
        self.cause = cause
        super().__init__(f"{module}: {message}")


class HarnessConfigError(BuildError):
    """Raised by the test-harness config generator."""


class BlueprintError(BuildError):
    """Malformed module declaration file."""


class UnknownModuleTypeError(BuildError):
    """Module type name not present in the registry."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown module type '{name}'. Available: {', '.join(available) or '(none)'}"
        )


class DuplicateModuleTypeError(BuildError):
    """Module type name registered twice."""


class RegistryFrozenError(BuildError):
    """Registration attempted after the registry was frozen."""
