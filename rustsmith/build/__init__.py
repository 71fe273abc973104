# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Build host collaborators.

Architectures and targets, the per-variant module context, the module-type
registry, the YAML declaration front end and the planner that drives
modules through their build pipeline.
"""

from .arch import ArchType, HostOrDeviceSupported, Multilib, OsClass, Target, decode_targets, enabled_os_classes
from .blueprint import Declaration, apply_properties, load_blueprint, load_blueprints
from .context import ModuleContext
from .errors import (
    BlueprintError,
    BuildError,
    DuplicateModuleTypeError,
    HarnessConfigError,
    ModuleError,
    PropertyError,
    RegistryFrozenError,
    UnknownModuleTypeError,
)
from .planner import BuildPlan, BuildPlanner, DeclarationFailure, VariantResult
from .registry import ModuleTypeRegistry
from .rules import BuildRule, InstallRecord, WriteFileRule

__all__ = [
    "ArchType",
    "HostOrDeviceSupported",
    "Multilib",
    "OsClass",
    "Target",
    "decode_targets",
    "enabled_os_classes",
    "Declaration",
    "apply_properties",
    "load_blueprint",
    "load_blueprints",
    "BuildPlan",
    "BuildPlanner",
    "DeclarationFailure",
    "VariantResult",
    "ModuleContext",
    "ModuleTypeRegistry",
    "BuildRule",
    "InstallRecord",
    "WriteFileRule",
    "BuildError",
    "BlueprintError",
    "DuplicateModuleTypeError",
    "HarnessConfigError",
    "ModuleError",
    "PropertyError",
    "RegistryFrozenError",
    "UnknownModuleTypeError",
]
