# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""rustsmith - build-module composition and variant resolution for Rust tests.

Module kinds are composed from capability layers (base compiler, binary,
test) rather than inheritance. Each declared module is expanded into its
architecture variants, and every variant computes its compiler flags,
dependency linkage, install location and, for tests, a generated
test-harness config.

Quick start:
    from rustsmith import BuildPlanner, default_registry, load_blueprint
    from rustsmith.settings import get_config

    plan = BuildPlanner(default_registry(), get_config()).plan(load_blueprint("modules.yaml"))
    for variant in plan.variants:
        print(variant.name, variant.target, variant.installed_path)
"""

__version__ = "0.1.0"

from .build import (
    BuildError,
    BuildPlan,
    BuildPlanner,
    HostOrDeviceSupported,
    ModuleContext,
    ModuleTypeRegistry,
    Multilib,
    PropertyError,
    load_blueprint,
    load_blueprints,
)
from .rust import default_registry, register_module_types

__all__ = [
    "BuildError",
    "BuildPlan",
    "BuildPlanner",
    "HostOrDeviceSupported",
    "ModuleContext",
    "ModuleTypeRegistry",
    "Multilib",
    "PropertyError",
    "default_registry",
    "load_blueprint",
    "load_blueprints",
    "register_module_types",
]
