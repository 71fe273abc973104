# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Rust module kinds built from composed capability layers.

Registration (at build front end initialization):
    from rustsmith.build import ModuleTypeRegistry
    from rustsmith.rust import register_module_types

    registry = ModuleTypeRegistry()
    register_module_types(registry)
    registry.freeze()

    module = registry.create("rust_test")
"""

from rustsmith.build.registry import ModuleTypeRegistry

from .binary import (
    BinaryDecorator,
    BinaryProperties,
    new_rust_binary,
    rust_binary_factory,
    rust_binary_host_factory,
)
from .compiler import AutoDep, BaseCompiler, BaseCompilerProperties, Compiler, Deps, Flags, InstallLocation
from .module import CommonProperties, Module
from .test import (
    TestDecorator,
    TestProperties,
    multilib_for_test,
    new_rust_test,
    rust_test_factory,
    rust_test_host_factory,
)
from .toolchain import Toolchain, find_toolchain

MODULE_TYPES = {
    "rust_binary": rust_binary_factory,
    "rust_binary_host": rust_binary_host_factory,
    "rust_test": rust_test_factory,
    "rust_test_host": rust_test_host_factory,
}


def register_module_types(registry: ModuleTypeRegistry) -> ModuleTypeRegistry:
    """Register every Rust module type with a build front end registry."""
    for name, factory in MODULE_TYPES.items():
        registry.register(name, factory)
    return registry


def default_registry() -> ModuleTypeRegistry:
    """A frozen registry holding the Rust module types."""
    return register_module_types(ModuleTypeRegistry()).freeze()


__all__ = [
    "AutoDep",
    "BaseCompiler",
    "BaseCompilerProperties",
    "BinaryDecorator",
    "BinaryProperties",
    "CommonProperties",
    "Compiler",
    "Deps",
    "Flags",
    "InstallLocation",
    "Module",
    "TestDecorator",
    "TestProperties",
    "Toolchain",
    "MODULE_TYPES",
    "default_registry",
    "find_toolchain",
    "multilib_for_test",
    "new_rust_binary",
    "new_rust_test",
    "register_module_types",
    "rust_binary_factory",
    "rust_binary_host_factory",
    "rust_test_factory",
    "rust_test_host_factory",
]
