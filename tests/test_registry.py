"""Tests for the module-type registry."""

import pytest

from rustsmith.build.errors import DuplicateModuleTypeError, RegistryFrozenError, UnknownModuleTypeError
from rustsmith.build.registry import ModuleTypeRegistry
from rustsmith.rust import Module, register_module_types


class TestModuleTypeRegistry:

    def test_register_and_create(self):
        registry = ModuleTypeRegistry()
        registry.register("thing", dict)

        assert "thing" in registry
        assert registry.create("thing") == {}
        assert len(registry) == 1

    def test_duplicate_rejected(self):
        registry = ModuleTypeRegistry()
        registry.register("thing", dict)

        with pytest.raises(DuplicateModuleTypeError):
            registry.register("thing", list)

    def test_frozen_registry_rejects_registration(self):
        registry = ModuleTypeRegistry().freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register("thing", dict)

    def test_unknown_type_lists_available(self):
        registry = ModuleTypeRegistry()
        registry.register("b", dict)
        registry.register("a", dict)

        with pytest.raises(UnknownModuleTypeError) as exc_info:
            registry.get("c")

        assert exc_info.value.available == ["a", "b"]
        assert "Available: a, b" in str(exc_info.value)

    def test_names_sorted(self):
        registry = ModuleTypeRegistry()
        for name in ("zeta", "alpha", "mid"):
            registry.register(name, dict)
        assert list(registry) == ["alpha", "mid", "zeta"]


class TestRustModuleTypes:

    def test_default_registry(self, registry):
        assert registry.frozen
        assert registry.names() == ["rust_binary", "rust_binary_host", "rust_test", "rust_test_host"]

    def test_bootstrap_twice_fails(self):
        registry = register_module_types(ModuleTypeRegistry())
        with pytest.raises(DuplicateModuleTypeError):
            register_module_types(registry)

    @pytest.mark.parametrize("name", ["rust_binary", "rust_binary_host", "rust_test", "rust_test_host"])
    def test_each_factory_builds_a_fresh_module(self, registry, name):
        first = registry.create(name)
        second = registry.create(name)

        assert isinstance(first, Module)
        assert first is not second
        assert first.compiler is not None
        assert all(a is not b for a, b in zip(first.properties, second.properties))
