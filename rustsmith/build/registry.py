# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Module-type registry.

Maps module-type names (as written in declaration files) to zero-argument
factories returning a fresh, ready-to-configure module. A registry is an
explicit object: it is populated by a bootstrap call and then frozen, after
which it is read-only and safe to share between threads.

Logging Strategy:
    - DEBUG: Individual registrations
    - WARNING: Not used (duplicates are errors)
"""

import logging
from typing import Any, Callable, Iterator

from .errors import DuplicateModuleTypeError, RegistryFrozenError, UnknownModuleTypeError

logger = logging.getLogger(__name__)

ModuleFactory = Callable[[], Any]


class ModuleTypeRegistry:
    """Name -> factory table for module types."""

    def __init__(self):
        self._factories: dict[str, ModuleFactory] = {}
        self._frozen = False

    def register(self, name: str, factory: ModuleFactory) -> None:
        """Register a factory under a module-type name.

        Raises:
            DuplicateModuleTypeError: If the name is already registered
            RegistryFrozenError: If the registry has been frozen
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{name}': registry is frozen")
        if name in self._factories:
            raise DuplicateModuleTypeError(f"Module type '{name}' is already registered")

        self._factories[name] = factory
        logger.debug(f"Registered module type {name}")

    def freeze(self) -> "ModuleTypeRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> ModuleFactory:
        """Look up a factory.

        Raises:
            UnknownModuleTypeError: If no factory is registered under name
        """
        try:
            return self._factories[name]
        except KeyError:
            raise UnknownModuleTypeError(name, self.names()) from None

    def create(self, name: str) -> Any:
        """Construct a new module of the given type."""
        return self.get(name)()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._factories)
