# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""rustsmith CLI commands.

Single source of truth for command registration, consumed by cli.py's
LazyGroup.
"""

# 'command_name': (relative_module, attribute_name)
_COMMAND_REGISTRY = {
    "plan": (".plan", "plan"),
    "module-types": (".module_types", "module_types"),
    "config": (".config", "config"),
}

COMMAND_MAP = {
    name: (f"rustsmith.cli.commands{module}", attr)
    for name, (module, attr) in _COMMAND_REGISTRY.items()
}

__all__ = ["COMMAND_MAP"]
