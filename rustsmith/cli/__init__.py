# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""rustsmith command-line interface.

Commands:
  plan          Plan the modules declared in one or more files
  module-types  List registered module types
  config        Show the effective configuration

Architecture:
- create_cli() builds a LazyGroup (cli.py); commands load on first use
- Configuration managed through ApplicationContext (context.py)
- Commands receive the context via @click.pass_obj

Entry point defined in setup.py.
"""

from .cli import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
