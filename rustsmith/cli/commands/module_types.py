# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""List registered module types."""

import click
from rich.table import Table

from ..context import ApplicationContext
from ..utils import console


@click.command(name="module-types", context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_obj
def module_types(ctx: ApplicationContext) -> None:
    """Shows every registered module type with its host/device support and multilib policy."""
    registry = ctx.get_registry()

    table = Table(title="Module Types")
    table.add_column("Type", style="cyan")
    table.add_column("Supports")
    table.add_column("Multilib")
    table.add_column("Properties")

    for name in registry.names():
        module = registry.create(name)
        fields = sorted({f for props in module.properties for f in type(props).model_fields})
        table.add_row(name, module.hod.value, module.multilib.value, ", ".join(fields))

    console.print(table)
