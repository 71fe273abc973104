# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Show the effective configuration."""

import click
import yaml

from ..context import ApplicationContext
from ..utils import console


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_obj
def config(ctx: ApplicationContext) -> None:
    """Print the effective configuration (CLI > RSMITH_* env > rustsmith.yaml > defaults)."""
    effective = ctx.get_effective_config()
    data = effective.model_dump(mode="json")
    console.print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="", markup=False, highlight=False)
