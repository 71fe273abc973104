# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Plan declared modules."""

from pathlib import Path

import click
from rich.table import Table

from ..context import ApplicationContext
from ..exceptions import CommandError, ValidationError
from ..utils import console, format_status, progress_spinner, success


def _plan_table(plan) -> Table:
    table = Table(title="Module Variants")
    table.add_column("Module", style="cyan")
    table.add_column("Type")
    table.add_column("Variant")
    table.add_column("Installed")
    table.add_column("Test Config")
    table.add_column("Status")

    for variant in plan.variants:
        table.add_row(
            variant.name,
            variant.module_type,
            variant.target.variant_name,
            str(variant.installed_path or "-"),
            str(variant.test_config or "-"),
            format_status("ok" if variant.succeeded else "failed", variant.succeeded),
        )
    return table


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("blueprints", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the plan as YAML")
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=1, show_default=True,
              help="Modules planned concurrently")
@click.pass_obj
def plan(ctx: ApplicationContext, blueprints: tuple[Path, ...], output: Path | None, jobs: int) -> None:
    """Plan every module declared in BLUEPRINTS.

    Each module is expanded into its variants and driven through flag
    computation, compile and install. Exits non-zero when any module has
    errors.
    """
    from rustsmith._internal.io.yaml import dump_yaml
    from rustsmith.build import BlueprintError, BuildPlanner, load_blueprints

    config = ctx.get_effective_config()

    try:
        declarations = load_blueprints(blueprints)
    except BlueprintError as e:
        raise ValidationError(str(e)) from e

    with progress_spinner("Planning modules...", no_progress=ctx.no_progress):
        build_plan = BuildPlanner(ctx.get_registry(), config, jobs=jobs).plan(declarations)

    console.print(_plan_table(build_plan))
    for name in build_plan.skipped:
        console.print(f"[dim]Skipped disabled module {name}[/dim]")

    if output:
        dump_yaml(build_plan.to_dict(), output)
        success(f"Plan written to {output}")

    if not build_plan.succeeded:
        raise CommandError(
            f"{len(build_plan.errors)} error(s) while planning",
            details=[str(e) for e in build_plan.errors],
        )

    success(f"Planned {len(build_plan.variants)} variant(s)")
