# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import sys
from pathlib import Path

import click

from .constants import CLI_NAME, PACKAGE_NAME, ExitCode
from .context import ApplicationContext
from .utils import console

logger = logging.getLogger(__name__)


def _version_callback(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    import importlib.metadata
    version = importlib.metadata.version(PACKAGE_NAME)
    console.print(f"[bold]{CLI_NAME}[/bold], version {version}")
    ctx.exit()


class LazyGroup(click.Group):
    def __init__(self, *args, lazy_commands=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_commands = lazy_commands or {}

    def list_commands(self, ctx):
        lazy_names = set(self.lazy_commands.keys())
        manual_names = set(super().list_commands(ctx))
        return sorted(lazy_names | manual_names)

    def get_command(self, ctx, name):
        if name in self.lazy_commands:
            from importlib import import_module
            module_path, attr_name = self.lazy_commands[name]
            module = import_module(module_path)
            return getattr(module, attr_name)

        return super().get_command(ctx, name)


def create_cli() -> click.Group:
    from rustsmith.cli.commands import COMMAND_MAP

    @click.pass_context
    def callback(
        ctx: click.Context,
        build_dir: Path | None,
        config: Path | None,
        log_level: str | None,
        no_progress: bool
    ) -> None:
        if ctx.obj is None:
            ctx.obj = ApplicationContext.from_cli_args(
                config_file=config,
                build_dir_override=build_dir,
                log_level=log_level,
                no_progress=no_progress,
            )

    cli = LazyGroup(
        name=CLI_NAME,
        callback=callback,
        context_settings={"help_option_names": ["-h", "--help"]},
        lazy_commands=COMMAND_MAP,
    )

    cli.params.append(click.Option(
        ["-b", "--build-dir"],
        type=click.Path(path_type=Path),
        help="Override build directory"
    ))
    cli.params.append(click.Option(
        ["-c", "--config"],
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Use this project configuration file"
    ))
    cli.params.append(click.Option(
        ["-l", "--log-level"],
        type=click.Choice(["quiet", "normal", "verbose", "debug"]),
        default=None,
        metavar="LEVEL",
        help="Set log verbosity (quiet|normal|verbose|debug)"
    ))
    cli.params.append(click.Option(
        ["--no-progress"],
        is_flag=True,
        help="Disable progress spinners"
    ))
    cli.params.append(click.Option(
        ["--version"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_version_callback,
        help="Show the version and exit."
    ))

    cli.help = """rustsmith - compose and plan Rust binary and test modules.

\b
COMMANDS:
  rustsmith plan BLUEPRINT...   Plan declared modules
  rustsmith module-types        List module types
  rustsmith config              Show effective configuration"""

    return cli


def main() -> None:
    """Run the CLI with consistent error handling."""
    from .exceptions import CLIError

    try:
        cli = create_cli()
        rv = cli(standalone_mode=False)
        if isinstance(rv, int):
            sys.exit(rv)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(ExitCode.INTERRUPTED)
    except CLIError as e:
        console.print(e.format_for_console())
        sys.exit(e.exit_code)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.exceptions.Abort:
        console.print("[yellow]Aborted[/yellow]")
        sys.exit(ExitCode.ERROR)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logger.exception(f"Unexpected error in {CLI_NAME} CLI")
        sys.exit(ExitCode.SOFTWARE)


if __name__ == "__main__":
    main()
