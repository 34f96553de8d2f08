import logging
import os
from pathlib import Path

import click

from jjui.cli.commands.list_cmd import list_cmd
from jjui.cli.commands.run_cmd import run_cmd
from jjui.cli.core import create_cli_context
from jjui.core.config import default_config_dir
from jjui.core.errors import ConfigError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if JJUI_DEBUG environment variable is set
if os.getenv("JJUI_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="jjui")
@click.option(
    "-R",
    "--repository",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository to run commands in (defaults to the current directory).",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing config.toml.",
)
@click.pass_context
def cli(ctx: click.Context, repository: Path | None, config_dir: Path | None) -> None:
    """Run custom jj commands against a selected revision, file or operation."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is not None:
        return
    location = repository if repository is not None else Path.cwd()
    try:
        ctx.obj = create_cli_context(location, config_dir or default_config_dir())
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


cli.add_command(list_cmd)
cli.add_command(run_cmd)


def main() -> None:
    """CLI entry point used by the `jjui` console script."""
    cli()
