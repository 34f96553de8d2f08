import asyncio

import click
from rich.console import Console

from jjui.cli.core import CliContext
from jjui.cli.selection_options import build_selection, selection_options
from jjui.ui.app import CommandApp
from jjui.ui.program import Program


@click.command("run")
@click.argument("name")
@click.option(
    "--copy",
    "copy_diff",
    is_flag=True,
    help="Copy diff output to the clipboard (diff commands only).",
)
@selection_options
@click.pass_obj
def run_cmd(
    cli_ctx: CliContext,
    name: str,
    copy_diff: bool,
    change_id: str | None,
    commit_id: str,
    file: str | None,
    operation_id: str | None,
) -> None:
    """Run the custom command NAME against the selection."""
    command = cli_ctx.config.custom_commands.get(name)
    if command is None:
        known = ", ".join(sorted(cli_ctx.config.custom_commands)) or "none configured"
        raise click.ClickException(f"Unknown custom command '{name}' (known: {known})")

    item = build_selection(change_id, commit_id, file, operation_id)
    if not command.is_applicable_to(item):
        raise click.ClickException(f"'{name}' does not apply to the current selection")

    ctx = cli_ctx.main.with_selection(item)
    app = CommandApp(command, ctx, Console(highlight=False), copy_diff=copy_diff)
    program = Program(app, cli_ctx.terminal, stop_when_idle=True)
    asyncio.run(program.run())

    if app.failed:
        raise SystemExit(1)
