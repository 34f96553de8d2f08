import click

from jjui.cli.core import CliContext
from jjui.cli.selection_options import build_selection, selection_options


@click.command("list")
@selection_options
@click.pass_obj
def list_cmd(
    cli_ctx: CliContext,
    change_id: str | None,
    commit_id: str,
    file: str | None,
    operation_id: str | None,
) -> None:
    """List custom commands applicable to the selection."""
    item = build_selection(change_id, commit_id, file, operation_id)
    ctx = cli_ctx.main.with_selection(item)

    commands = cli_ctx.config.applicable_commands(item)
    if not commands:
        click.echo("No applicable custom commands.", err=True)
        return

    for command in commands:
        keys = ",".join(command.key) if command.key else "-"
        show = click.style(command.show.value, fg="bright_black")
        click.echo(f"{click.style(command.name, bold=True)} [{keys}] {show}")
        click.echo(f"  {command.description(ctx)}")
