"""Shared click options describing the selected item."""

from collections.abc import Callable
from typing import TypeVar

import click

from jjui.core.selection import SelectedFile, SelectedItem, SelectedOperation, SelectedRevision

F = TypeVar("F", bound=Callable[..., object])


def selection_options(func: F) -> F:
    """Add --revision/--commit/--file/--operation options to a command."""
    func = click.option(
        "--operation",
        "operation_id",
        help="Select an operation log entry by id.",
    )(func)
    func = click.option(
        "--file",
        "file",
        help="Select a file inside the selected revision.",
    )(func)
    func = click.option(
        "--commit",
        "commit_id",
        default="",
        help="Commit id of the selected revision.",
    )(func)
    func = click.option(
        "-r",
        "--revision",
        "change_id",
        help="Select a revision by change id.",
    )(func)
    return func


def build_selection(
    change_id: str | None, commit_id: str, file: str | None, operation_id: str | None
) -> SelectedItem:
    """Turn selection options into a SelectedItem.

    Raises:
        click.UsageError: If the options describe conflicting selections
    """
    if operation_id is not None:
        if change_id is not None or file is not None:
            raise click.UsageError("--operation cannot be combined with --revision or --file")
        return SelectedOperation(operation_id=operation_id)

    if file is not None:
        if change_id is None:
            raise click.UsageError("--file requires --revision")
        return SelectedFile(change_id=change_id, commit_id=commit_id, file=file)

    if change_id is not None:
        return SelectedRevision(change_id=change_id, commit_id=commit_id)

    if commit_id:
        raise click.UsageError("--commit requires --revision")
    return None
