"""Selected item variants owned by the UI."""

from dataclasses import dataclass

from jjui.core.placeholders import (
    CHANGE_ID_PLACEHOLDER,
    COMMIT_ID_PLACEHOLDER,
    FILE_PLACEHOLDER,
    OPERATION_ID_PLACEHOLDER,
)


@dataclass(frozen=True)
class SelectedRevision:
    """A revision row in the log view."""

    change_id: str
    commit_id: str


@dataclass(frozen=True)
class SelectedFile:
    """A file inside a revision's details view."""

    change_id: str
    commit_id: str
    file: str


@dataclass(frozen=True)
class SelectedOperation:
    """An entry in the operation log."""

    operation_id: str


SelectedItem = SelectedRevision | SelectedFile | SelectedOperation | None


def create_replacements(item: SelectedItem) -> dict[str, str]:
    """Build the placeholder mapping for the current selection.

    Only the tokens the selection can supply are present; anything else stays
    literal in the templates.
    """
    match item:
        case SelectedRevision(change_id=change_id, commit_id=commit_id):
            return {
                CHANGE_ID_PLACEHOLDER: change_id,
                COMMIT_ID_PLACEHOLDER: commit_id,
            }
        case SelectedFile(change_id=change_id, commit_id=commit_id, file=file):
            return {
                CHANGE_ID_PLACEHOLDER: change_id,
                COMMIT_ID_PLACEHOLDER: commit_id,
                FILE_PLACEHOLDER: file,
            }
        case SelectedOperation(operation_id=operation_id):
            return {OPERATION_ID_PLACEHOLDER: operation_id}
        case None:
            return {}
