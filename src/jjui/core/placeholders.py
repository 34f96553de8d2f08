"""Placeholder tokens and literal template substitution.

Templates are plain strings. Substitution is literal (no regex) and tokens
missing from the replacement mapping are left in place.
"""

from collections.abc import Iterable, Mapping

CHANGE_ID_PLACEHOLDER = "$change_id"
COMMIT_ID_PLACEHOLDER = "$commit_id"
FILE_PLACEHOLDER = "$file"
OPERATION_ID_PLACEHOLDER = "$operation_id"

ALL_PLACEHOLDERS = (
    CHANGE_ID_PLACEHOLDER,
    COMMIT_ID_PLACEHOLDER,
    FILE_PLACEHOLDER,
    OPERATION_ID_PLACEHOLDER,
)


def templated_shell(shell_cmd: str, replacements: Mapping[str, str]) -> str:
    """Replace every mapped token in a single shell string."""
    for token, value in replacements.items():
        shell_cmd = shell_cmd.replace(token, value)
    return shell_cmd


def templated_args(args: Iterable[str], replacements: Mapping[str, str]) -> list[str]:
    """Replace mapped tokens in each argument independently.

    The result has the same number of elements in the same order; arguments are
    never re-split after substitution, so a value containing spaces stays a
    single argument.
    """
    return [templated_shell(arg, replacements) for arg in args]


def contains_placeholder(sources: Iterable[str], token: str) -> bool:
    """Check whether any template in sources contains the token."""
    return any(token in source for source in sources)


def replacements_as_env(replacements: Mapping[str, str]) -> dict[str, str]:
    """Convert a replacement mapping into environment variables.

    The leading ``$`` of each token is dropped: ``$change_id`` becomes
    ``change_id``.
    """
    return {token.removeprefix("$"): value for token, value in replacements.items()}
