"""Tests for placeholder templating."""

from jjui.core.placeholders import (
    CHANGE_ID_PLACEHOLDER,
    FILE_PLACEHOLDER,
    replacements_as_env,
    templated_args,
    templated_shell,
)


def test_templated_args_replaces_tokens_in_each_argument() -> None:
    """Test that every argument is substituted independently."""
    result = templated_args(
        ["log", "-r", "$change_id"],
        {CHANGE_ID_PLACEHOLDER: "abc123"},
    )

    assert result == ["log", "-r", "abc123"]


def test_templated_args_preserves_argument_count_and_order() -> None:
    """Test that a value containing spaces stays one argument."""
    args = ["file", "show", "-r", "$change_id", "$file"]

    result = templated_args(
        args,
        {CHANGE_ID_PLACEHOLDER: "abc", FILE_PLACEHOLDER: "docs/release notes.md"},
    )

    assert len(result) == len(args)
    assert result == ["file", "show", "-r", "abc", "docs/release notes.md"]


def test_templated_args_leaves_unmapped_tokens_untouched() -> None:
    """Test that a token missing from the mapping stays literal."""
    result = templated_args(["diff", "$file", "-r", "$change_id"], {CHANGE_ID_PLACEHOLDER: "x"})

    assert result == ["diff", "$file", "-r", "x"]


def test_templated_args_replaces_every_occurrence() -> None:
    """Test that repeated tokens in one argument are all substituted."""
    result = templated_args(["$change_id..$change_id"], {CHANGE_ID_PLACEHOLDER: "k"})

    assert result == ["k..k"]


def test_templated_shell_substitutes_all_mapped_tokens() -> None:
    """Test substitution over a single shell string."""
    result = templated_shell(
        "jj diff -r $change_id $file | less",
        {CHANGE_ID_PLACEHOLDER: "abc", FILE_PLACEHOLDER: "README.md"},
    )

    assert result == "jj diff -r abc README.md | less"


def test_templated_shell_is_literal_not_regex() -> None:
    """Test that regex metacharacters in values are inserted verbatim."""
    result = templated_shell("echo $file", {FILE_PLACEHOLDER: r"a.*\1"})

    assert result == r"echo a.*\1"


def test_templated_shell_with_empty_mapping_is_identity() -> None:
    """Test that an empty mapping leaves the string unchanged."""
    assert templated_shell("echo $operation_id", {}) == "echo $operation_id"


def test_replacements_as_env_strips_dollar_prefix() -> None:
    """Test that tokens become plain environment variable names."""
    env = replacements_as_env({"$change_id": "abc", "$file": "a.txt"})

    assert env == {"change_id": "abc", "file": "a.txt"}
