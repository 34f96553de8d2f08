"""Configuration loading for custom commands.

Custom commands live in ``config.toml`` under the ``custom_commands`` table:

    [custom_commands."show diff"]
    key = ["U"]
    args = ["diff", "-r", "$change_id"]
    show = "diff"

    [custom_commands."lazygit"]
    key = ["G"]
    shell = "lazygit"
    show = "interactive"
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from jjui.core.custom_command import CustomRunCommand
from jjui.core.errors import ConfigError, InvalidCommandError
from jjui.core.selection import SelectedItem
from jjui.core.show_mode import ShowMode

CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of ``config.toml``."""

    custom_commands: dict[str, CustomRunCommand] = field(default_factory=dict)

    def applicable_commands(self, item: SelectedItem) -> list[CustomRunCommand]:
        """Commands that may run against item, sorted by name."""
        return [
            command
            for name, command in sorted(self.custom_commands.items())
            if command.is_applicable_to(item)
        ]


def default_config_dir() -> Path:
    """Directory holding config.toml.

    $JJUI_CONFIG_DIR wins, then $XDG_CONFIG_HOME/jjui, then ~/.config/jjui.
    """
    override = os.environ.get("JJUI_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / "jjui"
    return Path.home() / ".config" / "jjui"


def load_config(config_dir: Path) -> LoadedConfig:
    """Load config.toml from config_dir if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML or has the wrong shape
        InvalidCommandError: If a custom command definition is invalid
    """
    cfg_path = config_dir / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return LoadedConfig()

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse {cfg_path}: {e}") from e

    raw_commands = data.get("custom_commands", {})
    if not isinstance(raw_commands, Mapping):
        raise ConfigError(f"'custom_commands' in {cfg_path} must be a table")

    return LoadedConfig(custom_commands=parse_custom_commands(raw_commands))


def parse_custom_commands(raw_commands: Mapping[str, object]) -> dict[str, CustomRunCommand]:
    return {str(name): parse_custom_command(str(name), raw) for name, raw in raw_commands.items()}


def parse_custom_command(name: str, raw: object) -> CustomRunCommand:
    """Validate one ``[custom_commands.<name>]`` table.

    Raises:
        InvalidCommandError: If neither or both of args and shell are set, or a
            field has the wrong type or value
    """
    if not isinstance(raw, Mapping):
        raise InvalidCommandError(name, "definition must be a table")

    args = raw.get("args", [])
    shell = raw.get("shell", "")
    key = raw.get("key", [])

    if not isinstance(args, list) or not all(isinstance(arg, str) for arg in args):
        raise InvalidCommandError(name, "'args' must be a list of strings")
    if not isinstance(shell, str):
        raise InvalidCommandError(name, "'shell' must be a string")
    if isinstance(key, str):
        key = [key]
    if not isinstance(key, list) or not all(isinstance(k, str) for k in key):
        raise InvalidCommandError(name, "'key' must be a string or a list of strings")

    if not args and not shell:
        raise InvalidCommandError(name, "one of 'args' or 'shell' is required")
    if args and shell:
        raise InvalidCommandError(name, "'args' and 'shell' are mutually exclusive")

    show = raw.get("show")
    if show is not None and not isinstance(show, str):
        raise InvalidCommandError(name, "'show' must be a string")
    try:
        show_mode = ShowMode.parse(show)
    except ValueError as e:
        raise InvalidCommandError(name, str(e)) from e

    return CustomRunCommand(
        name=name,
        key=tuple(key),
        args=tuple(args),
        shell=shell,
        show=show_mode,
    )
