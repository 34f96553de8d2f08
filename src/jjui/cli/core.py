"""State shared by CLI commands."""

from dataclasses import dataclass
from pathlib import Path

from jjui.core.config import LoadedConfig, load_config
from jjui.core.context import MainContext, create_context
from jjui.ui.terminal import RealTerminal, Terminal


@dataclass(frozen=True)
class CliContext:
    """Created at the CLI entry point; tests inject their own via ``obj``."""

    main: MainContext
    config: LoadedConfig
    terminal: Terminal


def create_cli_context(location: Path, config_dir: Path) -> CliContext:
    """Load configuration and build the production context.

    Raises:
        ConfigError: If config.toml is malformed
    """
    return CliContext(
        main=create_context(location),
        config=load_config(config_dir),
        terminal=RealTerminal(),
    )
