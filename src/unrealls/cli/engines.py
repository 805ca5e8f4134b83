"""unrealls engines command - list discovered engine installs."""

from pathlib import Path

import click

from unrealls.config.loader import load_config
from unrealls.core.errors import ConfigError
from unrealls.core.progress import get_console, make_table, pluralize, status
from unrealls.engine.locator import EngineLocator
from unrealls.engine.models import EngineVersion


def install_status(version: EngineVersion) -> str:
    """``ready`` when the install has built binaries."""
    if not version.install_path:
        return "unknown"
    binaries = Path(version.install_path) / "Engine" / "Binaries"
    return "ready" if binaries.is_dir() else "incomplete"


@click.command()
def engines_command() -> None:
    """List installed Unreal Engine versions, newest first."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    versions = EngineLocator(config.engine).discover_all()
    if not versions:
        status("No engine installs found", style="warning")
        return

    table = make_table("Version", "Path", "Status")
    for version in versions:
        table.add_row(version.full_version, version.install_path, install_status(version))
    get_console().print(table)
    status(f"Found {pluralize(len(versions), 'engine')}", style="success")
