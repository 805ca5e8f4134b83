"""unrealls projects command - list projects under a directory."""

from pathlib import Path

import click

from unrealls.core.progress import pluralize, status
from unrealls.engine.locator import find_projects


@click.command()
@click.argument(
    "search_path",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--max-depth", default=3, show_default=True, help="Directory levels to search")
def projects_command(search_path: Path, max_depth: int) -> None:
    """List Unreal projects found under SEARCH_PATH (default: current directory)."""
    projects = find_projects(search_path.resolve(), max_depth=max_depth)
    if not projects:
        status("No projects found", style="warning")
        return
    for project in projects:
        status(str(project))
    status(f"Found {pluralize(len(projects), 'project')}", style="success")
