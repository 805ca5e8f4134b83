"""CLI utilities."""

from pathlib import Path

import click

from unrealls.core.progress import pluralize, status
from unrealls.engine.locator import find_projects, project_manifests


def resolve_project(
    project_path: Path | None,
    search_path: Path | None,
    *,
    interactive: bool = False,
) -> Path:
    """Pick the project directory to serve.

    An explicit project path must hold a .uproject file. Otherwise the
    current directory is used if it is a project, else projects are searched
    under *search_path* (default: current directory).

    Args:
        project_path: Explicit project directory
        search_path: Directory to search for projects
        interactive: Prompt for a choice when several projects are found

    Returns:
        Resolved project directory

    Raises:
        click.ClickException: If no project can be found
    """
    if project_path is not None:
        project = project_path.resolve()
        if not project_manifests(project):
            raise click.ClickException(f"No .uproject file found in '{project}'")
        return project

    cwd = Path.cwd().resolve()
    if search_path is None and project_manifests(cwd):
        return cwd

    root = (search_path or cwd).resolve()
    projects = find_projects(root)
    if not projects:
        raise click.ClickException(
            f"No Unreal project found under '{root}'. Pass --project-path or --search-path."
        )
    if len(projects) == 1:
        return projects[0]

    status(f"Found {pluralize(len(projects), 'project')}:")
    for number, project in enumerate(projects, start=1):
        status(f"{number}. {project}", indent=2)

    if not interactive:
        status(f"Using {projects[0]}", style="warning")
        return projects[0]

    choice = click.prompt(
        "Select a project",
        type=click.IntRange(1, len(projects)),
        default=1,
        err=True,
    )
    return projects[choice - 1]
