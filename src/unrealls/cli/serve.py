"""unrealls serve command - run the protocol session on stdio."""

import sys
from pathlib import Path

import click
import structlog

from unrealls.cli.utils import resolve_project
from unrealls.config.loader import load_config
from unrealls.core.errors import ConfigError
from unrealls.core.logging import configure_logging
from unrealls.server.app import create_session

logger = structlog.get_logger()


@click.command()
@click.option(
    "--project-path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project directory holding a .uproject file",
)
@click.option("--engine-path", help="Engine install root, overriding the resolved install")
@click.option(
    "--search-path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to search for projects",
)
@click.option("--interactive", is_flag=True, help="Choose among several found projects")
@click.pass_context
def serve_command(
    ctx: click.Context,
    project_path: Path | None,
    engine_path: str | None,
    search_path: Path | None,
    interactive: bool,
) -> None:
    """Serve completions over stdin/stdout for one project."""
    project = resolve_project(project_path, search_path, interactive=interactive)

    try:
        config = load_config(project_root=project)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if ctx.obj and ctx.obj.get("verbose"):
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    session = create_session(project, config, engine_path=engine_path)
    logger.info("serving", project=str(project))
    session.serve(sys.stdin.buffer, sys.stdout.buffer)
