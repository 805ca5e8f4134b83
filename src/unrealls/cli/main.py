"""unrealls CLI."""

import click

from unrealls import __version__
from unrealls.cli.engines import engines_command
from unrealls.cli.projects import projects_command
from unrealls.cli.serve import serve_command
from unrealls.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="unrealls")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """unrealls - Unreal Engine C++ completion server."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(serve_command, name="serve")
cli.add_command(engines_command, name="engines")
cli.add_command(projects_command, name="projects")


if __name__ == "__main__":
    cli()
