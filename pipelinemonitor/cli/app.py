"""Main Typer application: imports and registers all CLI commands.

Entry point: ``pipelinemonitor`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from pipelinemonitor import __version__
from pipelinemonitor.cli.commands.pipelines_cmd import pipelines_cmd
from pipelinemonitor.cli.commands.status_cmd import status_cmd
from pipelinemonitor.config import config
from pipelinemonitor.logging_config import configure_logging

app = typer.Typer(
    name="pipelinemonitor",
    help="Inspect Azure DevOps pipeline runs from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="status", help="Show the status of a pipeline run.")(status_cmd)
app.command(name="pipelines", help="List pipelines defined in the local checkout.")(pipelines_cmd)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pipelinemonitor {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging on stderr."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Pipeline Monitor."""
    configure_logging("DEBUG" if verbose else config.log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
