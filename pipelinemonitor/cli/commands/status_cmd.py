"""``pipelinemonitor status BUILD``: show the status of a pipeline run.

BUILD is either a build results URL or a bare build ID.  A bare ID needs
an Azure DevOps git remote in the working directory to supply the
organization and project.
"""

from __future__ import annotations

import typer
from rich.console import Console

from pipelinemonitor import services
from pipelinemonitor.cli.errors import reported_errors
from pipelinemonitor.status.aggregator import build_report, validate_filters
from pipelinemonitor.status.renderer import StatusRenderer

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def status_cmd(
    build: str = typer.Argument(
        ...,
        metavar="BUILD_ID_OR_URL",
        help="Build ID or Azure DevOps build results URL.",
    ),
    stage: str = typer.Option(
        None,
        "--stage",
        "-s",
        help="Filter to a specific stage.",
    ),
    job: str = typer.Option(
        None,
        "--job",
        "-j",
        help="Filter to a specific job (requires --stage).",
    ),
) -> None:
    """Show the status of a pipeline run.

    Without filters, prints the overall result and every stage.  With
    --stage, prints that stage's jobs; with --stage and --job, prints the
    job's tasks.
    """
    with reported_errors(err_console, "fetch timeline"):
        validate_filters(stage, job)

        reference = services.create_build_reference_resolver().resolve(build)

        with services.create_pipelines_service() as pipelines:
            with console.status("Fetching timeline..."):
                timeline = pipelines.get_build_timeline(
                    reference.organization, reference.project, reference.build_id
                )

        report = build_report(timeline, stage, job)

    StatusRenderer(console=console).print_report(report)
