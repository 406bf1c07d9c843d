"""``pipelinemonitor pipelines``: list pipelines defined in the local checkout."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pipelinemonitor import services
from pipelinemonitor.azure.yaml_service import PipelineYamlService
from pipelinemonitor.cli.errors import reported_errors
from pipelinemonitor.config import config
from pipelinemonitor.exceptions import UserFacingError
from pipelinemonitor.status.renderer import StatusRenderer

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def pipelines_cmd(
    organization: str = typer.Option(
        None,
        "--organization",
        "--org",
        help="Organization name or URL. Detected from git when omitted.",
    ),
    project: str = typer.Option(
        None,
        "--project",
        help="Project name. Detected from git when omitted.",
    ),
    repository: str = typer.Option(
        None,
        "--repository",
        "--repo",
        help="Only list pipelines bound to this repository.",
    ),
    root: Path = typer.Option(
        None,
        "--root",
        help="Repository root that definition file paths are relative to.",
    ),
    show_parameters: bool = typer.Option(
        False,
        "--parameters",
        "-p",
        help="Also show parameters declared in each definition file.",
    ),
) -> None:
    """List pipelines whose YAML definition file exists locally."""
    with reported_errors(err_console, "fetch pipelines"):
        repo_info = services.create_repo_info_resolver().resolve(
            organization, project, repository
        )
        if repo_info.organization is None or repo_info.project is None:
            raise UserFacingError(
                "Could not determine Azure DevOps organization/project. "
                "Pass --organization and --project, or run inside a clone "
                "with an Azure DevOps remote."
            )

        with services.create_pipelines_service() as pipelines_service:
            with console.status("Fetching pipelines..."):
                pipelines = list(
                    pipelines_service.get_local_pipelines(
                        repo_info.organization,
                        repo_info.project,
                        root or config.working_dir,
                        repo_info.repository,
                    )
                )

    parameters = None
    if show_parameters:
        yaml_service = PipelineYamlService()
        parameters = {p.id: yaml_service.parse_file(p.definition_file) for p in pipelines}

    StatusRenderer(console=console).print_pipelines(pipelines, parameters)
