"""Rich terminal renderer for build status reports.

Color scheme
------------
- green     : Succeeded
- yellow    : Running, Partially Succeeded
- red       : Failed
- magenta   : Canceled
- dim       : Pending, Skipped, Unknown
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pipelinemonitor.models.pipelines import LocalPipelineInfo, PipelineYaml
from pipelinemonitor.status.aggregator import StatusReport

# ---------------------------------------------------------------------------
# Label -> Rich style mapping
# ---------------------------------------------------------------------------

_LABEL_STYLES: dict[str, str] = {
    "Succeeded": "green",
    "Partially Succeeded": "yellow",
    "Failed": "bold red",
    "Canceled": "magenta",
    "Skipped": "dim",
    "Completed": "cyan",
    "Running": "yellow",
    "Pending": "dim",
    "Unknown": "dim",
}


def styled_label(label: str) -> str:
    style = _LABEL_STYLES.get(label)
    if style is None:
        return escape(label)
    return f"[{style}]{escape(label)}[/{style}]"


def _bold_name(name: str) -> str:
    return f"[bold]{escape(name)}[/bold]"


class StatusRenderer:
    """Prints ``StatusReport`` and pipeline listings to a Rich console.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_report(self, report: StatusReport) -> None:
        self.console.print(report.text(_bold_name, styled_label))

    # ------------------------------------------------------------------
    # Local pipelines
    # ------------------------------------------------------------------

    def print_pipelines(
        self,
        pipelines: list[LocalPipelineInfo],
        parameters: dict[int, PipelineYaml | None] | None = None,
    ) -> None:
        if not pipelines:
            self.console.print("[dim]No pipelines found for this repository.[/dim]")
            return

        table = Table(title="Local Pipelines", header_style="bold cyan")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Definition File")
        if parameters is not None:
            table.add_column("Parameters")

        for p in pipelines:
            row = [str(p.id), escape(p.name), escape(p.relative_path)]
            if parameters is not None:
                row.append(self._parameters_cell(parameters.get(p.id)))
            table.add_row(*row)

        self.console.print(table)

    @staticmethod
    def _parameters_cell(pipeline_yaml: PipelineYaml | None) -> str:
        if pipeline_yaml is None:
            return "[dim]unreadable[/dim]"
        if not pipeline_yaml.parameters:
            return "[dim]-[/dim]"
        parts = []
        for param in pipeline_yaml.parameters:
            text = f"{param.name}: {param.type}"
            if param.default is not None:
                text += f" = {param.default}"
            parts.append(escape(text))
        return "\n".join(parts)
