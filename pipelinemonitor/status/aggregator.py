"""Timeline status aggregation: pure functions over a fetched timeline.

Nothing here performs I/O or mutates the timeline.  The functions compute
display labels at every level of the stage → job → task tree, derive one
overall build label from the stage outcomes, and collapse the tree into
``StatusReport`` models for the overview, a single stage, or a single job.

Overall label policy
--------------------
- any stage in progress           → ``Running``
- every stage completed           → label of the worst stage result
- otherwise (something pending)   → ``Pending``
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from functools import reduce

from pydantic import BaseModel, ConfigDict

from pipelinemonitor.exceptions import TimelineLookupError, UsageError
from pipelinemonitor.models.timeline import (
    BuildTimelineInfo,
    JobInfo,
    PipelineRunResult,
    StageInfo,
    TaskInfo,
    TimelineRecordStatus,
)

Formatter = Callable[[str], str]

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

RESULT_LABELS: dict[PipelineRunResult, str] = {
    PipelineRunResult.SUCCEEDED: "Succeeded",
    PipelineRunResult.PARTIALLY_SUCCEEDED: "Partially Succeeded",
    PipelineRunResult.FAILED: "Failed",
    PipelineRunResult.CANCELED: "Canceled",
    PipelineRunResult.SKIPPED: "Skipped",
}

COMPLETED_LABEL = "Completed"
RUNNING_LABEL = "Running"
PENDING_LABEL = "Pending"
UNKNOWN_LABEL = "Unknown"

# Ascending severity.  Anything absent ranks below every named outcome.
SEVERITY: dict[PipelineRunResult, int] = {
    PipelineRunResult.SKIPPED: 0,
    PipelineRunResult.SUCCEEDED: 1,
    PipelineRunResult.PARTIALLY_SUCCEEDED: 2,
    PipelineRunResult.CANCELED: 3,
    PipelineRunResult.FAILED: 4,
}
UNRANKED_SEVERITY = -1


def result_label(result: PipelineRunResult) -> str:
    """Label for the result of a completed record."""
    return RESULT_LABELS.get(result, COMPLETED_LABEL)


def state_label(state: TimelineRecordStatus, result: PipelineRunResult) -> str:
    """Label for any record.  ``result`` is only consulted when completed."""
    if state == TimelineRecordStatus.COMPLETED:
        return result_label(result)
    if state == TimelineRecordStatus.IN_PROGRESS:
        return RUNNING_LABEL
    if state == TimelineRecordStatus.PENDING:
        return PENDING_LABEL
    return UNKNOWN_LABEL


def severity(result: PipelineRunResult) -> int:
    return SEVERITY.get(result, UNRANKED_SEVERITY)


def worst_of(a: PipelineRunResult, b: PipelineRunResult) -> PipelineRunResult:
    """The more severe of two results; the first wins a tie."""
    return a if severity(a) >= severity(b) else b


def worst_result(results: Iterable[PipelineRunResult]) -> PipelineRunResult:
    return reduce(worst_of, results, PipelineRunResult.NONE)


def overall_label(stages: Sequence[StageInfo]) -> str:
    """Derive the build-level label from its stages."""
    if any(s.state == TimelineRecordStatus.IN_PROGRESS for s in stages):
        return RUNNING_LABEL
    if all(s.state == TimelineRecordStatus.COMPLETED for s in stages):
        return result_label(worst_result(s.result for s in stages))
    return PENDING_LABEL


def count_completed(records: Iterable[StageInfo | JobInfo | TaskInfo]) -> int:
    return sum(1 for r in records if r.state == TimelineRecordStatus.COMPLETED)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def _same_name(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def find_stage(timeline: BuildTimelineInfo, name: str) -> StageInfo:
    """Case-insensitive stage lookup; the first match wins."""
    for stage in timeline.stages:
        if _same_name(stage.name, name):
            return stage
    raise TimelineLookupError.stage_not_found(name, [s.name for s in timeline.stages])


def find_job(stage: StageInfo, name: str) -> JobInfo:
    """Case-insensitive job lookup within *stage*; the first match wins."""
    for job in stage.jobs:
        if _same_name(job.name, name):
            return job
    raise TimelineLookupError.job_not_found(name, stage.name, [j.name for j in stage.jobs])


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class ReportKind(str, Enum):
    OVERVIEW = "overview"
    STAGE = "stage"
    JOB = "job"


class StatusLine(BaseModel):
    """One child row of a report.  Tasks carry no counts."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    completed: int | None = None
    total: int | None = None
    unit: str | None = None

    @property
    def counts_text(self) -> str:
        if self.unit is None:
            return ""
        return f"({self.unit}: {self.completed}/{self.total} complete)"

    def text(self, format_name: Formatter = str, format_label: Formatter = str) -> str:
        line = f"{format_name(self.name)} - {format_label(self.label)}"
        if self.unit is not None:
            line = f"{line} {self.counts_text}"
        return line


class StatusReport(BaseModel):
    """A header plus child rows for one level of the timeline.

    ``path`` is empty for the overview, ``(stage,)`` for a stage report,
    and ``(stage, job)`` for a job report.
    """

    model_config = ConfigDict(frozen=True)

    kind: ReportKind
    path: tuple[str, ...] = ()
    label: str
    completed: int
    total: int
    unit: str
    lines: tuple[StatusLine, ...] = ()

    def header_text(self, format_name: Formatter = str, format_label: Formatter = str) -> str:
        """Header line; the formatters let a renderer decorate names and labels."""
        if self.kind == ReportKind.OVERVIEW:
            return f"{format_label(self.label)} - {self.completed}/{self.total} {self.unit} complete"
        return (
            f"{' > '.join(format_name(p) for p in self.path)} - {format_label(self.label)} "
            f"({self.unit}: {self.completed}/{self.total} complete)"
        )

    def text(self, format_name: Formatter = str, format_label: Formatter = str) -> str:
        header = self.header_text(format_name, format_label)
        return "\n".join([header, "", *(line.text(format_name, format_label) for line in self.lines)])


def overview_report(timeline: BuildTimelineInfo) -> StatusReport:
    stages = timeline.stages
    return StatusReport(
        kind=ReportKind.OVERVIEW,
        label=overall_label(stages),
        completed=count_completed(stages),
        total=len(stages),
        unit="Stages",
        lines=tuple(
            StatusLine(
                name=s.name,
                label=state_label(s.state, s.result),
                completed=count_completed(s.jobs),
                total=len(s.jobs),
                unit="Jobs",
            )
            for s in stages
        ),
    )


def stage_report(timeline: BuildTimelineInfo, stage_name: str) -> StatusReport:
    stage = find_stage(timeline, stage_name)
    return StatusReport(
        kind=ReportKind.STAGE,
        path=(stage.name,),
        label=state_label(stage.state, stage.result),
        completed=count_completed(stage.jobs),
        total=len(stage.jobs),
        unit="Jobs",
        lines=tuple(
            StatusLine(
                name=j.name,
                label=state_label(j.state, j.result),
                completed=count_completed(j.tasks),
                total=len(j.tasks),
                unit="Tasks",
            )
            for j in stage.jobs
        ),
    )


def job_report(timeline: BuildTimelineInfo, stage_name: str, job_name: str) -> StatusReport:
    stage = find_stage(timeline, stage_name)
    job = find_job(stage, job_name)
    return StatusReport(
        kind=ReportKind.JOB,
        path=(stage.name, job.name),
        label=state_label(job.state, job.result),
        completed=count_completed(job.tasks),
        total=len(job.tasks),
        unit="Tasks",
        lines=tuple(
            StatusLine(name=t.name, label=state_label(t.state, t.result))
            for t in job.tasks
        ),
    )


def validate_filters(stage: str | None, job: str | None) -> None:
    """Reject ``--job`` without ``--stage``."""
    if job is not None and stage is None:
        raise UsageError("--job requires --stage to be specified.")


def build_report(
    timeline: BuildTimelineInfo,
    stage: str | None = None,
    job: str | None = None,
) -> StatusReport:
    """Select the report for the requested drill-down level."""
    validate_filters(stage, job)
    if stage is None:
        return overview_report(timeline)
    if job is None:
        return stage_report(timeline, stage)
    return job_report(timeline, stage, job)
