"""Build timeline models: stages contain jobs, jobs contain tasks.

The tree is fetched fresh per invocation and never mutated afterwards,
so every model is frozen.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TimelineRecordStatus(str, Enum):
    """Lifecycle state of a timeline record.

    ``UNKNOWN`` is the catch-all for states the service reports that this
    tool does not recognize.
    """

    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


class PipelineRunResult(str, Enum):
    """Outcome of a finished record.

    ``NONE`` means "not yet meaningful" and is distinct from every real
    outcome.  ``UNKNOWN`` covers outcomes the service reports that have no
    named counterpart here (e.g. ``abandoned``).
    """

    NONE = "none"
    SUCCEEDED = "succeeded"
    PARTIALLY_SUCCEEDED = "partiallySucceeded"
    FAILED = "failed"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    UNKNOWN = "unknown"


class TaskInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    state: TimelineRecordStatus = TimelineRecordStatus.PENDING
    result: PipelineRunResult = PipelineRunResult.NONE


class JobInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    state: TimelineRecordStatus = TimelineRecordStatus.PENDING
    result: PipelineRunResult = PipelineRunResult.NONE
    tasks: tuple[TaskInfo, ...] = ()


class StageInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    state: TimelineRecordStatus = TimelineRecordStatus.PENDING
    result: PipelineRunResult = PipelineRunResult.NONE
    jobs: tuple[JobInfo, ...] = ()


class BuildTimelineInfo(BaseModel):
    """The execution tree of a single build, stages in display order."""

    model_config = ConfigDict(frozen=True)

    stages: tuple[StageInfo, ...] = ()
