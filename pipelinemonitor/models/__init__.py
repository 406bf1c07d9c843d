"""Pipeline Monitor data models: all Pydantic v2, all frozen (immutable)."""

from pipelinemonitor.models.identity import (
    BuildReference,
    DetectedRepoInfo,
    OrganizationInfo,
    ProjectInfo,
    RepositoryInfo,
    ResolvedRepoInfo,
)
from pipelinemonitor.models.pipelines import (
    LocalPipelineInfo,
    PipelineParameter,
    PipelineYaml,
)
from pipelinemonitor.models.timeline import (
    BuildTimelineInfo,
    JobInfo,
    PipelineRunResult,
    StageInfo,
    TaskInfo,
    TimelineRecordStatus,
)

__all__ = [
    # identity
    "OrganizationInfo",
    "ProjectInfo",
    "RepositoryInfo",
    "ResolvedRepoInfo",
    "DetectedRepoInfo",
    "BuildReference",
    # timeline
    "TimelineRecordStatus",
    "PipelineRunResult",
    "TaskInfo",
    "JobInfo",
    "StageInfo",
    "BuildTimelineInfo",
    # pipelines
    "LocalPipelineInfo",
    "PipelineParameter",
    "PipelineYaml",
]
