"""Shared test fixtures for Pipeline Monitor."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from pipelinemonitor.azure.git_url_parser import VstsGitUrlParser
from pipelinemonitor.azure.repo_info import RepoInfoResolver
from pipelinemonitor.models.timeline import (
    BuildTimelineInfo,
    JobInfo,
    PipelineRunResult,
    StageInfo,
    TaskInfo,
    TimelineRecordStatus,
)

COMPLETED = TimelineRecordStatus.COMPLETED
IN_PROGRESS = TimelineRecordStatus.IN_PROGRESS
PENDING = TimelineRecordStatus.PENDING


class FakeRemoteUrlProvider:
    """Returns the first of a fixed list of URLs matching the predicate."""

    def __init__(self, urls: list[str] | None = None) -> None:
        self.urls = urls or []
        self.calls = 0

    def get_remote_url(self, predicate: Callable[[str], bool]) -> str | None:
        self.calls += 1
        for url in self.urls:
            if predicate(url):
                return url
        return None


@pytest.fixture
def make_remote_provider() -> Callable[..., FakeRemoteUrlProvider]:
    """Factory fixture: a fake remote provider over a fixed URL list."""

    def _factory(*urls: str) -> FakeRemoteUrlProvider:
        return FakeRemoteUrlProvider(list(urls))

    return _factory


@pytest.fixture
def make_repo_info_resolver() -> Callable[..., RepoInfoResolver]:
    """Factory fixture: a RepoInfoResolver over a fake remote list."""

    def _factory(*urls: str) -> RepoInfoResolver:
        return RepoInfoResolver(FakeRemoteUrlProvider(list(urls)), VstsGitUrlParser())

    return _factory


# ---------------------------------------------------------------------------
# Timeline factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_stage() -> Callable[..., StageInfo]:
    """Factory fixture: build a StageInfo with sensible defaults."""

    def _factory(
        name: str = "Build",
        state: TimelineRecordStatus = COMPLETED,
        result: PipelineRunResult = PipelineRunResult.SUCCEEDED,
        **overrides: Any,
    ) -> StageInfo:
        return StageInfo(name=name, state=state, result=result, **overrides)

    return _factory


@pytest.fixture
def sample_timeline() -> BuildTimelineInfo:
    """A two-stage build: Build finished with issues, Deploy still running."""
    return BuildTimelineInfo(
        stages=(
            StageInfo(
                name="Build",
                state=COMPLETED,
                result=PipelineRunResult.PARTIALLY_SUCCEEDED,
                jobs=(
                    JobInfo(
                        name="Linux",
                        state=COMPLETED,
                        result=PipelineRunResult.SUCCEEDED,
                        tasks=(
                            TaskInfo(name="Checkout", state=COMPLETED, result=PipelineRunResult.SUCCEEDED),
                            TaskInfo(name="Compile", state=COMPLETED, result=PipelineRunResult.SUCCEEDED),
                        ),
                    ),
                    JobInfo(
                        name="Windows",
                        state=COMPLETED,
                        result=PipelineRunResult.PARTIALLY_SUCCEEDED,
                        tasks=(
                            TaskInfo(name="Checkout", state=COMPLETED, result=PipelineRunResult.SUCCEEDED),
                            TaskInfo(name="Compile", state=COMPLETED, result=PipelineRunResult.PARTIALLY_SUCCEEDED),
                            TaskInfo(name="Sign", state=COMPLETED, result=PipelineRunResult.SKIPPED),
                        ),
                    ),
                ),
            ),
            StageInfo(
                name="Deploy",
                state=IN_PROGRESS,
                jobs=(
                    JobInfo(
                        name="Staging",
                        state=IN_PROGRESS,
                        tasks=(
                            TaskInfo(name="Download", state=COMPLETED, result=PipelineRunResult.SUCCEEDED),
                            TaskInfo(name="Publish", state=IN_PROGRESS),
                            TaskInfo(name="Verify", state=PENDING),
                        ),
                    ),
                    JobInfo(name="Production", state=PENDING),
                ),
            ),
        )
    )
