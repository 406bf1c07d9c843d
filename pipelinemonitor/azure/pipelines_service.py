"""Azure DevOps REST client: build timelines and pipeline definitions.

Only the two read calls the CLI needs are implemented.  HTTP errors are
raised to the caller unchanged (``httpx.HTTPStatusError`` and friends);
nothing is retried here.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx

from pipelinemonitor.models.identity import OrganizationInfo, ProjectInfo, RepositoryInfo
from pipelinemonitor.models.pipelines import LocalPipelineInfo
from pipelinemonitor.models.timeline import (
    BuildTimelineInfo,
    JobInfo,
    PipelineRunResult,
    StageInfo,
    TaskInfo,
    TimelineRecordStatus,
)

logger = logging.getLogger(__name__)

CONTINUATION_HEADER = "x-ms-continuationtoken"

_STATES: dict[str, TimelineRecordStatus] = {
    "pending": TimelineRecordStatus.PENDING,
    "inprogress": TimelineRecordStatus.IN_PROGRESS,
    "completed": TimelineRecordStatus.COMPLETED,
}

_RESULTS: dict[str, PipelineRunResult] = {
    "succeeded": PipelineRunResult.SUCCEEDED,
    "succeededwithissues": PipelineRunResult.PARTIALLY_SUCCEEDED,
    "partiallysucceeded": PipelineRunResult.PARTIALLY_SUCCEEDED,
    "failed": PipelineRunResult.FAILED,
    "canceled": PipelineRunResult.CANCELED,
    "skipped": PipelineRunResult.SKIPPED,
}


# ---------------------------------------------------------------------------
# Timeline assembly
# ---------------------------------------------------------------------------


def parse_state(value: str | None) -> TimelineRecordStatus:
    if value is None:
        return TimelineRecordStatus.PENDING
    return _STATES.get(value.lower(), TimelineRecordStatus.UNKNOWN)


def parse_result(value: str | None) -> PipelineRunResult:
    if value is None:
        return PipelineRunResult.NONE
    return _RESULTS.get(value.lower(), PipelineRunResult.UNKNOWN)


def _order_key(record: dict[str, Any]) -> tuple[bool, int]:
    order = record.get("order")
    return order is None, order or 0


def timeline_from_records(records: list[dict[str, Any]]) -> BuildTimelineInfo:
    """Assemble the stage → job → task tree from flat timeline records.

    Jobs hang off a ``Phase`` record whose parent is the stage; a job
    parented directly on the stage is accepted as well.
    """
    children: dict[str | None, list[dict[str, Any]]] = defaultdict(list)
    for record in records:
        children[record.get("parentId")].append(record)

    def of_type(parent_id: str | None, record_type: str) -> list[dict[str, Any]]:
        return sorted(
            (r for r in children.get(parent_id, []) if r.get("type") == record_type),
            key=_order_key,
        )

    def task(record: dict[str, Any]) -> TaskInfo:
        return TaskInfo(
            name=record.get("name") or "",
            state=parse_state(record.get("state")),
            result=parse_result(record.get("result")),
        )

    def job(record: dict[str, Any]) -> JobInfo:
        return JobInfo(
            name=record.get("name") or "",
            state=parse_state(record.get("state")),
            result=parse_result(record.get("result")),
            tasks=tuple(task(t) for t in of_type(record.get("id"), "Task")),
        )

    def stage(record: dict[str, Any]) -> StageInfo:
        stage_id = record.get("id")
        job_records = list(of_type(stage_id, "Job"))
        for phase in of_type(stage_id, "Phase"):
            job_records.extend(of_type(phase.get("id"), "Job"))
        return StageInfo(
            name=record.get("name") or "",
            state=parse_state(record.get("state")),
            result=parse_result(record.get("result")),
            jobs=tuple(job(j) for j in job_records),
        )

    stage_records = sorted(
        (r for r in records if r.get("type") == "Stage"), key=_order_key
    )
    return BuildTimelineInfo(stages=tuple(stage(s) for s in stage_records))


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PipelinesService:
    """Read-only Azure DevOps pipelines client.

    Parameters
    ----------
    client:
        An ``httpx.Client``.  When omitted one is created using the
        remaining arguments and closed by ``close()``.
    access_token:
        Optional personal access token, sent as basic-auth password.
    api_version:
        Value of the ``api-version`` query parameter.
    timeout:
        Request timeout in seconds for a created client.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        access_token: str = "",
        api_version: str = "7.1",
        timeout: float = 30.0,
    ) -> None:
        self.api_version = api_version
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                timeout=httpx.Timeout(timeout),
                auth=("", access_token) if access_token else None,
                headers={"Accept": "application/json"},
            )
        self._client = client

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> PipelinesService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _project_url(org: OrganizationInfo, project: ProjectInfo) -> str:
        return f"{org.url.rstrip('/')}/{quote(project.name, safe='')}"

    def _get(self, url: str, **params: str) -> httpx.Response:
        logger.debug("GET %s", url)
        response = self._client.get(url, params={"api-version": self.api_version, **params})
        response.raise_for_status()
        return response

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body, raising ``httpx.DecodingError`` otherwise."""
        try:
            payload = response.json()
        except ValueError as e:
            raise httpx.DecodingError(
                f"Response from {response.url} is not valid JSON (status {response.status_code}): {e}",
                request=response.request,
            ) from e
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise httpx.DecodingError(
                f"Response from {response.url} is not a JSON object", request=response.request
            )
        return payload

    def get_build_timeline(
        self, org: OrganizationInfo, project: ProjectInfo, build_id: int
    ) -> BuildTimelineInfo:
        """Fetch and assemble the timeline of *build_id*."""
        url = f"{self._project_url(org, project)}/_apis/build/builds/{build_id}/timeline"
        response = self._get(url)
        if response.status_code == 204 or not response.content:
            return BuildTimelineInfo()
        payload = self._json(response)
        return timeline_from_records(payload.get("records") or [])

    def _iter_definitions(
        self, org: OrganizationInfo, project: ProjectInfo
    ) -> Iterator[dict[str, Any]]:
        url = f"{self._project_url(org, project)}/_apis/build/definitions"
        params = {"includeAllProperties": "true"}
        while True:
            response = self._get(url, **params)
            yield from self._json(response).get("value") or []
            token = response.headers.get(CONTINUATION_HEADER)
            if not token:
                return
            params = {**params, "continuationToken": token}

    def get_local_pipelines(
        self,
        org: OrganizationInfo,
        project: ProjectInfo,
        root: Path,
        repository: RepositoryInfo | None = None,
    ) -> Iterator[LocalPipelineInfo]:
        """Yield YAML pipeline definitions whose file exists under *root*.

        When *repository* is given, definitions bound to other repositories
        are skipped.  Requests are issued lazily as the iterator advances.
        """
        for definition in self._iter_definitions(org, project):
            yaml_file = (definition.get("process") or {}).get("yamlFilename")
            if not yaml_file:
                continue
            if repository is not None:
                repo_name = (definition.get("repository") or {}).get("name") or ""
                if repo_name.casefold() != repository.name.casefold():
                    continue

            relative_path = yaml_file.replace("\\", "/").lstrip("/")
            definition_file = root / relative_path
            if not definition_file.is_file():
                logger.debug("Skipping %s: %s not found locally", definition.get("name"), relative_path)
                continue

            yield LocalPipelineInfo(
                name=definition.get("name") or "",
                definition_file=definition_file,
                relative_path=relative_path,
                id=definition["id"],
            )
