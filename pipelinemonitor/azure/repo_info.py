"""Resolve organization, project, and repository from explicit values and git.

Explicit values always win.  Detection from the local git remote only
fills gaps, and a partially resolved result is a normal outcome rather
than an error.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable
from urllib.parse import urlparse

from pipelinemonitor.exceptions import GitError
from pipelinemonitor.models.identity import (
    MODERN_HOST,
    DetectedRepoInfo,
    OrganizationInfo,
    ProjectInfo,
    RepositoryInfo,
    ResolvedRepoInfo,
)

logger = logging.getLogger(__name__)

_VISUALSTUDIO_ORG = re.compile(r"^(?P<org>[^.]+)\.visualstudio\.com$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Collaborator protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class RemoteUrlProvider(Protocol):
    """Anything that can pick a git remote URL using a caller-supplied predicate."""

    def get_remote_url(self, predicate: Callable[[str], bool]) -> str | None:
        ...


@runtime_checkable
class RemoteUrlParser(Protocol):
    """Recognizes and parses hosted-service git remote URLs."""

    def is_azure_devops_url(self, url: str) -> bool:
        ...

    def parse(self, url: str) -> DetectedRepoInfo | None:
        ...


# ---------------------------------------------------------------------------
# Organization parsing
# ---------------------------------------------------------------------------


def parse_organization(organization: str) -> OrganizationInfo:
    """Parse an organization given as a URL or a bare name.

    Never raises: a URL of an unrecognized shape is kept verbatim as both
    the name and the URL, and a malformed URL is treated as a plain name.
    """
    try:
        parsed = urlparse(organization)
    except ValueError:
        logger.debug("Organization %r is not a parseable URL; treating it as a name", organization)
        return OrganizationInfo.from_name(organization)
    if not (parsed.scheme and parsed.netloc):
        return OrganizationInfo.from_name(organization)

    host = parsed.hostname or ""

    match = _VISUALSTUDIO_ORG.match(host)
    if match:
        return OrganizationInfo.from_name(match["org"])

    if host == MODERN_HOST:
        segments = [s for s in parsed.path.split("/") if s]
        if segments:
            return OrganizationInfo.from_name(segments[0])

    return OrganizationInfo(name=organization, url=organization)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class RepoInfoResolver:
    """Combines explicit identity values with values detected from git.

    Parameters
    ----------
    remote_url_provider:
        Source of the local git remote URL.
    remote_url_parser:
        Supplies the recognizer predicate and parses the chosen URL.
    """

    def __init__(
        self,
        remote_url_provider: RemoteUrlProvider,
        remote_url_parser: RemoteUrlParser,
    ) -> None:
        self._remote_url_provider = remote_url_provider
        self._remote_url_parser = remote_url_parser

    def resolve(
        self,
        organization: str | None = None,
        project: str | None = None,
        repository: str | None = None,
        *,
        detect_from_git: bool = True,
    ) -> ResolvedRepoInfo:
        """Resolve as much identity as possible.  Never raises."""
        org_info = parse_organization(organization) if organization else None
        project_info = ProjectInfo(name=project) if project else None
        repo_info = RepositoryInfo(name=repository) if repository else None

        if org_info is None and detect_from_git:
            started = time.monotonic()
            detected = self._detect()
            if detected is not None:
                org_info = detected.organization
                if project_info is None:
                    project_info = detected.project
                if repo_info is None:
                    repo_info = detected.repository

            duration = time.monotonic() - started
            logger.info("Detect: URL discovery took %.3fs", duration)

        return ResolvedRepoInfo(
            organization=org_info,
            project=project_info,
            repository=repo_info,
        )

    def _detect(self) -> DetectedRepoInfo | None:
        try:
            remote_url = self._remote_url_provider.get_remote_url(
                self._remote_url_parser.is_azure_devops_url
            )
        except GitError as e:
            logger.warning("Git remote discovery failed: %s", e)
            return None

        if not remote_url:
            return None
        return self._remote_url_parser.parse(remote_url)
