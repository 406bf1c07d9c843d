"""Parse Azure DevOps git remote URLs into organization/project/repository.

Recognized shapes::

    https://[user@]dev.azure.com/{org}/{project}/_git/{repo}
    https://{org}.visualstudio.com/[DefaultCollection/]{project}/_git/{repo}
    git@ssh.dev.azure.com:v3/{org}/{project}/{repo}
    {org}@vs-ssh.visualstudio.com:v3/{org}/{project}/{repo}

The ``/{project}/`` part may be omitted in the HTTPS forms
(``.../{org}/_git/{repo}``), in which case the project shares the
repository's name.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import unquote, urlparse

from pipelinemonitor.models.identity import (
    LEGACY_HOST_SUFFIX,
    MODERN_HOST,
    DetectedRepoInfo,
    OrganizationInfo,
    ProjectInfo,
    RepositoryInfo,
)

logger = logging.getLogger(__name__)

_SSH_HOSTS = ("ssh.dev.azure.com", "vs-ssh.visualstudio.com")
_SCP_LIKE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>.+)$")


def _split_remote(url: str) -> tuple[str, list[str]] | None:
    """Return the lower-cased host and decoded path segments of a remote URL."""
    url = url.strip()
    if "://" in url:
        try:
            parsed = urlparse(url)
        except ValueError:
            return None
        if parsed.scheme.lower() not in ("http", "https", "ssh"):
            return None
        host = parsed.hostname or ""
        path = parsed.path
    else:
        match = _SCP_LIKE.match(url)
        if match is None:
            return None
        host, path = match["host"], match["path"]

    if not host:
        return None
    segments = [unquote(s) for s in path.split("/") if s]
    return host.lower(), segments


def _from_git_path(org: str, segments: list[str]) -> DetectedRepoInfo | None:
    """Interpret ``{project}/_git/{repo}`` or ``_git/{repo}``."""
    if len(segments) >= 3 and segments[1].lower() == "_git":
        project, repo = segments[0], segments[2]
    elif len(segments) >= 2 and segments[0].lower() == "_git":
        project = repo = segments[1]
    else:
        return None
    return _detected(org, project, repo)


def _detected(org: str, project: str, repo: str) -> DetectedRepoInfo | None:
    if not (org and project and repo):
        return None
    return DetectedRepoInfo(
        organization=OrganizationInfo.from_name(org),
        project=ProjectInfo(name=project),
        repository=RepositoryInfo(name=repo),
    )


class VstsGitUrlParser:
    """Recognizes and parses Azure DevOps git remote URLs."""

    def is_azure_devops_url(self, url: str) -> bool:
        """Predicate handed to the git remote provider."""
        return self.parse(url) is not None

    def parse(self, url: str) -> DetectedRepoInfo | None:
        """Parse *url*, returning ``None`` when it is not an Azure DevOps remote."""
        split = _split_remote(url)
        if split is None:
            return None
        host, segments = split

        if host in _SSH_HOSTS:
            # v3/{org}/{project}/{repo}
            if len(segments) >= 4 and segments[0].lower() == "v3":
                return _detected(segments[1], segments[2], segments[3])
            return None

        if host == MODERN_HOST:
            if not segments:
                return None
            return _from_git_path(segments[0], segments[1:])

        if host.endswith(LEGACY_HOST_SUFFIX):
            org = host.split(".", 1)[0]
            if segments and segments[0].lower() == "defaultcollection":
                segments = segments[1:]
            return _from_git_path(org, segments)

        logger.debug("Not an Azure DevOps remote: %s", url)
        return None
