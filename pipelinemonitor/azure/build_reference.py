"""Turn a user-supplied build reference into (organization, project, build id).

Two inputs are accepted:

- A build results URL in either host family::

      https://dev.azure.com/{org}/{project}/_build/results?buildId={id}
      https://{org}.visualstudio.com/{project}/_build/results?buildId={id}

- A bare numeric build ID, in which case organization and project are
  detected from the local git remote.

URL input is self-describing and never falls back to detection.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import unquote, urlparse

from pipelinemonitor.azure.repo_info import RepoInfoResolver
from pipelinemonitor.exceptions import DetectionFailedError, InvalidReferenceError
from pipelinemonitor.models.identity import (
    LEGACY_HOST_SUFFIX,
    MODERN_HOST,
    BuildReference,
    OrganizationInfo,
    ProjectInfo,
)

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"^\s*[+-]?\d+\s*$")
_BUILD_ID_KEY = "buildid"


def parse_int(value: str) -> int | None:
    """Parse a whole string as a decimal integer, or return ``None``."""
    if not _INTEGER.match(value):
        return None
    return int(value)


def is_http_url(value: str) -> bool:
    """True when *value* is an absolute ``http``/``https`` URL."""
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.netloc)


def find_build_id(query: str) -> int | None:
    """Return the first integer ``buildId`` query parameter (key matched case-insensitively)."""
    for param in query.split("&"):
        key, sep, value = param.partition("=")
        if not sep or not key:
            continue
        if key.lower() != _BUILD_ID_KEY:
            continue
        build_id = parse_int(value)
        if build_id is not None:
            return build_id
    return None


def _url_parts(url: str) -> tuple[str, list[str], int] | None:
    """Split a build URL into host, raw path segments, and build id."""
    if not is_http_url(url):
        return None
    parsed = urlparse(url.strip())
    build_id = find_build_id(parsed.query)
    if build_id is None:
        return None
    segments = [s for s in parsed.path.split("/") if s]
    return (parsed.hostname or "").lower(), segments, build_id


def _reference(org: str, project: str, build_id: int) -> BuildReference:
    return BuildReference(
        organization=OrganizationInfo.from_name(org),
        project=ProjectInfo(name=project),
        build_id=build_id,
    )


def parse_modern_build_url(url: str) -> BuildReference | None:
    """``https://dev.azure.com/{org}/{project}/...?buildId={id}``"""
    parts = _url_parts(url)
    if parts is None:
        return None
    host, segments, build_id = parts
    if host != MODERN_HOST or len(segments) < 2:
        return None
    return _reference(unquote(segments[0]), unquote(segments[1]), build_id)


def parse_legacy_build_url(url: str) -> BuildReference | None:
    """``https://{org}.visualstudio.com/{project}/...?buildId={id}``"""
    parts = _url_parts(url)
    if parts is None:
        return None
    host, segments, build_id = parts
    if not host.endswith(LEGACY_HOST_SUFFIX) or len(segments) < 1:
        return None
    org = host.split(".", 1)[0]
    return _reference(org, unquote(segments[0]), build_id)


def parse_build_url(url: str) -> BuildReference | None:
    """Try each supported URL family in turn."""
    for parser in (parse_modern_build_url, parse_legacy_build_url):
        reference = parser(url)
        if reference is not None:
            return reference
    return None


class BuildReferenceResolver:
    """Resolves a build ID or build results URL to a ``BuildReference``."""

    def __init__(self, repo_info_resolver: RepoInfoResolver) -> None:
        self._repo_info_resolver = repo_info_resolver

    def resolve(self, value: str) -> BuildReference:
        """Resolve *value*.

        Raises
        ------
        InvalidReferenceError
            *value* is neither a recognized build URL nor an integer.
        DetectionFailedError
            *value* is an integer but organization/project could not be
            detected from git.
        """
        if is_http_url(value):
            reference = parse_build_url(value)
            if reference is None:
                logger.debug("URL is not a recognized build results URL: %s", value)
                raise InvalidReferenceError(value)
            return reference

        build_id = parse_int(value)
        if build_id is None:
            raise InvalidReferenceError(value)

        repo_info = self._repo_info_resolver.resolve(detect_from_git=True)
        if repo_info.organization is None or repo_info.project is None:
            raise DetectionFailedError()

        return BuildReference(
            organization=repo_info.organization,
            project=repo_info.project,
            build_id=build_id,
        )
