"""Identity models: organization, project, repository, and build references."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

MODERN_HOST = "dev.azure.com"
LEGACY_HOST_SUFFIX = ".visualstudio.com"


def modern_org_url(name: str) -> str:
    """Return the canonical ``https://dev.azure.com/{name}`` URL for an organization."""
    return f"https://{MODERN_HOST}/{name}"


class OrganizationInfo(BaseModel):
    """An Azure DevOps organization and the URL used to reach its APIs."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str

    @classmethod
    def from_name(cls, name: str) -> OrganizationInfo:
        return cls(name=name, url=modern_org_url(name))


class ProjectInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class RepositoryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class DetectedRepoInfo(BaseModel):
    """Identity parsed from a git remote URL.  All three parts are known."""

    model_config = ConfigDict(frozen=True)

    organization: OrganizationInfo
    project: ProjectInfo
    repository: RepositoryInfo


class ResolvedRepoInfo(BaseModel):
    """Best-effort identity.  Each field is independently optional.

    Partial resolution is an expected outcome; callers decide which
    fields they require.
    """

    model_config = ConfigDict(frozen=True)

    organization: OrganizationInfo | None = None
    project: ProjectInfo | None = None
    repository: RepositoryInfo | None = None


class BuildReference(BaseModel):
    """A fully resolved (organization, project, build id) triple."""

    model_config = ConfigDict(frozen=True)

    organization: OrganizationInfo
    project: ProjectInfo
    build_id: int
