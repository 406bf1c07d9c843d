"""Azure DevOps integration: git remote detection, reference resolution, REST access."""

from pipelinemonitor.azure.build_reference import BuildReferenceResolver, parse_build_url
from pipelinemonitor.azure.git_remote import GitRemoteUrlProvider
from pipelinemonitor.azure.git_url_parser import VstsGitUrlParser
from pipelinemonitor.azure.pipelines_service import PipelinesService
from pipelinemonitor.azure.repo_info import RepoInfoResolver, parse_organization
from pipelinemonitor.azure.yaml_service import PipelineYamlService

__all__ = [
    "BuildReferenceResolver",
    "GitRemoteUrlProvider",
    "PipelineYamlService",
    "PipelinesService",
    "RepoInfoResolver",
    "VstsGitUrlParser",
    "parse_build_url",
    "parse_organization",
]
