"""Dependency wiring: builds the collaborators a command needs from config."""

from __future__ import annotations

from pipelinemonitor.azure.build_reference import BuildReferenceResolver
from pipelinemonitor.azure.git_remote import GitRemoteUrlProvider
from pipelinemonitor.azure.git_url_parser import VstsGitUrlParser
from pipelinemonitor.azure.pipelines_service import PipelinesService
from pipelinemonitor.azure.repo_info import RepoInfoResolver
from pipelinemonitor.config import MonitorConfig, config as default_config


def create_repo_info_resolver(cfg: MonitorConfig | None = None) -> RepoInfoResolver:
    cfg = cfg or default_config
    return RepoInfoResolver(
        GitRemoteUrlProvider(cfg.working_dir, git_executable=cfg.git_executable),
        VstsGitUrlParser(),
    )


def create_build_reference_resolver(cfg: MonitorConfig | None = None) -> BuildReferenceResolver:
    return BuildReferenceResolver(create_repo_info_resolver(cfg))


def create_pipelines_service(cfg: MonitorConfig | None = None) -> PipelinesService:
    cfg = cfg or default_config
    return PipelinesService(
        access_token=cfg.access_token,
        api_version=cfg.api_version,
        timeout=cfg.request_timeout_seconds,
    )
