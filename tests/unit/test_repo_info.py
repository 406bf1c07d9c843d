"""Tests for RepoInfoResolver and organization parsing."""

from __future__ import annotations

import logging

import pytest

from pipelinemonitor.azure.git_url_parser import VstsGitUrlParser
from pipelinemonitor.azure.repo_info import RepoInfoResolver, parse_organization
from pipelinemonitor.exceptions import GitError

REMOTE = "https://dev.azure.com/contoso/WebApp/_git/web-frontend"


class TestParseOrganization:
    def test_bare_name(self):
        org = parse_organization("contoso")
        assert org.name == "contoso"
        assert org.url == "https://dev.azure.com/contoso"

    def test_modern_url(self):
        org = parse_organization("https://dev.azure.com/contoso/")
        assert org.name == "contoso"
        assert org.url == "https://dev.azure.com/contoso"

    def test_modern_url_with_project_path(self):
        assert parse_organization("https://dev.azure.com/contoso/WebApp").name == "contoso"

    def test_legacy_url(self):
        org = parse_organization("https://Contoso.visualstudio.com")
        assert org.name == "contoso"
        assert org.url == "https://dev.azure.com/contoso"

    def test_unknown_url_kept_verbatim(self):
        org = parse_organization("https://tfs.example.com/DefaultCollection")
        assert org.name == "https://tfs.example.com/DefaultCollection"
        assert org.url == "https://tfs.example.com/DefaultCollection"

    def test_modern_host_without_path_kept_verbatim(self):
        org = parse_organization("https://dev.azure.com")
        assert org.name == "https://dev.azure.com"

    def test_malformed_url_treated_as_name(self):
        org = parse_organization("https://[bad/org")
        assert org.name == "https://[bad/org"


class TestRepoInfoResolver:
    def test_detects_everything(self, make_repo_info_resolver):
        info = make_repo_info_resolver(REMOTE).resolve()
        assert info.organization is not None
        assert info.organization.name == "contoso"
        assert info.project is not None and info.project.name == "WebApp"
        assert info.repository is not None and info.repository.name == "web-frontend"

    def test_explicit_project_not_overridden(self, make_repo_info_resolver):
        info = make_repo_info_resolver(REMOTE).resolve(project="Other", repository="other-repo")
        assert info.organization is not None and info.organization.name == "contoso"
        assert info.project is not None and info.project.name == "Other"
        assert info.repository is not None and info.repository.name == "other-repo"

    def test_explicit_organization_skips_detection(self, make_remote_provider):
        provider = make_remote_provider(REMOTE)
        resolver = RepoInfoResolver(provider, VstsGitUrlParser())

        info = resolver.resolve(organization="fabrikam")

        assert provider.calls == 0
        assert info.organization is not None and info.organization.name == "fabrikam"
        assert info.project is None
        assert info.repository is None

    def test_detection_disabled(self, make_repo_info_resolver):
        info = make_repo_info_resolver(REMOTE).resolve(detect_from_git=False)
        assert info.organization is None
        assert info.project is None
        assert info.repository is None

    def test_no_matching_remote_gives_partial_result(self, make_repo_info_resolver):
        info = make_repo_info_resolver("git@github.com:a/b.git").resolve(project="WebApp")
        assert info.organization is None
        assert info.project is not None and info.project.name == "WebApp"

    def test_first_matching_remote_wins(self, make_repo_info_resolver):
        info = make_repo_info_resolver(
            "git@github.com:a/b.git",
            "https://fabrikam.visualstudio.com/Tools/_git/cli",
            REMOTE,
        ).resolve()
        assert info.organization is not None and info.organization.name == "fabrikam"

    def test_malformed_remote_is_skipped(self, make_repo_info_resolver):
        info = make_repo_info_resolver("https://[broken/x/_git/y", REMOTE).resolve()
        assert info.organization is not None and info.organization.name == "contoso"

    def test_git_failure_is_not_raised(self):
        class BrokenProvider:
            def get_remote_url(self, predicate):
                raise GitError("fatal: bad config")

        info = RepoInfoResolver(BrokenProvider(), VstsGitUrlParser()).resolve(project="P")
        assert info.organization is None
        assert info.project is not None

    def test_logs_detection_duration(self, make_repo_info_resolver, caplog):
        caplog.set_level(logging.INFO, logger="pipelinemonitor")
        make_repo_info_resolver(REMOTE).resolve()
        assert any("Detect: URL discovery took" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("empty", ["", None])
    def test_empty_strings_count_as_missing(self, make_repo_info_resolver, empty):
        info = make_repo_info_resolver(REMOTE).resolve(organization=empty, project=empty)
        assert info.organization is not None and info.organization.name == "contoso"
        assert info.project is not None and info.project.name == "WebApp"
