"""Tests for Azure DevOps git remote URL parsing."""

from __future__ import annotations

import pytest

from pipelinemonitor.azure.git_url_parser import VstsGitUrlParser

parser = VstsGitUrlParser()


@pytest.mark.parametrize(
    ("url", "org", "project", "repo"),
    [
        ("https://dev.azure.com/contoso/WebApp/_git/web", "contoso", "WebApp", "web"),
        ("https://contoso@dev.azure.com/contoso/WebApp/_git/web", "contoso", "WebApp", "web"),
        ("https://dev.azure.com/contoso/Web%20App/_git/web%20ui", "contoso", "Web App", "web ui"),
        ("https://dev.azure.com/contoso/_git/WebApp", "contoso", "WebApp", "WebApp"),
        ("https://contoso.visualstudio.com/WebApp/_git/web", "contoso", "WebApp", "web"),
        ("https://contoso.visualstudio.com/DefaultCollection/WebApp/_git/web", "contoso", "WebApp", "web"),
        ("git@ssh.dev.azure.com:v3/contoso/WebApp/web", "contoso", "WebApp", "web"),
        ("contoso@vs-ssh.visualstudio.com:v3/contoso/WebApp/web", "contoso", "WebApp", "web"),
        ("ssh://git@ssh.dev.azure.com/v3/contoso/WebApp/web", "contoso", "WebApp", "web"),
    ],
)
def test_parses_supported_shapes(url, org, project, repo):
    detected = parser.parse(url)
    assert detected is not None
    assert detected.organization.name == org
    assert detected.organization.url == f"https://dev.azure.com/{org}"
    assert detected.project.name == project
    assert detected.repository.name == repo
    assert parser.is_azure_devops_url(url)


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/contoso/web.git",
        "git@github.com:contoso/web.git",
        "https://dev.azure.com/contoso/WebApp/_build/results?buildId=1",
        "https://dev.azure.com/contoso",
        "git@ssh.dev.azure.com:contoso/WebApp/web",
        "/srv/git/web.git",
        "https://[dev.azure.com/contoso/WebApp/_git/web",
        "",
    ],
)
def test_rejects_other_urls(url):
    assert parser.parse(url) is None
    assert not parser.is_azure_devops_url(url)
