"""Git remote discovery for the local checkout."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from pipelinemonitor.exceptions import GitError

logger = logging.getLogger(__name__)

_PREFERRED_REMOTE = "origin"


class GitRemoteUrlProvider:
    """Reads remote URLs from git configuration.

    The caller supplies the predicate that decides which remote is
    interesting, so this class knows nothing about Azure DevOps.
    """

    def __init__(self, working_dir: Path, git_executable: str = "git"):
        self.working_dir = working_dir
        self.git_executable = git_executable

    def list_remotes(self) -> list[tuple[str, str]]:
        """Return ``(name, url)`` pairs, ``origin`` first, others in git's order."""
        try:
            result = subprocess.run(
                [self.git_executable, "config", "--get-regexp", r"^remote\..*\.url$"],
                cwd=self.working_dir,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitError(f"Failed to run git: {e}") from e

        # Exit code 1 means "no matching keys"
        if result.returncode == 1:
            return []
        if result.returncode != 0:
            raise GitError(f"Failed to list git remotes: {result.stderr.strip()}")

        remotes: list[tuple[str, str]] = []
        for line in result.stdout.splitlines():
            parts = line.split(maxsplit=1)
            if len(parts) != 2:
                continue
            key, url = parts
            name = key[len("remote."):-len(".url")]
            remotes.append((name, url.strip()))

        remotes.sort(key=lambda r: r[0] != _PREFERRED_REMOTE)
        return remotes

    def get_remote_url(self, predicate: Callable[[str], bool]) -> str | None:
        """Return the first remote URL accepted by *predicate*, or ``None``."""
        for name, url in self.list_remotes():
            if predicate(url):
                logger.debug("Using remote '%s': %s", name, url)
                return url
        logger.debug("No matching git remote in %s", self.working_dir)
        return None
