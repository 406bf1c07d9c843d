"""User-facing error taxonomy.

Every error here is fatal to the current command.  The CLI layer prints
the message and exits non-zero; nothing is retried.
"""

from __future__ import annotations


class UserFacingError(Exception):
    """An error whose message is shown to the user verbatim."""

    exit_code: int = 1


class UsageError(UserFacingError):
    """Invalid option combination, detected before any resolution work."""

    exit_code = 2


class InvalidReferenceError(UserFacingError):
    """Input is neither a recognized build URL nor a numeric build ID."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid argument '{value}'. "
            "Provide a numeric build ID or an Azure DevOps build results URL."
        )


class DetectionFailedError(UserFacingError):
    """A bare build ID was given but organization/project could not be detected."""

    def __init__(self) -> None:
        super().__init__(
            "Could not detect Azure DevOps organization/project from Git remotes. "
            "Use a full build URL instead."
        )


class TimelineLookupError(UserFacingError, LookupError):
    """A named stage or job does not exist in the fetched timeline."""

    def __init__(self, message: str, available: list[str]) -> None:
        self.available = available
        super().__init__(message)

    @classmethod
    def stage_not_found(cls, name: str, available: list[str]) -> TimelineLookupError:
        return cls(
            f"Stage '{name}' not found. Available stages: {', '.join(available)}",
            available,
        )

    @classmethod
    def job_not_found(
        cls, name: str, stage_name: str, available: list[str]
    ) -> TimelineLookupError:
        return cls(
            f"Job '{name}' not found in stage '{stage_name}'. "
            f"Available jobs: {', '.join(available)}",
            available,
        )


class GitError(Exception):
    """Raised when a git command fails for a reason other than missing remotes."""
