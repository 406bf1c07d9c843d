"""Pipeline Monitor: inspect Azure DevOps build status from the command line.

Resolves a build ID or build results URL to an (organization, project,
build) triple, fetches the build timeline, and reports stage, job, and
task status.
"""

__version__ = "0.1.0"
__description__ = "Inspect Azure DevOps pipeline run status from the command line"

from pipelinemonitor.cli.app import app as cli

__all__ = ["cli", "__version__"]
