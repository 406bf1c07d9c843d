"""Runtime configuration: env-driven.

Reads from a .env file and PIPELINEMONITOR_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class MonitorConfig(BaseSettings):
    """Pipeline Monitor configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PIPELINEMONITOR_LOG_LEVEL=DEBUG
        export PIPELINEMONITOR_ACCESS_TOKEN=<personal access token>

    Or via .env file::

        PIPELINEMONITOR_API_VERSION=7.1
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PIPELINEMONITOR_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Forwarded to the HTTP client as-is; never inspected here
    access_token: str = ""
    api_version: str = "7.1"
    request_timeout_seconds: float = 30.0

    # Local checkout
    working_dir: Path = Path(".")
    git_executable: str = "git"


# Module-level singleton: import as `from pipelinemonitor.config import config`
config = MonitorConfig()
