"""Local pipeline definition models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LocalPipelineInfo(BaseModel):
    """A pipeline definition whose YAML file exists in the local checkout."""

    model_config = ConfigDict(frozen=True)

    name: str
    definition_file: Path
    relative_path: str
    id: int


class PipelineParameter(BaseModel):
    """A single entry of a pipeline YAML ``parameters`` list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    display_name: str | None = Field(default=None, alias="displayName")
    type: str = "string"
    default: Any = None
    values: list[Any] | None = None


class PipelineYaml(BaseModel):
    """The subset of a pipeline YAML file this tool reads."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    parameters: list[PipelineParameter] = []
