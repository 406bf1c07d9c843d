"""Pipeline YAML parsing: reads the ``parameters`` section of definition files.

Parsing failures are logged and reported as ``None``; a listing of many
pipelines should not abort because one file is malformed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from yaml import YAMLError

from pipelinemonitor.models.pipelines import PipelineYaml

logger = logging.getLogger(__name__)


def _normalize_parameters(raw: Any) -> list[dict[str, Any]]:
    """Accept both the list form and the legacy ``{name: default}`` mapping form."""
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [{"name": str(name), "default": default} for name, default in raw.items()]
    return raw


class PipelineYamlService:
    """Parses Azure Pipelines YAML files."""

    def parse_file(self, path: Path) -> PipelineYaml | None:
        if not path.is_file():
            logger.warning("Pipeline YAML file not found: %s", path)
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read pipeline YAML file %s: %s", path, e)
            return None
        return self.parse(content)

    def parse(self, content: str) -> PipelineYaml | None:
        try:
            document = yaml.safe_load(content)
        except YAMLError as e:
            logger.error("YAML parsing error: %s", e)
            return None

        if document is None:
            return PipelineYaml()
        if not isinstance(document, dict):
            logger.error("Pipeline YAML must be a mapping, got %s", type(document).__name__)
            return None

        try:
            return PipelineYaml.model_validate(
                {"parameters": _normalize_parameters(document.get("parameters"))}
            )
        except ValidationError as e:
            logger.error("Invalid pipeline parameters: %s", e)
            return None
