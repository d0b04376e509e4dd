"""Project configuration loaded from a YAML file.

Example ``.reviewguide.yaml``::

    documents:
      - GUIDE.md
    exclude:
      - "docs/_drafts/*"
    ignore:
      - RG008
    per_file_ignores:
      "CHANGELOG.md": [toc-section-missing]
    severity:
      fence-language-missing: error
    baseline: .reviewguide-baseline.json
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from reviewguide.models.outputs import Severity

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when project configuration cannot be loaded or is invalid."""


class ProjectConfig(BaseModel):
    """Per-repository check configuration."""

    documents: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    ignore: list[str] = Field(default_factory=list)
    per_file_ignores: dict[str, list[str]] = Field(default_factory=dict)
    severity: dict[str, Severity] = Field(default_factory=dict)
    baseline: str | None = None
    toc_titles: list[str] | None = None
    toc_level: int | None = Field(default=None, ge=1, le=6)

    @field_validator("ignore", "documents", "exclude", mode="before")
    @classmethod
    def _single_value_as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


def parse_project_config(raw: str, source: str = "<string>") -> ProjectConfig:
    """Parse YAML text into a validated ProjectConfig.

    Args:
        raw: YAML document text
        source: Name used in error messages

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the YAML is malformed or does not match the schema
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"{source}: invalid YAML: {e}") from e

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping")

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source}: {e}") from e


def load_project_config(
    path: str | Path | None, default_path: str | Path | None = None
) -> ProjectConfig:
    """Load project configuration from disk.

    An explicitly requested file must exist. When only ``default_path`` is
    given and it is absent, defaults are returned.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found: {config_path}")
    elif default_path is not None and Path(default_path).is_file():
        config_path = Path(default_path)
    else:
        logger.debug("No project configuration file, using defaults")
        return ProjectConfig()

    logger.info(f"Loading project configuration from {config_path}")
    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    return parse_project_config(raw, source=str(config_path))
