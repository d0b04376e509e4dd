"""Settings and project configuration."""

from .project import ConfigError, ProjectConfig, load_project_config
from .settings import Settings, settings

__all__ = [
    "ConfigError",
    "ProjectConfig",
    "Settings",
    "load_project_config",
    "settings",
]
