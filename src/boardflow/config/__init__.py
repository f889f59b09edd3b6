"""Repository-level configuration loading."""

from boardflow.config.loader import DEFAULT_CONFIG_PATH, ProjectConfig, read_project_config

__all__ = ["DEFAULT_CONFIG_PATH", "ProjectConfig", "read_project_config"]
