"""Project configuration lookup (inputs first, then ``.github/config.json``)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from boardflow.contracts.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".github/config.json")


class ProjectConfig(BaseModel):
    project_id: str
    domain: str | None = None

    model_config = {"frozen": True}


def _read_json(path: Path) -> dict[str, Any]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("top-level JSON value must be an object")
    return payload


def read_project_config(
    *,
    project_id: str | None = None,
    domain: str | None = None,
    path: str | Path = DEFAULT_CONFIG_PATH,
) -> ProjectConfig:
    """Resolve the project id and domain.

    Explicit inputs win. Otherwise ``PROJECT_ID`` and ``DOMAIN`` are read from
    the JSON file at ``path``. A missing project id is an error; a missing or
    unreadable domain is not.

    Raises:
        ConfigError: No project id input and the file is missing, unreadable
            or has no ``PROJECT_ID``.
    """
    config_path = Path(path)
    file_data: dict[str, Any] | None = None
    file_error: Exception | None = None
    if config_path.exists():
        try:
            file_data = _read_json(config_path)
        except (OSError, ValueError) as exc:
            file_error = exc

    if project_id:
        logger.info("Using PROJECT_ID from input: %s", project_id)
    else:
        if file_error is not None:
            raise ConfigError(f"Error reading {config_path}: {file_error}") from file_error
        if file_data is None:
            raise ConfigError(f"No PROJECT_ID provided as input and {config_path} not found in the repository")
        project_id = file_data.get("PROJECT_ID")
        if not project_id or not isinstance(project_id, str):
            raise ConfigError(f"{config_path} has no PROJECT_ID")
        logger.info("Using PROJECT_ID from %s: %s", config_path.name, project_id)

    if domain:
        logger.info("Using DOMAIN from input: %s", domain)
    elif file_error is not None:
        logger.warning("Error reading DOMAIN from %s: %s", config_path, file_error)
    elif file_data is not None and isinstance(file_data.get("DOMAIN"), str) and file_data["DOMAIN"]:
        domain = file_data["DOMAIN"]
        logger.info("Using DOMAIN from %s: %s", config_path.name, domain)

    return ProjectConfig(project_id=project_id, domain=domain or None)
