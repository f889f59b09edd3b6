"""Configuration contracts."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from boardflow.contracts.exceptions import ConfigError

DEFAULT_API_URL = "https://api.github.com"


class RetryPolicy(BaseModel):
    """Per-call retry configuration."""

    max_attempts: int = Field(default=3, ge=1)
    delay_seconds: float = Field(default=1.0, ge=0.0)
    operation: str = "operation"

    model_config = {"frozen": True}

    def for_operation(self, operation: str) -> RetryPolicy:
        return self.model_copy(update={"operation": operation})


class ActionSettings(BaseModel):
    """Settings for one command invocation, built once at process start."""

    token: str
    api_url: str = DEFAULT_API_URL
    graphql_url: str | None = None
    repository: str | None = None
    event_path: Path | None = None
    output_path: Path | None = None
    retry: RetryPolicy = Field(default_factory=RetryPolicy)
    timeout_seconds: float = Field(default=30.0, gt=0.0)

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, token: str, environ: Mapping[str, str] | None = None) -> ActionSettings:
        env = os.environ if environ is None else environ
        retry_kwargs: dict[str, str] = {}
        if env.get("RETRY_MAX_ATTEMPTS"):
            retry_kwargs["max_attempts"] = env["RETRY_MAX_ATTEMPTS"]
        if env.get("RETRY_DELAY_SECONDS"):
            retry_kwargs["delay_seconds"] = env["RETRY_DELAY_SECONDS"]

        try:
            return cls.model_validate(
                {
                    "token": token,
                    "api_url": env.get("GITHUB_API_URL") or DEFAULT_API_URL,
                    "graphql_url": env.get("GITHUB_GRAPHQL_URL") or None,
                    "repository": env.get("GITHUB_REPOSITORY") or None,
                    "event_path": env.get("GITHUB_EVENT_PATH") or None,
                    "output_path": env.get("GITHUB_OUTPUT") or None,
                    "retry": RetryPolicy.model_validate(retry_kwargs),
                }
            )
        except ValidationError as exc:
            raise ConfigError(f"invalid settings: {exc}") from exc

    def split_repository(self) -> tuple[str, str]:
        parts = (self.repository or "").split("/", 1)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ConfigError(f"Invalid repository '{self.repository}'. Expected owner/repo.")
        return parts[0], parts[1]


def require_env(names: Iterable[str], environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the named variables, raising ``ConfigError`` if any is unset or empty."""
    env = os.environ if environ is None else environ
    wanted = list(names)
    missing = [name for name in wanted if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")
    return {name: env[name] for name in wanted}
