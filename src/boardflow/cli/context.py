"""Per-invocation wiring shared by the commands."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx

from boardflow.actions.outputs import OutputValue, set_outputs
from boardflow.auth.resolvers.env import EnvTokenResolver
from boardflow.contracts.config import ActionSettings
from boardflow.contracts.exceptions import ConfigError
from boardflow.github.client import GitHubClient
from boardflow.github.fields import FieldResolver
from boardflow.github.items import ItemLocator
from boardflow.retry import RetryExecutor, Sleeper

T = TypeVar("T")


@dataclass
class CommandContext:
    """Everything a command needs, built once per invocation."""

    settings: ActionSettings
    env: Mapping[str, str]
    client: GitHubClient
    executor: RetryExecutor
    fields: FieldResolver
    items: ItemLocator

    async def retry(self, operation: Callable[[], Awaitable[T]], label: str) -> T:
        return await self.executor.execute(operation, self.settings.retry.for_operation(label))

    def set_outputs(self, outputs: Mapping[str, OutputValue]) -> None:
        set_outputs(outputs, self.settings.output_path)

    def repository(self) -> tuple[str, str]:
        return self.settings.split_repository()

    def load_event(self) -> dict[str, Any]:
        """Return the triggering event payload, or ``{}`` when there is none."""
        path = self.settings.event_path
        if path is None or not path.exists():
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Failed reading event payload {path}: {exc}") from exc
        return payload if isinstance(payload, dict) else {}


@asynccontextmanager
async def open_context(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> AsyncIterator[CommandContext]:
    token = await EnvTokenResolver(environ=env).resolve()
    settings = ActionSettings.from_env(token, env)
    executor = RetryExecutor(sleep=sleep)
    async with GitHubClient.from_settings(settings, transport=transport) as client:
        yield CommandContext(
            settings=settings,
            env=env,
            client=client,
            executor=executor,
            fields=FieldResolver(client, executor, retry=settings.retry),
            items=ItemLocator(client, executor, retry=settings.retry),
        )
