"""``read-config``: resolve project id and domain from inputs or the repo config file."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path

import httpx

from boardflow.actions.outputs import OutputValue, set_outputs
from boardflow.config.loader import DEFAULT_CONFIG_PATH, read_project_config
from boardflow.retry import Sleeper

TITLE = "Read Config"


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    # No GitHub access; the signature matches the other commands.
    del transport, sleep
    config = read_project_config(
        project_id=env.get("PROJECT_ID") or None,
        domain=env.get("DOMAIN") or None,
        path=env.get("CONFIG_PATH") or DEFAULT_CONFIG_PATH,
    )
    outputs: dict[str, OutputValue] = {"project_id": config.project_id}
    if config.domain:
        outputs["domain"] = config.domain
    output_path = env.get("GITHUB_OUTPUT")
    set_outputs(outputs, Path(output_path) if output_path else None)
