"""``add-to-project``: add an issue or pull request to a project."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

import httpx

from boardflow.cli.context import open_context
from boardflow.contracts.config import require_env
from boardflow.retry import Sleeper

TITLE = "Add to Project"


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["PROJECT_ID", "CONTENT_ID"], env)
    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        item_id = await ctx.items.add_item(params["PROJECT_ID"], params["CONTENT_ID"])
        ctx.set_outputs({"itemId": item_id})
