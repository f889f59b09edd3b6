"""``find-fields``: resolve a field id and option id by name."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

import httpx

from boardflow.cli.context import open_context
from boardflow.contracts.config import require_env
from boardflow.retry import Sleeper

TITLE = "Find Fields"


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["PROJECT_ID", "FIELD_NAME", "OPTION_NAME"], env)
    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        resolved = await ctx.fields.resolve_field(params["PROJECT_ID"], params["FIELD_NAME"], params["OPTION_NAME"])
        ctx.set_outputs({"fieldId": resolved.field_id, "optionId": resolved.option_id})
