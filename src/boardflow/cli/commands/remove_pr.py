"""``remove-pr``: remove a pull request's item from a project."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import httpx

from boardflow.cli.context import open_context
from boardflow.contracts.config import require_env
from boardflow.retry import Sleeper

logger = logging.getLogger(__name__)

TITLE = "Remove PR from Project"


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["PROJECT_ID", "PR_NODE_ID"], env)
    project_id = params["PROJECT_ID"]

    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        logger.info("Looking for PR with node_id %s in project %s", params["PR_NODE_ID"], project_id)
        item = await ctx.items.find_pull_request_item(params["PR_NODE_ID"], project_id)
        if item is None:
            logger.info("PR is not in project %s - nothing to remove", project_id)
            ctx.set_outputs({"removed": False, "pr-number": "", "item-id": ""})
            return

        await ctx.items.remove_item(project_id, item.id)
        logger.info("Removed PR from project %s", project_id)
        ctx.set_outputs({"removed": True, "pr-number": env.get("PR_NUMBER", ""), "item-id": item.id})
