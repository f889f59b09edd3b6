"""``move-issue``: set a single-select value (usually Status) on an issue's item."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import httpx

from boardflow.cli.context import open_context
from boardflow.contracts.config import require_env
from boardflow.retry import Sleeper

logger = logging.getLogger(__name__)

TITLE = "Move Issue"


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["PROJECT_ID", "ISSUE_NODE_ID", "FIELD_ID", "OPTION_ID"], env)
    project_id = params["PROJECT_ID"]
    issue_node_id = params["ISSUE_NODE_ID"]
    label = f" #{env['ISSUE_NUMBER']}" if env.get("ISSUE_NUMBER") else ""

    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        item = await ctx.items.find_issue_item(issue_node_id, project_id)
        if item is None:
            logger.warning(
                "No project item found for issue%s with node_id %s in project %s "
                "(issue not in project, or node id mismatch)",
                label,
                issue_node_id,
                project_id,
            )
            return

        await ctx.items.update_single_select(project_id, item.id, params["FIELD_ID"], params["OPTION_ID"])
        logger.info("Moved issue%s to new status", label)
