"""``find-issue``: find the issue referenced by a branch name."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping

import httpx

from boardflow.branch import extract_issue_number
from boardflow.cli.context import open_context
from boardflow.contracts.config import require_env
from boardflow.github.mapper import parse_issue
from boardflow.retry import Sleeper

logger = logging.getLogger(__name__)

TITLE = "Find Issue"

_EMPTY_OUTPUTS = {"issue": "", "issue_number": "", "issue_node_id": ""}


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["BRANCH", "REGEX"], env)

    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        number = extract_issue_number(params["BRANCH"], params["REGEX"])
        if not number:
            ctx.set_outputs(_EMPTY_OUTPUTS)
            return

        owner, repo = ctx.repository()
        payload = await ctx.retry(lambda: ctx.client.get_issue(owner, repo, number), f"fetching issue #{number}")
        if payload is None:
            logger.info("No issue found for #%d", number)
            ctx.set_outputs(_EMPTY_OUTPUTS)
            return

        issue = parse_issue(payload)
        logger.info("Found issue #%d", issue.number)
        ctx.set_outputs(
            {
                "issue": json.dumps(payload),
                "issue_number": str(issue.number),
                "issue_node_id": issue.node_id,
            }
        )
