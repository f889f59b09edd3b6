"""``staging-to-production``: relabel closed staging issues as production."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import httpx

from boardflow.cli.context import CommandContext, open_context
from boardflow.contracts.exceptions import BoardflowError
from boardflow.github.mapper import parse_issue
from boardflow.retry import Sleeper

logger = logging.getLogger(__name__)

TITLE = "Staging to Production"


async def _relabel(ctx: CommandContext, owner: str, repo: str, number: int, staging: str, production: str) -> None:
    try:
        await ctx.retry(
            lambda: ctx.client.remove_label(owner, repo, number, staging),
            f'removing "{staging}" label from issue #{number}',
        )
        logger.info('Removed "%s" label from issue #%d', staging, number)
    except BoardflowError as exc:
        logger.warning('Could not remove "%s" label from issue #%d: %s', staging, number, exc)

    await ctx.retry(
        lambda: ctx.client.add_labels(owner, repo, number, [production]),
        f"adding labels to issue #{number}",
    )
    logger.info('Added "%s" label to issue #%d', production, number)


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    staging = env.get("STAGING_LABEL") or "staging"
    production = env.get("PRODUCTION_LABEL") or "production"

    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        owner, repo = ctx.repository()
        logger.info("Using staging label: '%s', production label: '%s'", staging, production)

        payloads = await ctx.retry(
            lambda: ctx.client.list_issues(owner, repo, state="closed", labels=staging),
            f"fetching closed issues with {staging} label",
        )
        issues = [parse_issue(payload) for payload in payloads]
        logger.info("Found %d closed issues with '%s' label", len(issues), staging)
        if not issues:
            logger.info("No issues to process")
            return

        processed = 0
        for issue in issues:
            try:
                await _relabel(ctx, owner, repo, issue.number, staging, production)
            except BoardflowError as exc:
                logger.warning("Failed to process issue #%d: %s", issue.number, exc)
                continue
            processed += 1

        logger.info("Processed %d/%d issues", processed, len(issues))
