"""``add-domain``: set the ``Domain`` single-select field on an issue's item."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import httpx

from boardflow.cli.context import CommandContext, open_context
from boardflow.contracts.config import require_env
from boardflow.contracts.exceptions import ConfigError, ItemNotFoundError
from boardflow.github.mapper import parse_issue
from boardflow.retry import Sleeper

logger = logging.getLogger(__name__)

TITLE = "Add Domain"

DOMAIN_FIELD = "Domain"


async def _issue_from_event(ctx: CommandContext) -> tuple[int, str]:
    issue = ctx.load_event().get("issue")
    number = issue.get("number") if isinstance(issue, dict) else None
    if not isinstance(number, int):
        raise ConfigError("No issue number found in event payload and no ITEM_ID provided")

    owner, repo = ctx.repository()
    payload = await ctx.retry(lambda: ctx.client.get_issue(owner, repo, number), "fetching issue data")
    if payload is None:
        raise ItemNotFoundError(f"Issue #{number} not found in {owner}/{repo}")
    return number, parse_issue(payload).node_id


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["PROJECT_ID", "DOMAIN"], env)
    project_id = params["PROJECT_ID"]
    domain = params["DOMAIN"]
    provided_item_id = env.get("ITEM_ID")

    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        number: int | None = None
        content_id: str | None = None
        if not provided_item_id:
            number, content_id = await _issue_from_event(ctx)

        resolved = await ctx.fields.resolve_field(project_id, DOMAIN_FIELD, domain)
        if resolved.option_id is None:
            raise ConfigError(f"Field '{DOMAIN_FIELD}' in project {project_id} is not a single-select field")

        if provided_item_id:
            item_id = provided_item_id
            logger.info("Using provided item ID: %s", item_id)
        else:
            assert content_id is not None
            item = await ctx.items.find_issue_item(content_id, project_id)
            if item is None:
                raise ItemNotFoundError(f"Project item for issue #{number} not found in project {project_id}")
            item_id = item.id

        await ctx.items.update_single_select(project_id, item_id, resolved.field_id, resolved.option_id)
        target = f"issue #{number}" if number is not None else "project item"
        logger.info('Set Domain field to "%s" for %s', domain, target)
