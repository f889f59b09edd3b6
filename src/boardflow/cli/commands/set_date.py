"""``set-date``: set a date field on an issue's item."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone

import httpx

from boardflow.cli.context import open_context
from boardflow.contracts.config import require_env
from boardflow.contracts.exceptions import ConfigError
from boardflow.retry import Sleeper

logger = logging.getLogger(__name__)

TITLE = "Set Date"


def parse_date_value(raw: str | None) -> date:
    """Parse ``DATE_VALUE`` (``YYYY-MM-DD``); default to today in UTC."""
    if not raw:
        return datetime.now(timezone.utc).date()
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ConfigError(f"DATE_VALUE must be an ISO date (YYYY-MM-DD), got {raw!r}") from exc


async def run(
    env: Mapping[str, str],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> None:
    params = require_env(["PROJECT_ID", "FIELD_NAME", "ISSUE_NODE_ID"], env)
    project_id = params["PROJECT_ID"]
    field_name = params["FIELD_NAME"]
    value = parse_date_value(env.get("DATE_VALUE"))

    async with open_context(env, transport=transport, sleep=sleep) as ctx:
        resolved = await ctx.fields.resolve_field(project_id, field_name, data_type="DATE")

        item = await ctx.items.find_issue_item(params["ISSUE_NODE_ID"], project_id)
        if item is None:
            logger.warning("Issue not found in project %s", project_id)
            return

        await ctx.items.update_date(project_id, item.id, resolved.field_id, value)
        logger.info('Field "%s" updated with date: %s', field_name, value.isoformat())
        ctx.set_outputs({"fieldId": resolved.field_id, "date": value.isoformat()})
