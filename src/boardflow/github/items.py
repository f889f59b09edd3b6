"""Locating, adding, updating and removing project items."""

from __future__ import annotations

import logging
from datetime import date

from boardflow.contracts.config import RetryPolicy
from boardflow.contracts.models import BoardItem, ItemPage
from boardflow.github import queries
from boardflow.github.client import GitHubClient
from boardflow.github.mapper import parse_item_page, require_dict, require_str
from boardflow.retry import RetryExecutor

logger = logging.getLogger(__name__)


class ItemLocator:
    """Finds and mutates the project item that represents an issue or PR.

    A content object has at most one item per project but may sit on several
    projects, so lookups filter the content's memberships by project id.
    Every remote call goes through the retry executor on its own.
    """

    def __init__(
        self,
        client: GitHubClient,
        executor: RetryExecutor | None = None,
        *,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._client = client
        self._executor = executor or RetryExecutor()
        self._retry = retry or RetryPolicy()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def find_issue_item(self, issue_node_id: str, project_id: str) -> BoardItem | None:
        """Return the issue's item on ``project_id`` from its first 20 memberships."""
        data = await self._executor.execute(
            lambda: self._client.graphql(queries.ISSUE_PROJECT_ITEMS, {"issueNodeId": issue_node_id}),
            self._retry.for_operation("finding issue project items"),
        )
        issue = data.get("issue")
        item = _match(parse_item_page(issue), project_id) if isinstance(issue, dict) and issue else None

        if item is not None:
            logger.info("Found project item %s for issue in project %s", item.id, project_id)
        else:
            logger.warning("No project item found for issue %s in project %s", issue_node_id, project_id)
        return item

    async def find_pull_request_item(self, pr_node_id: str, project_id: str) -> BoardItem | None:
        """Return the PR's item on ``project_id``, paging through all memberships."""
        cursor: str | None = None
        item: BoardItem | None = None
        has_next_page = True

        while has_next_page and item is None:
            page = await self._fetch_pull_request_page(pr_node_id, cursor)
            if page is None:
                logger.warning("PR with node ID %s not found", pr_node_id)
                return None
            item = _match(page, project_id)
            has_next_page = page.has_next_page
            cursor = page.end_cursor

        if item is not None:
            logger.info("Found project item %s for PR in project %s", item.id, project_id)
        else:
            logger.warning("No project item found for PR %s in project %s", pr_node_id, project_id)
        return item

    async def _fetch_pull_request_page(self, pr_node_id: str, cursor: str | None) -> ItemPage | None:
        data = await self._executor.execute(
            lambda: self._client.graphql(
                queries.PR_PROJECT_ITEMS_PAGINATED, {"prNodeId": pr_node_id, "cursor": cursor}
            ),
            self._retry.for_operation("finding PR project items"),
        )
        pull_request = data.get("pullRequest")
        if not isinstance(pull_request, dict) or not pull_request:
            return None
        return parse_item_page(pull_request)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_item(self, project_id: str, content_id: str) -> str:
        data = await self._executor.execute(
            lambda: self._client.graphql(queries.ADD_TO_PROJECT, {"projectId": project_id, "contentId": content_id}),
            self._retry.for_operation("adding content to project"),
        )
        item_id = require_str(require_dict(data, "addProjectV2ItemById", "item"), "id")
        logger.info("Added content %s to project %s", content_id, project_id)
        return item_id

    async def update_single_select(self, project_id: str, item_id: str, field_id: str, option_id: str) -> str:
        """Set a single-select value. ``option_id`` is sent as given."""
        data = await self._executor.execute(
            lambda: self._client.graphql(
                queries.UPDATE_PROJECT_FIELD,
                {"projectId": project_id, "itemId": item_id, "fieldId": field_id, "optionId": option_id},
            ),
            self._retry.for_operation("updating project field"),
        )
        return require_str(require_dict(data, "updateProjectV2ItemFieldValue", "projectV2Item"), "id")

    async def update_date(self, project_id: str, item_id: str, field_id: str, value: date | str) -> str:
        date_value = value.isoformat() if isinstance(value, date) else value
        data = await self._executor.execute(
            lambda: self._client.graphql(
                queries.UPDATE_PROJECT_DATE_FIELD,
                {"projectId": project_id, "itemId": item_id, "fieldId": field_id, "dateValue": date_value},
            ),
            self._retry.for_operation("updating date field"),
        )
        return require_str(require_dict(data, "updateProjectV2ItemFieldValue", "projectV2Item"), "id")

    async def remove_item(self, project_id: str, item_id: str) -> str:
        data = await self._executor.execute(
            lambda: self._client.graphql(queries.REMOVE_FROM_PROJECT, {"projectId": project_id, "itemId": item_id}),
            self._retry.for_operation("removing item from project"),
        )
        return require_str(require_dict(data, "deleteProjectV2Item"), "deletedItemId")


def _match(page: ItemPage, project_id: str) -> BoardItem | None:
    return next((item for item in page.items if item.project_id == project_id), None)
