"""Mapping functions between GitHub API payloads and boardflow models."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from boardflow.contracts.exceptions import ProviderError
from boardflow.contracts.models import BoardItem, Issue, ItemPage, ProjectField


def parse_project_fields(data: dict[str, Any]) -> list[ProjectField] | None:
    """Build the ordered field list from a ``PROJECT_FIELDS`` response.

    Returns ``None`` when the node is not a project. Field kinds the query
    does not select (iteration, etc.) come back as empty objects and are
    skipped.
    """
    node = data.get("node")
    if not isinstance(node, dict) or "fields" not in node:
        return None

    fields: list[ProjectField] = []
    for raw in _nodes(node.get("fields")):
        if not raw.get("id"):
            continue
        try:
            fields.append(ProjectField.model_validate(raw))
        except ValidationError as exc:
            raise ProviderError(f"Invalid project field payload: {exc}") from exc
    return fields


def parse_item_page(content: dict[str, Any]) -> ItemPage:
    """Build an :class:`ItemPage` from an issue or pull request node.

    ``pageInfo`` is optional; without it the page is treated as the last.
    """
    project_items = content.get("projectItems")
    if not isinstance(project_items, dict):
        raise ProviderError("Missing/invalid object at key 'projectItems'")

    items = [parse_board_item(node) for node in _nodes(project_items)]
    page_info = project_items.get("pageInfo") or {}
    return ItemPage(
        items=items,
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor"),
    )


def parse_board_item(node: dict[str, Any]) -> BoardItem:
    project = node.get("project")
    project_id = project.get("id") if isinstance(project, dict) else None
    try:
        return BoardItem(id=node.get("id"), project_id=project_id)
    except ValidationError as exc:
        raise ProviderError(f"Invalid project item payload: {exc}") from exc


def parse_issue(payload: dict[str, Any]) -> Issue:
    labels = [label["name"] for label in payload.get("labels", []) if isinstance(label, dict) and "name" in label]
    try:
        return Issue(
            number=payload.get("number"),
            node_id=payload.get("node_id"),
            title=payload.get("title") or "",
            state=payload.get("state") or "open",
            labels=labels,
            raw=payload,
        )
    except ValidationError as exc:
        raise ProviderError(f"Invalid issue payload: {exc}") from exc


def require_dict(data: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Walk ``keys`` into nested objects, raising ``ProviderError`` on a bad shape."""
    current: Any = data
    for key in keys:
        current = current.get(key) if isinstance(current, dict) else None
        if not isinstance(current, dict):
            raise ProviderError(f"Missing/invalid object at key '{key}'")
    return current


def require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ProviderError(f"Missing/invalid string at key '{key}'")
    return value


def _nodes(connection: Any) -> list[dict[str, Any]]:
    if not isinstance(connection, dict):
        return []
    return [node for node in connection.get("nodes") or [] if isinstance(node, dict)]
