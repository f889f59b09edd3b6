"""Records for project-board data fetched from GitHub.

These models are validated at the boundary: every GraphQL/REST payload is
turned into one of these before the rest of the package looks at it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# ------------------------------------------------------------------
# Project fields
# ------------------------------------------------------------------


class FieldOption(BaseModel):
    """One permitted value of a single-select field."""

    id: str
    name: str


class ProjectField(BaseModel):
    """A named project field.

    Single-select fields carry ``options``; scalar fields (``DATE``,
    ``TEXT``, ``NUMBER`` ...) carry ``data_type`` and no options.
    """

    id: str
    name: str
    data_type: str | None = Field(default=None, alias="dataType")
    options: list[FieldOption] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @property
    def is_single_select(self) -> bool:
        return bool(self.options)


class ResolvedField(BaseModel):
    """A project field (and optionally one of its options) resolved by name."""

    field_id: str
    option_id: str | None = None
    field: ProjectField


# ------------------------------------------------------------------
# Project items
# ------------------------------------------------------------------


class BoardItem(BaseModel):
    """Membership of one issue or pull request on one project board."""

    id: str
    project_id: str


class ItemPage(BaseModel):
    """One page of project memberships for a content object."""

    items: list[BoardItem] = Field(default_factory=list)
    has_next_page: bool = False
    end_cursor: str | None = None


# ------------------------------------------------------------------
# Repository issues (REST)
# ------------------------------------------------------------------


class Issue(BaseModel):
    """Subset of a REST issue payload."""

    number: int
    node_id: str
    title: str = ""
    state: str = "open"
    labels: list[str] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
