"""Project field and option resolution."""

from __future__ import annotations

import logging

from boardflow.contracts.config import RetryPolicy
from boardflow.contracts.exceptions import FieldNotFoundError, OptionNotFoundError
from boardflow.contracts.models import ProjectField, ResolvedField
from boardflow.github import queries
from boardflow.github.client import GitHubClient
from boardflow.github.mapper import parse_project_fields
from boardflow.retry import RetryExecutor

logger = logging.getLogger(__name__)

# Only the first page of fields is fetched.
FIELDS_PAGE_SIZE = 50


class FieldResolver:
    """Resolves project field ids (and single-select option ids) by exact name."""

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

    async def fetch_fields(self, project_id: str) -> list[ProjectField]:
        data = await self._executor.execute(
            lambda: self._client.graphql(queries.PROJECT_FIELDS, {"projectId": project_id}),
            self._retry.for_operation("finding project fields"),
        )
        fields = parse_project_fields(data)
        if fields is None:
            logger.warning("Could not resolve project fields for %s", project_id)
            return []
        if len(fields) >= FIELDS_PAGE_SIZE:
            logger.warning(
                "Project %s returned %d fields; fields beyond the first %d are not searched",
                project_id,
                len(fields),
                FIELDS_PAGE_SIZE,
            )
        return fields

    async def resolve_field(
        self,
        project_id: str,
        field_name: str,
        option_name: str | None = None,
        *,
        data_type: str | None = None,
    ) -> ResolvedField:
        """Find ``field_name`` on the project and optionally one of its options.

        Matching is exact and case-sensitive; the first match wins. When
        ``data_type`` is given only fields of that type (e.g. ``"DATE"``)
        are considered.

        Raises:
            FieldNotFoundError: No field with that name (and type).
            OptionNotFoundError: The field has options but none is named
                ``option_name``.
        """
        fields = await self.fetch_fields(project_id)
        field = next(
            (f for f in fields if f.name == field_name and (data_type is None or f.data_type == data_type)),
            None,
        )
        if field is None:
            raise FieldNotFoundError(field_name, project_id=project_id)

        option_id: str | None = None
        if option_name and field.is_single_select:
            option = next((o for o in field.options if o.name == option_name), None)
            if option is None:
                raise OptionNotFoundError(option_name, field_name=field_name)
            option_id = option.id

        if option_id:
            logger.info(
                "Found field '%s' (ID: %s) with option '%s' (ID: %s)", field_name, field.id, option_name, option_id
            )
        else:
            logger.info("Found field '%s' (ID: %s)", field_name, field.id)
        return ResolvedField(field_id=field.id, option_id=option_id, field=field)
