"""Async GitHub API client built on httpx."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from boardflow.contracts.config import DEFAULT_API_URL, ActionSettings
from boardflow.contracts.exceptions import AuthenticationError, ProviderError

logger = logging.getLogger(__name__)


class GitHubClient:
    """GraphQL and REST access to the GitHub API.

    Use as an async context manager so the underlying connection pool is
    opened and closed with the command::

        async with GitHubClient(token=token) as client:
            data = await client.graphql(PROJECT_FIELDS, {"projectId": project_id})

    The client does not retry; callers wrap calls in a
    :class:`~boardflow.retry.RetryExecutor`.
    """

    def __init__(
        self,
        *,
        token: str,
        api_url: str = DEFAULT_API_URL,
        graphql_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise AuthenticationError("GitHub token is required")
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._graphql_url = graphql_url or f"{self._api_url}/graphql"
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls, settings: ActionSettings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> GitHubClient:
        return cls(
            token=settings.token,
            api_url=settings.api_url,
            graphql_url=settings.graphql_url,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> GitHubClient:
        self._client = httpx.AsyncClient(
            base_url=self._api_url,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": "boardflow",
            },
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # GraphQL
    # ------------------------------------------------------------------

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL operation and return its ``data`` object.

        Raises:
            ProviderError: On transport/HTTP failure, a GraphQL ``errors``
                array, or a response without ``data``.
        """
        response = await self._send("POST", self._graphql_url, json={"query": query, "variables": variables or {}})
        payload = self._json(response)
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            messages = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            raise ProviderError(f"GraphQL returned errors: {messages}")

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise ProviderError("GraphQL response missing data payload")
        return data

    # ------------------------------------------------------------------
    # REST (issues and labels)
    # ------------------------------------------------------------------

    async def get_issue(self, owner: str, repo: str, number: int) -> dict[str, Any] | None:
        """Fetch one issue; ``None`` if it does not exist."""
        response = await self._send("GET", f"/repos/{owner}/{repo}/issues/{number}", allow_status={404})
        if response.status_code == 404:
            return None
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise ProviderError(f"Unexpected issue payload for #{number}")
        return payload

    async def list_issues(
        self,
        owner: str,
        repo: str,
        *,
        state: str = "open",
        labels: str | None = None,
        per_page: int = 100,
    ) -> list[dict[str, Any]]:
        """List repository issues, following ``Link: rel="next"`` pages."""
        params: dict[str, Any] = {"state": state, "per_page": per_page}
        if labels:
            params["labels"] = labels

        issues: list[dict[str, Any]] = []
        url: str | None = f"/repos/{owner}/{repo}/issues"
        request_kwargs: dict[str, Any] = {"params": params}
        while url is not None:
            response = await self._send("GET", url, **request_kwargs)
            page = self._json(response)
            if not isinstance(page, list):
                raise ProviderError("Unexpected issue list payload")
            issues.extend(item for item in page if isinstance(item, dict))
            url = response.links.get("next", {}).get("url")
            # Next links carry their own query string.
            request_kwargs = {}
        return issues

    async def remove_label(self, owner: str, repo: str, number: int, name: str) -> None:
        await self._send("DELETE", f"/repos/{owner}/{repo}/issues/{number}/labels/{quote(name, safe='')}")

    async def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        await self._send("POST", f"/repos/{owner}/{repo}/issues/{number}/labels", json={"labels": labels})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ProviderError("Client is not initialized. Use 'async with'.")
        return self._client

    async def _send(
        self,
        method: str,
        url: str,
        *,
        allow_status: set[int] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        client = self._require_client()
        logger.debug("%s %s", method, url)
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ProviderError(f"{method} {url} failed: {exc}") from exc

        if allow_status and response.status_code in allow_status:
            return response
        if response.status_code == 401:
            raise AuthenticationError("GitHub rejected the token (401 Unauthorized)")
        if response.is_error:
            raise ProviderError(f"{method} {url} returned HTTP {response.status_code}: {response.text[:200]}")
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError("GitHub returned a non-JSON response") from exc
