"""Shared test fixtures for boardflow tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from tests.fakes.github import FakeGitHub, date_field, status_field


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fake_github() -> FakeGitHub:
    """A fake with one project (Status + date fields) and one issue on it."""
    fake = FakeGitHub()
    fake.add_project(
        "PVT_1",
        fields=[
            {"id": "F_title", "name": "Title", "dataType": "TITLE"},
            status_field(),
            {"id": "F_domain", "name": "Domain", "options": [{"id": "D_web", "name": "Web"}]},
            date_field(),
            {},  # iteration field, not selected by the query
        ],
    )
    fake.add_content("I_1", "Issue")
    fake.add_membership("PVT_1", "I_1", item_id="PVTI_issue1")
    return fake


@pytest.fixture(autouse=True)
def _restore_boardflow_logger() -> Iterator[None]:
    logger = logging.getLogger("boardflow")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
