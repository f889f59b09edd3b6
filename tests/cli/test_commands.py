"""End-to-end tests for the per-event commands against the GitHub fake."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from boardflow.cli.commands import (
    add_domain,
    add_to_project,
    find_fields,
    find_issue,
    move_issue,
    read_config,
    remove_pr,
    set_date,
    staging_to_production,
)
from boardflow.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    FieldNotFoundError,
    ItemNotFoundError,
    OptionNotFoundError,
)
from tests.conftest import SleepRecorder
from tests.fakes.github import FakeGitHub
from tests.fakes.outputs import read_outputs


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "github_output"


@pytest.fixture
def base_env(output_file: Path) -> dict[str, str]:
    return {
        "GITHUB_TOKEN": "ghs_test",
        "GITHUB_REPOSITORY": "acme/repo",
        "GITHUB_OUTPUT": str(output_file),
    }


class TestFindFields:
    @pytest.mark.asyncio
    async def test_outputs_field_and_option(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        env = {**base_env, "PROJECT_ID": "PVT_1", "FIELD_NAME": "Status", "OPTION_NAME": "Done"}

        await find_fields.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert read_outputs(output_file) == {"fieldId": "F_status", "optionId": "F_status_opt_2"}

    @pytest.mark.asyncio
    async def test_missing_inputs(self, base_env: dict[str, str]) -> None:
        with pytest.raises(ConfigError, match="FIELD_NAME, OPTION_NAME"):
            await find_fields.run({**base_env, "PROJECT_ID": "PVT_1"})

    @pytest.mark.asyncio
    async def test_missing_token(self, fake_github: FakeGitHub, output_file: Path) -> None:
        env = {"PROJECT_ID": "PVT_1", "FIELD_NAME": "Status", "OPTION_NAME": "Done", "GITHUB_OUTPUT": str(output_file)}

        with pytest.raises(AuthenticationError):
            await find_fields.run(env, transport=fake_github.transport())

    @pytest.mark.asyncio
    async def test_token_fallback(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        env = {key: value for key, value in base_env.items() if key != "GITHUB_TOKEN"}
        env.update({"TOKEN": "pat_123", "PROJECT_ID": "PVT_1", "FIELD_NAME": "Status", "OPTION_NAME": "Done"})

        await find_fields.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.requests[0].headers["Authorization"] == "Bearer pat_123"
        assert read_outputs(output_file)["fieldId"] == "F_status"

    @pytest.mark.asyncio
    async def test_unknown_option(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        env = {**base_env, "PROJECT_ID": "PVT_1", "FIELD_NAME": "Status", "OPTION_NAME": "Blocked"}

        with pytest.raises(OptionNotFoundError):
            await find_fields.run(env, transport=fake_github.transport(), sleep=sleeps)
        assert read_outputs(output_file) == {}


class TestAddToProject:
    @pytest.mark.asyncio
    async def test_outputs_item_id(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        fake_github.add_content("PR_9", "PullRequest")
        env = {**base_env, "PROJECT_ID": "PVT_1", "CONTENT_ID": "PR_9"}

        await add_to_project.run(env, transport=fake_github.transport(), sleep=sleeps)

        item_id = read_outputs(output_file)["itemId"]
        assert fake_github.memberships("PR_9") == [(item_id, "PVT_1")]


class TestMoveIssue:
    @pytest.mark.asyncio
    async def test_updates_status(
        self, fake_github: FakeGitHub, base_env: dict[str, str], sleeps: SleepRecorder
    ) -> None:
        env = {
            **base_env,
            "PROJECT_ID": "PVT_1",
            "ISSUE_NODE_ID": "I_1",
            "ISSUE_NUMBER": "1",
            "FIELD_ID": "F_status",
            "OPTION_ID": "F_status_opt_1",
        }

        await move_issue.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.projects["PVT_1"].field_values == {("PVTI_issue1", "F_status"): "F_status_opt_1"}

    @pytest.mark.asyncio
    async def test_issue_not_on_project_is_a_warning(
        self,
        fake_github: FakeGitHub,
        base_env: dict[str, str],
        sleeps: SleepRecorder,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fake_github.add_content("I_2", "Issue")
        env = {
            **base_env,
            "PROJECT_ID": "PVT_1",
            "ISSUE_NODE_ID": "I_2",
            "FIELD_ID": "F_status",
            "OPTION_ID": "F_status_opt_1",
        }

        await move_issue.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.projects["PVT_1"].field_values == {}
        assert "No project item found for issue with node_id I_2" in caplog.text


class TestRemovePr:
    @pytest.mark.asyncio
    async def test_removes_membership(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        fake_github.add_content("PR_1", "PullRequest")
        fake_github.add_membership("PVT_1", "PR_1", item_id="PVTI_pr")
        env = {**base_env, "PROJECT_ID": "PVT_1", "PR_NODE_ID": "PR_1", "PR_NUMBER": "12"}

        await remove_pr.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.memberships("PR_1") == []
        assert read_outputs(output_file) == {"removed": "true", "pr-number": "12", "item-id": "PVTI_pr"}

    @pytest.mark.asyncio
    async def test_not_on_project(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        fake_github.add_content("PR_1", "PullRequest")
        env = {**base_env, "PROJECT_ID": "PVT_1", "PR_NODE_ID": "PR_1"}

        await remove_pr.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert read_outputs(output_file) == {"removed": "false", "pr-number": "", "item-id": ""}


class TestFindIssue:
    @pytest.mark.asyncio
    async def test_outputs_issue(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        fake_github.add_issue(42, "I_42")
        env = {**base_env, "BRANCH": "refs/heads/issue-42-fix-login", "REGEX": r"issue-(\d+)"}

        await find_issue.run(env, transport=fake_github.transport(), sleep=sleeps)

        outputs = read_outputs(output_file)
        assert outputs["issue_number"] == "42"
        assert outputs["issue_node_id"] == "I_42"
        assert json.loads(outputs["issue"])["title"] == "Issue 42"

    @pytest.mark.asyncio
    async def test_branch_without_issue(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        env = {**base_env, "BRANCH": "main", "REGEX": r"issue-(\d+)"}

        await find_issue.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert read_outputs(output_file) == {"issue": "", "issue_number": "", "issue_node_id": ""}
        assert fake_github.requests == []

    @pytest.mark.asyncio
    async def test_issue_zero_means_no_issue(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        fake_github.add_issue(0, "I_0")
        env = {**base_env, "BRANCH": "issue-0-cleanup", "REGEX": r"issue-(\d+)"}

        await find_issue.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert read_outputs(output_file) == {"issue": "", "issue_number": "", "issue_node_id": ""}
        assert fake_github.requests == []

    @pytest.mark.asyncio
    async def test_missing_issue_is_not_retried(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        env = {**base_env, "BRANCH": "issue-404", "REGEX": r"issue-(\d+)"}

        await find_issue.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert read_outputs(output_file)["issue_number"] == ""
        assert len(fake_github.requests) == 1
        assert sleeps.calls == []


class TestAddDomain:
    @pytest.fixture
    def event_env(self, tmp_path: Path, base_env: dict[str, str], fake_github: FakeGitHub) -> dict[str, str]:
        fake_github.add_issue(5, "I_1")
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps({"action": "opened", "issue": {"number": 5}}), encoding="utf-8")
        return {**base_env, "GITHUB_EVENT_PATH": str(event_path), "PROJECT_ID": "PVT_1", "DOMAIN": "Web"}

    @pytest.mark.asyncio
    async def test_sets_domain_from_event(
        self, fake_github: FakeGitHub, event_env: dict[str, str], sleeps: SleepRecorder
    ) -> None:
        await add_domain.run(event_env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.projects["PVT_1"].field_values == {("PVTI_issue1", "F_domain"): "D_web"}

    @pytest.mark.asyncio
    async def test_uses_provided_item_id(
        self, fake_github: FakeGitHub, base_env: dict[str, str], sleeps: SleepRecorder
    ) -> None:
        env = {**base_env, "PROJECT_ID": "PVT_1", "DOMAIN": "Web", "ITEM_ID": "PVTI_issue1"}

        await add_domain.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.projects["PVT_1"].field_values == {("PVTI_issue1", "F_domain"): "D_web"}
        assert all(r.url.path.endswith("/graphql") for r in fake_github.requests)

    @pytest.mark.asyncio
    async def test_unknown_domain(
        self, fake_github: FakeGitHub, event_env: dict[str, str], sleeps: SleepRecorder
    ) -> None:
        with pytest.raises(OptionNotFoundError, match="Option 'Mobile' not found in field 'Domain'"):
            await add_domain.run({**event_env, "DOMAIN": "Mobile"}, transport=fake_github.transport(), sleep=sleeps)

    @pytest.mark.asyncio
    async def test_issue_not_on_project(
        self, fake_github: FakeGitHub, event_env: dict[str, str], sleeps: SleepRecorder
    ) -> None:
        fake_github.projects["PVT_1"].items.clear()

        with pytest.raises(ItemNotFoundError, match="issue #5"):
            await add_domain.run(event_env, transport=fake_github.transport(), sleep=sleeps)

    @pytest.mark.asyncio
    async def test_event_without_issue(
        self, fake_github: FakeGitHub, base_env: dict[str, str], tmp_path: Path, sleeps: SleepRecorder
    ) -> None:
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps({"action": "opened"}), encoding="utf-8")
        env = {**base_env, "GITHUB_EVENT_PATH": str(event_path), "PROJECT_ID": "PVT_1", "DOMAIN": "Web"}

        with pytest.raises(ConfigError, match="No issue number found"):
            await add_domain.run(env, transport=fake_github.transport(), sleep=sleeps)


class TestSetDate:
    @pytest.mark.asyncio
    async def test_sets_given_date(
        self, fake_github: FakeGitHub, base_env: dict[str, str], output_file: Path, sleeps: SleepRecorder
    ) -> None:
        env = {
            **base_env,
            "PROJECT_ID": "PVT_1",
            "FIELD_NAME": "Start date",
            "ISSUE_NODE_ID": "I_1",
            "DATE_VALUE": "2024-05-01",
        }

        await set_date.run(env, transport=fake_github.transport(), sleep=sleeps)

        assert fake_github.projects["PVT_1"].field_values == {("PVTI_issue1", "F_date"): "2024-05-01"}
        assert read_outputs(output_file) == {"fieldId": "F_date", "date": "2024-05-01"}

    @pytest.mark.asyncio
    async def test_field_must_be_a_date(
        self, fake_github: FakeGitHub, base_env: dict[str, str], sleeps: SleepRecorder
    ) -> None:
        env = {**base_env, "PROJECT_ID": "PVT_1", "FIELD_NAME": "Status", "ISSUE_NODE_ID": "I_1"}

        with pytest.raises(FieldNotFoundError):
            await set_date.run(env, transport=fake_github.transport(), sleep=sleeps)

    def test_parse_date_value(self) -> None:
        assert set_date.parse_date_value("2024-02-29").isoformat() == "2024-02-29"
        assert set_date.parse_date_value(None) is not None
        with pytest.raises(ConfigError, match="DATE_VALUE"):
            set_date.parse_date_value("29/02/2024")


class TestReadConfig:
    @pytest.mark.asyncio
    async def test_reads_config_file(self, tmp_path: Path, output_file: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"PROJECT_ID": "PVT_cfg", "DOMAIN": "Api"}), encoding="utf-8")

        await read_config.run({"CONFIG_PATH": str(config_path), "GITHUB_OUTPUT": str(output_file)})

        assert read_outputs(output_file) == {"project_id": "PVT_cfg", "domain": "Api"}

    @pytest.mark.asyncio
    async def test_input_without_domain(self, tmp_path: Path, output_file: Path) -> None:
        env = {"PROJECT_ID": "PVT_in", "CONFIG_PATH": str(tmp_path / "none.json"), "GITHUB_OUTPUT": str(output_file)}

        await read_config.run(env)

        assert read_outputs(output_file) == {"project_id": "PVT_in"}


class TestStagingToProduction:
    @pytest.mark.asyncio
    async def test_relabels_closed_staging_issues(
        self, base_env: dict[str, str], sleeps: SleepRecorder, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("INFO", logger="boardflow")
        fake = FakeGitHub(rest_page_size=2)
        fake.add_issue(1, "I_1", labels=["staging", "bug"], state="closed")
        fake.add_issue(2, "I_2", labels=["staging"], state="closed")
        fake.add_issue(3, "I_3", labels=["staging"], state="closed")
        fake.add_issue(4, "I_4", labels=["staging"], state="open")

        await staging_to_production.run(base_env, transport=fake.transport(), sleep=sleeps)

        for number in (1, 2, 3):
            names = [label["name"] for label in fake.issues[number]["labels"]]
            assert "staging" not in names
            assert "production" in names
        assert [label["name"] for label in fake.issues[4]["labels"]] == ["staging"]
        assert "Processed 3/3 issues" in caplog.text

    @pytest.mark.asyncio
    async def test_failed_label_removal_still_adds_production(
        self, base_env: dict[str, str], sleeps: SleepRecorder, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("INFO", logger="boardflow")
        fake = FakeGitHub()
        fake.add_issue(1, "I_1", labels=["staging"], state="closed")

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "DELETE":
                return httpx.Response(404, json={"message": "Label does not exist"})
            return fake.handler(request)

        env = {**base_env, "RETRY_MAX_ATTEMPTS": "2"}
        await staging_to_production.run(env, transport=httpx.MockTransport(handler), sleep=sleeps)

        assert [label["name"] for label in fake.issues[1]["labels"]] == ["staging", "production"]
        assert 'Could not remove "staging" label from issue #1' in caplog.text
        assert "Processed 1/1 issues" in caplog.text
        assert sleeps.calls == [1.0]

    @pytest.mark.asyncio
    async def test_failed_issue_is_skipped(
        self, base_env: dict[str, str], sleeps: SleepRecorder, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("INFO", logger="boardflow")
        fake = FakeGitHub()
        fake.add_issue(1, "I_1", labels=["staging"], state="closed")
        fake.add_issue(2, "I_2", labels=["staging"], state="closed")

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST" and request.url.path.endswith("/issues/1/labels"):
                return httpx.Response(500, text="boom")
            return fake.handler(request)

        env = {**base_env, "RETRY_MAX_ATTEMPTS": "1"}
        await staging_to_production.run(env, transport=httpx.MockTransport(handler), sleep=sleeps)

        assert [label["name"] for label in fake.issues[2]["labels"]] == ["production"]
        assert "Failed to process issue #1" in caplog.text
        assert "Processed 1/2 issues" in caplog.text

    @pytest.mark.asyncio
    async def test_label_names_with_slashes(self, base_env: dict[str, str], sleeps: SleepRecorder) -> None:
        fake = FakeGitHub(rest_page_size=1)
        fake.add_issue(1, "I_1", labels=["env/staging"], state="closed")
        fake.add_issue(2, "I_2", labels=["env/staging"], state="closed")
        fake.add_issue(3, "I_3", labels=["env/staging"], state="open")
        env = {**base_env, "STAGING_LABEL": "env/staging", "PRODUCTION_LABEL": "env/production"}

        await staging_to_production.run(env, transport=fake.transport(), sleep=sleeps)

        assert [label["name"] for label in fake.issues[1]["labels"]] == ["env/production"]
        assert [label["name"] for label in fake.issues[2]["labels"]] == ["env/production"]
        assert [label["name"] for label in fake.issues[3]["labels"]] == ["env/staging"]
        assert sleeps.calls == []

    @pytest.mark.asyncio
    async def test_custom_labels(self, base_env: dict[str, str], sleeps: SleepRecorder) -> None:
        fake = FakeGitHub()
        fake.add_issue(1, "I_1", labels=["qa"], state="closed")
        env = {**base_env, "STAGING_LABEL": "qa", "PRODUCTION_LABEL": "live"}

        await staging_to_production.run(env, transport=fake.transport(), sleep=sleeps)

        assert [label["name"] for label in fake.issues[1]["labels"]] == ["live"]
