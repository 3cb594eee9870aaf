"""Tests for action input handling and config loading."""

from __future__ import annotations

import pytest

from cage_actions.config import (
    DEFAULT_API_URL,
    DEFAULT_ISSUE_TITLE,
    AuditConfig,
    DeployConfig,
    boolify,
    get_input,
    parse_list_input,
    parse_repository,
)
from cage_actions.errors import InputError


def _audit_env(**overrides: str) -> dict[str, str]:
    env = {
        "INPUT_REGION": "us-west-2",
        "INPUT_GITHUB-TOKEN": "tok",
        "GITHUB_REPOSITORY": "acme/widgets",
        "INPUT_AUDIT-CONTEXTS": "deploy/api\n",
    }
    env.update(overrides)
    return env


class TestGetInput:
    def test_hyphenated_name(self):
        assert get_input("issue-title", {"INPUT_ISSUE-TITLE": " My title "}) == "My title"

    def test_spaces_become_underscores(self):
        assert get_input("my input", {"INPUT_MY_INPUT": "x"}) == "x"

    def test_missing_is_empty(self):
        assert get_input("region", {}) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("true", True),
        ("yes", True),
        ("1", True),
        ("", False),
        ("false", False),
        ("FALSE", False),
        ("0", False),
        ("undefined", False),
        ("Null", False),
    ],
)
def test_boolify(value, expected):
    assert boolify(value) is expected


class TestParseListInput:
    def test_trims_and_drops_blanks(self):
        assert parse_list_input("  a  \n\n b\n") == ["a", "b"]

    def test_crlf(self):
        assert parse_list_input("a\r\nb\r\n") == ["a", "b"]

    def test_empty(self):
        assert parse_list_input("") == []


class TestParseRepository:
    def test_owner_and_repo(self):
        assert parse_repository("acme/widgets") == ("acme", "widgets")

    @pytest.mark.parametrize("value", [None, "", "acme", "/widgets"])
    def test_invalid(self, value):
        with pytest.raises(InputError, match="GITHUB_REPOSITORY"):
            parse_repository(value)


class TestAuditConfig:
    def test_defaults(self):
        config = AuditConfig.load(_audit_env())
        assert config.region == "us-west-2"
        assert config.token == "tok"
        assert (config.owner, config.repo) == ("acme", "widgets")
        assert config.issue_title == DEFAULT_ISSUE_TITLE
        assert config.audit_contexts == ["deploy/api"]
        assert config.audit_services == []
        assert config.dry_run is False
        assert config.cage_binary == "cage"
        assert config.api_url == DEFAULT_API_URL

    def test_all_inputs(self):
        config = AuditConfig.load(
            _audit_env(
                **{
                    "INPUT_AUDIT-SERVICES": "prod/api\nprod/worker",
                    "INPUT_CAGE-OPTIONS": "--foo\n--bar",
                    "INPUT_ISSUE-TITLE": "Weekly audit",
                    "INPUT_DRY-RUN": "true",
                    "CAGE_BINARY": "/usr/local/bin/cage",
                    "GITHUB_API_URL": "https://ghe.example.com/api/v3",
                }
            )
        )
        assert config.audit_services == ["prod/api", "prod/worker"]
        assert config.cage_options == ["--foo", "--bar"]
        assert config.issue_title == "Weekly audit"
        assert config.dry_run is True
        assert config.cage_binary == "/usr/local/bin/cage"
        assert config.api_url == "https://ghe.example.com/api/v3"

    @pytest.mark.parametrize("key", ["INPUT_REGION", "INPUT_GITHUB-TOKEN"])
    def test_required_inputs(self, key):
        env = _audit_env()
        del env[key]
        with pytest.raises(InputError, match="is required"):
            AuditConfig.load(env)

    def test_blank_title_rejected(self):
        with pytest.raises(InputError, match="issue-title input cannot be empty"):
            AuditConfig.load(_audit_env(**{"INPUT_ISSUE-TITLE": "   "}))

    def test_missing_repository(self):
        env = _audit_env()
        del env["GITHUB_REPOSITORY"]
        with pytest.raises(InputError, match="GITHUB_REPOSITORY is not set or invalid"):
            AuditConfig.load(env)


class TestDeployConfig:
    def test_load(self):
        config = DeployConfig.load(
            {
                "INPUT_REGION": "us-west-2",
                "INPUT_DEPLOY-CONTEXT": "deploy/api",
                "INPUT_CANARY-TASK-IDLE-DURATION": "60",
                "INPUT_UPDATE-SERVICE": "true",
                "INPUT_CAGE-OPTIONS": "--skipCanary",
            }
        )
        assert config.deploy_context == "deploy/api"
        assert config.canary_task_idle_duration == "60"
        assert config.update_service is True
        assert config.cage_options == "--skipCanary"

    def test_deploy_context_required(self):
        with pytest.raises(InputError, match="deploy-context is required"):
            DeployConfig.load({"INPUT_REGION": "us-west-2"})
