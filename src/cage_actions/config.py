"""Action configuration: GitHub Actions inputs, env vars, defaults."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from cage_actions.errors import InputError

DEFAULT_ISSUE_TITLE = "Cage audit report"
DEFAULT_CAGE_BINARY = "cage"
DEFAULT_API_URL = "https://api.github.com"

_FALSY = re.compile(r"^(false|0|undefined|null)$", re.IGNORECASE)
_REPOSITORY = re.compile(r"^(.+?)/(.+?)$")


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input the way the Actions runner exposes it.

    ``issue-title`` is read from ``INPUT_ISSUE-TITLE``: upper-cased, spaces
    become underscores, hyphens are kept.
    """
    env = os.environ if environ is None else environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    return env.get(key, "").strip()


def require_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    value = get_input(name, environ)
    if not value:
        raise InputError(f"{name} is required")
    return value


def boolify(value: str) -> bool:
    return value != "" and not _FALSY.match(value)


def parse_list_input(value: str) -> list[str]:
    """Split a newline-delimited input into trimmed, non-empty entries."""
    lines = value.replace("\r\n", "\n").split("\n")
    return [line.strip() for line in lines if line.strip()]


def parse_repository(value: str | None) -> tuple[str, str]:
    """Split ``owner/repo`` (the ``GITHUB_REPOSITORY`` format)."""
    m = _REPOSITORY.match(value or "")
    if not m:
        raise InputError(f"GITHUB_REPOSITORY is not set or invalid: {value}")
    return m.group(1), m.group(2)


@dataclass
class AuditConfig:
    """Everything ``cage-actions audit`` needs for one run."""

    region: str
    token: str
    owner: str
    repo: str
    issue_title: str = DEFAULT_ISSUE_TITLE
    audit_contexts: list[str] = field(default_factory=list)
    audit_services: list[str] = field(default_factory=list)
    cage_options: list[str] = field(default_factory=list)
    dry_run: bool = False
    cage_binary: str = DEFAULT_CAGE_BINARY
    api_url: str = DEFAULT_API_URL

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> AuditConfig:
        """Load config from action inputs and the runner environment."""
        env = os.environ if environ is None else environ

        region = require_input("region", env)
        token = require_input("github-token", env)
        owner, repo = parse_repository(env.get("GITHUB_REPOSITORY"))

        # An explicitly empty title is an error; an absent one takes the default
        key = "INPUT_ISSUE-TITLE"
        issue_title = env[key] if key in env else DEFAULT_ISSUE_TITLE
        if issue_title.strip() == "":
            raise InputError("issue-title input cannot be empty")

        return cls(
            region=region,
            token=token,
            owner=owner,
            repo=repo,
            issue_title=issue_title.strip(),
            audit_contexts=parse_list_input(get_input("audit-contexts", env)),
            audit_services=parse_list_input(get_input("audit-services", env)),
            cage_options=parse_list_input(get_input("cage-options", env)),
            dry_run=boolify(get_input("dry-run", env)),
            cage_binary=env.get("CAGE_BINARY") or DEFAULT_CAGE_BINARY,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )


@dataclass
class DeployConfig:
    """Everything ``cage-actions deploy`` needs for one rollout."""

    region: str
    deploy_context: str
    canary_task_idle_duration: str = ""
    update_service: bool = False
    cage_options: str = ""
    cage_binary: str = DEFAULT_CAGE_BINARY

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> DeployConfig:
        env = os.environ if environ is None else environ
        return cls(
            deploy_context=require_input("deploy-context", env),
            region=require_input("region", env),
            canary_task_idle_duration=get_input("canary-task-idle-duration", env),
            update_service=boolify(get_input("update-service", env)),
            cage_options=get_input("cage-options", env),
            cage_binary=env.get("CAGE_BINARY") or DEFAULT_CAGE_BINARY,
        )
