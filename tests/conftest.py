"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from cage_actions.audit.models import AuditIssueParams
from factories import FakeGitHub


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def issue_params() -> AuditIssueParams:
    return AuditIssueParams(
        owner="test-owner",
        repo="test-repo",
        title="Security Audit",
        token="test-token",
    )
