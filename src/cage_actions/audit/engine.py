"""Audit engine: scans every target, then reconciles the tracking issue.

One run owns at most one open issue per (owner, repo, title), marked with the
``canarycage`` label, and at most one comment per scanned service on it:

* no vulnerabilities and an open issue → the issue is closed as completed
* no vulnerabilities and no issue      → nothing happens
* vulnerabilities                      → label ensured, issue created or its
  body replaced, one marker-tagged comment upserted per target

Every step re-reads state from the API; nothing is cached between runs.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from cage_actions import gha
from cage_actions.audit.executor import run_scan
from cage_actions.audit.markdown import render_issue_body, render_summary
from cage_actions.audit.marker import build_comment_body, has_marker, marker_for
from cage_actions.audit.models import AuditIssueParams, AuditResult
from cage_actions.errors import IssueConsistencyError
from cage_actions.github.client import GitHubClient
from cage_actions.github.models import Issue

logger = logging.getLogger(__name__)

TRACKING_LABEL = "canarycage"
LABEL_COLOR = "fbca04"
LABEL_DESCRIPTION = "cage audit reports"

Scanner = Callable[[Sequence[str]], AuditResult]


class AuditAction(enum.Enum):
    """What a run did to the tracking issue."""

    DRY_RUN = "dry-run"
    NOTHING_TO_CLOSE = "nothing-to-close"
    CLOSED = "closed"
    CREATED = "created"
    UPDATED = "updated"


@dataclass
class AuditOutcome:
    action: AuditAction
    results: list[AuditResult]
    total_count: int
    body: str
    issue_number: int | None = None
    issue_url: str = ""


def audit(
    args_list: Sequence[Sequence[str]],
    params: AuditIssueParams,
    *,
    scanner: Scanner = run_scan,
    client: GitHubClient | None = None,
) -> AuditOutcome:
    """Scan each target in order, then reconcile the tracking issue.

    Any scan failure aborts before the first API call. In dry-run mode no
    client is created at all.
    """
    results: list[AuditResult] = []
    for args in args_list:
        with gha.group(f"cage audit {' '.join(args)}"):
            results.append(scanner(args))

    total = sum(r.summary.total_count for r in results)
    body = render_summary(results)

    if params.dry_run:
        if total == 0:
            logger.info("Dry run (no vulnerabilities): issue not touched.\n%s", body)
        else:
            logger.info(
                "Dry run (%d vulnerabilities): issue not created/updated.\n%s",
                total,
                body,
            )
        return AuditOutcome(AuditAction.DRY_RUN, results, total, body)

    reconciler = AuditReconciler(client or GitHubClient(params.token))
    return reconciler.reconcile(results, params, body)


class AuditReconciler:
    """Drives the tracking issue and its per-service comments."""

    def __init__(self, client: GitHubClient, label: str = TRACKING_LABEL) -> None:
        self._client = client
        self._label = label

    def reconcile(
        self,
        results: list[AuditResult],
        params: AuditIssueParams,
        body: str | None = None,
    ) -> AuditOutcome:
        owner, repo, title = params.owner, params.repo, params.title
        total = sum(r.summary.total_count for r in results)
        if body is None:
            body = render_summary(results)

        existing = self._client.find_issue(owner, repo, title, self._label)

        if total == 0:
            logger.info("No vulnerabilities found.")
            if existing is None:
                logger.info("No existing issue to close.")
                return AuditOutcome(AuditAction.NOTHING_TO_CLOSE, results, total, body)
            logger.info("Closing existing issue #%d.", existing.number)
            self._client.update_issue(
                owner,
                repo,
                existing.number,
                state="closed",
                state_reason="completed",
            )
            return AuditOutcome(
                AuditAction.CLOSED,
                results,
                total,
                body,
                issue_number=existing.number,
                issue_url=existing.html_url,
            )

        logger.info("Creating or updating issue '%s' in %s/%s", title, owner, repo)
        self.ensure_label(owner, repo)

        issue_body = render_issue_body(body)
        if existing is not None:
            self._check_owned(owner, repo, existing)
            issue = self._client.update_issue(owner, repo, existing.number, body=issue_body)
            action = AuditAction.UPDATED
        else:
            issue = self._client.create_issue(
                owner, repo, title, issue_body, labels=[self._label]
            )
            action = AuditAction.CREATED
        logger.info("Issue ready: %s", issue.html_url or f"#{issue.number}")

        for result in results:
            self.upsert_comment(owner, repo, issue.number, result)

        return AuditOutcome(
            action,
            results,
            total,
            body,
            issue_number=issue.number,
            issue_url=issue.html_url,
        )

    def ensure_label(self, owner: str, repo: str) -> None:
        if self._client.get_label(owner, repo, self._label) is not None:
            return
        logger.info("Creating label '%s' in %s/%s", self._label, owner, repo)
        self._client.create_label(
            owner, repo, self._label, color=LABEL_COLOR, description=LABEL_DESCRIPTION
        )

    def upsert_comment(self, owner: str, repo: str, number: int, result: AuditResult) -> None:
        marker = marker_for(result)
        body = build_comment_body(result)
        existing = self._client.find_comment(
            owner, repo, number, lambda c: has_marker(c.body, marker)
        )
        if existing is not None:
            self._client.update_comment(owner, repo, existing.id, body)
            logger.info("Updated comment %d for %s", existing.id, result.target_name)
        else:
            created = self._client.create_comment(owner, repo, number, body)
            logger.info("Added comment %d for %s", created.id, result.target_name)

    def _check_owned(self, owner: str, repo: str, issue: Issue) -> None:
        ref = f"{owner}/{repo}#{issue.number}"
        if self._label not in issue.labels:
            raise IssueConsistencyError(f"Issue {ref} does not have {self._label} label.")
        if not issue.is_open:
            raise IssueConsistencyError(f"Issue {ref} is not open (state={issue.state}).")
