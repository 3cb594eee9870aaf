"""CLI command: cage-actions audit, scan targets and reconcile the issue."""

from __future__ import annotations

import functools
import sys

import click
import requests
from rich.console import Console
from rich.table import Table

from cage_actions import gha
from cage_actions.audit.engine import AuditAction, AuditOutcome
from cage_actions.audit.engine import audit as run_audit
from cage_actions.audit.executor import run_scan
from cage_actions.audit.models import AuditIssueParams
from cage_actions.audit.targets import build_args_list, iterate_targets
from cage_actions.config import AuditConfig
from cage_actions.errors import CageActionError
from cage_actions.github.client import GitHubClient

console = Console(stderr=True)

_ACTION_COLORS = {
    AuditAction.CREATED: "red",
    AuditAction.UPDATED: "yellow",
    AuditAction.CLOSED: "green",
    AuditAction.NOTHING_TO_CLOSE: "green",
    AuditAction.DRY_RUN: "cyan",
}


@click.command()
@click.option(
    "--dry-run",
    is_flag=True,
    help="Render the report without calling the GitHub API.",
)
def audit(dry_run: bool) -> None:
    """Audit services with cage and track vulnerabilities in an issue."""
    try:
        config = AuditConfig.load()
        targets = iterate_targets(config.audit_contexts, config.audit_services)
        args_list = build_args_list(config.region, targets, config.cage_options)
        params = AuditIssueParams(
            owner=config.owner,
            repo=config.repo,
            title=config.issue_title,
            token=config.token,
            dry_run=config.dry_run or dry_run,
        )
        client = None
        if not params.dry_run:
            client = GitHubClient(config.token, api_url=config.api_url)
        outcome = run_audit(
            args_list,
            params,
            scanner=functools.partial(run_scan, binary=config.cage_binary),
            client=client,
        )
    except (CageActionError, requests.RequestException) as exc:
        gha.error(str(exc))
        sys.exit(1)

    _print_summary(outcome)


def _print_summary(outcome: AuditOutcome) -> None:
    console.print("\n[bold]Audit Summary[/bold]")
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Target", style="cyan")
    table.add_column("Scanned At")
    table.add_column("Highest")
    table.add_column("Total", justify="right")

    for result in outcome.results:
        highest = result.summary.highest_severity
        table.add_row(
            result.target_name,
            result.scanned_at,
            highest.value if highest else "-",
            str(result.summary.total_count),
        )
    console.print(table)

    color = _ACTION_COLORS.get(outcome.action, "white")
    issue = f" #{outcome.issue_number}" if outcome.issue_number else ""
    console.print(
        f"Issue: [{color}]{outcome.action.value}[/{color}]{issue} "
        f"({outcome.total_count} vulnerabilities)"
    )
    if outcome.issue_url:
        console.print(f"  {outcome.issue_url}")
