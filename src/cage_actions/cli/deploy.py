"""CLI command: cage-actions deploy, roll out a service with cage."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from cage_actions import gha
from cage_actions.config import DeployConfig
from cage_actions.deploy import build_rollout_args, rollout
from cage_actions.errors import CageActionError

console = Console(stderr=True)


@click.command()
def deploy() -> None:
    """Run cage rollout for the configured deploy context."""
    try:
        config = DeployConfig.load()
        args = build_rollout_args(config)
        console.print(
            f"[bold]cage[/bold] rolling out [cyan]{config.deploy_context}[/cyan] "
            f"in [cyan]{config.region}[/cyan]"
        )
        rollout(args, binary=config.cage_binary)
    except CageActionError as exc:
        gha.error(str(exc))
        sys.exit(1)

    console.print("[green]Rollout complete.[/green]")
