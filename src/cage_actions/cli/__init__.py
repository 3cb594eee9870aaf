"""CLI entry point: Click group with global options."""

from __future__ import annotations

import logging

import click

from cage_actions import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cage-actions")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """cage-actions: run cage deploys and audits from GitHub Actions.

    Inputs are read from INPUT_* environment variables, as set by the
    Actions runner.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from cage_actions.cli.audit import audit  # noqa: F811
    from cage_actions.cli.deploy import deploy  # noqa: F811

    main.add_command(audit)
    main.add_command(deploy)


_register_commands()
