"""Rollout: build ``cage rollout`` arguments and run it."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from cage_actions.config import DEFAULT_CAGE_BINARY, DeployConfig
from cage_actions.errors import DeployError, InputError

logger = logging.getLogger(__name__)


def build_rollout_args(config: DeployConfig) -> list[str]:
    args = ["--region", config.region]
    if config.canary_task_idle_duration:
        args += ["--canaryTaskIdleDuration", config.canary_task_idle_duration]
    if config.update_service:
        args.append("--updateService")
    if config.cage_options:
        try:
            args += shlex.split(config.cage_options)
        except ValueError as exc:
            raise InputError(f"cage-options could not be parsed: {exc}") from exc
    args.append(config.deploy_context)
    return args


def rollout(args: Sequence[str], binary: str = DEFAULT_CAGE_BINARY) -> None:
    """Run the rollout with the runner's stdout/stderr so progress streams live."""
    command = [binary, "rollout", *args]
    logger.info("Start rolling out: %s", " ".join(command))
    try:
        proc = subprocess.run(command)
    except (FileNotFoundError, PermissionError) as exc:
        raise DeployError(f"could not run {binary}: {exc}") from exc
    if proc.returncode != 0:
        raise DeployError(f"Deployment failed with exit code {proc.returncode}")
    logger.info("Rollout finished.")
