"""Scan executor: runs ``cage audit --json`` and parses its output."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from pydantic import ValidationError

from cage_actions.audit.models import AuditResult
from cage_actions.audit.schema import AuditResultPayload
from cage_actions.config import DEFAULT_CAGE_BINARY
from cage_actions.errors import ScanExecutionError, ScanParseError

logger = logging.getLogger(__name__)


def run_scan(args: Sequence[str], binary: str = DEFAULT_CAGE_BINARY) -> AuditResult:
    """Run one audit and return its parsed result.

    Raises :class:`ScanExecutionError` if the process cannot be started or
    exits non-zero, and :class:`ScanParseError` if stdout is not an audit
    result document.
    """
    command = [binary, "audit", "--json", *args]
    logger.info("Running %s", " ".join(command))

    # Raw bytes: stdout must be UTF-8, stderr is decoded leniently.
    try:
        proc = subprocess.run(command, capture_output=True)
    except (FileNotFoundError, PermissionError) as exc:
        raise ScanExecutionError(f"could not run {binary}: {exc}") from exc

    stderr = proc.stderr.decode("utf-8", errors="replace")
    if stderr:
        logger.debug("%s stderr:\n%s", binary, stderr.rstrip())

    if proc.returncode != 0:
        output = proc.stdout.decode("utf-8", errors="replace") + stderr
        raise ScanExecutionError(
            f"{binary} audit exited with code {proc.returncode}:\n{output.rstrip()}",
            returncode=proc.returncode,
            output=output,
        )

    try:
        stdout = proc.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ScanParseError(f"audit output is not valid UTF-8: {exc}") from exc
    return parse_scan_output(stdout)


def parse_scan_output(text: str) -> AuditResult:
    """Validate a ``cage audit --json`` document."""
    try:
        payload = AuditResultPayload.model_validate_json(text)
    except ValidationError as exc:
        # Covers both malformed JSON and a document of the wrong shape
        raise ScanParseError(f"unexpected audit output: {exc}") from exc
    return payload.to_result()
