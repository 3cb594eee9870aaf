"""Exception hierarchy shared by the audit and deploy commands."""

from __future__ import annotations

__all__ = [
    "CageActionError",
    "DeployError",
    "InputError",
    "IssueConsistencyError",
    "ScanError",
    "ScanExecutionError",
    "ScanParseError",
]


class CageActionError(Exception):
    """Base class for every error that should fail the action run."""


class InputError(CageActionError):
    """A required action input is missing or malformed."""


class ScanError(CageActionError):
    """A ``cage audit`` invocation did not produce a usable result."""


class ScanExecutionError(ScanError):
    """The audit process could not be started or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class ScanParseError(ScanError):
    """The audit process printed something that is not an audit result."""


class IssueConsistencyError(CageActionError):
    """An existing tracking issue is not in a state this tool may touch."""


class DeployError(CageActionError):
    """``cage rollout`` failed."""
