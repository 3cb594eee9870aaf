"""Audit data models: severities, vulnerabilities and scan results."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field


class Severity(enum.Enum):
    """Vulnerability severity. Declaration order is severity order."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFORMATIONAL = "INFORMATIONAL"
    UNDEFINED = "UNDEFINED"

    @classmethod
    def parse(cls, value: str | Severity | None) -> Severity:
        """Canonicalize scanner input; anything unrecognized is UNDEFINED."""
        if isinstance(value, Severity):
            return value
        if not value:
            return cls.UNDEFINED
        key = str(value).strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.UNDEFINED

    @property
    def rank(self) -> int:
        """Position in the order table; lower is more severe."""
        return _ORDER.index(self)


_ALIASES = {"INFO": "INFORMATIONAL"}
_ORDER: list[Severity] = list(Severity)


@dataclass(frozen=True)
class Vulnerability:
    """One CVE found in one package, and the containers that ship it."""

    name: str
    severity: Severity
    package_name: str = ""
    package_version: str = ""
    uri: str = ""
    description: str = ""
    containers: tuple[str, ...] = ()


@dataclass(frozen=True)
class AuditSummary:
    """Per-bucket counts for one scan.

    ``total_count`` and ``highest_severity`` are derived from the buckets, so
    they can never disagree with them.
    """

    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0
    info_count: int = 0

    @property
    def counts(self) -> dict[Severity, int]:
        return {
            Severity.CRITICAL: self.critical_count,
            Severity.HIGH: self.high_count,
            Severity.MEDIUM: self.medium_count,
            Severity.LOW: self.low_count,
            Severity.INFORMATIONAL: self.info_count,
        }

    @property
    def total_count(self) -> int:
        return sum(self.counts.values())

    @property
    def highest_severity(self) -> Severity | None:
        return highest_severity(self.counts)


@dataclass(frozen=True)
class AuditResult:
    """Output of one ``cage audit`` invocation."""

    region: str
    scanned_at: str
    summary: AuditSummary = field(default_factory=AuditSummary)
    vulns: tuple[Vulnerability, ...] = ()
    cluster: str = ""
    service: str = ""

    @property
    def target_name(self) -> str:
        """Human label for the scanned target, e.g. ``us-west-2/prod/api``."""
        return "/".join(p for p in (self.region, self.cluster, self.service) if p)


@dataclass(frozen=True)
class AuditIssueParams:
    """Identity of the tracking issue and how to reach it."""

    owner: str
    repo: str
    title: str
    token: str
    dry_run: bool = False


def severity_sort_key(vuln: Vulnerability) -> tuple[int, str]:
    return (vuln.severity.rank, vuln.name)


def compare_vulnerabilities(a: Vulnerability, b: Vulnerability) -> int:
    """Three-way comparison: severity first, then CVE name ascending."""
    ka, kb = severity_sort_key(a), severity_sort_key(b)
    return (ka > kb) - (ka < kb)


def sort_vulnerabilities(vulns: Iterable[Vulnerability]) -> list[Vulnerability]:
    """Most severe first. Stable, so exact ties keep their input order."""
    return sorted(vulns, key=severity_sort_key)


def highest_severity(counts: Mapping[Severity, int]) -> Severity | None:
    """Most severe bucket with a non-zero count, or ``None`` if all are empty."""
    for severity in _ORDER:
        if counts.get(severity, 0) > 0:
            return severity
    return None
