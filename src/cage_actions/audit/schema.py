"""Wire schema for ``cage audit --json`` output.

The pydantic models mirror the JSON document exactly; ``to_result`` turns a
validated payload into the frozen domain models in
:mod:`cage_actions.audit.models`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from cage_actions.audit.models import (
    AuditResult,
    AuditSummary,
    Severity,
    Vulnerability,
)


class CvePayload(BaseModel):
    name: str
    description: str = ""
    package_name: str = ""
    package_version: str = ""
    uri: str = ""
    severity: str | None = None


class VulnPayload(BaseModel):
    cve: CvePayload
    containers: list[str] = Field(default_factory=list)


class SummaryPayload(BaseModel):
    critical_count: int = Field(default=0, ge=0)
    high_count: int = Field(default=0, ge=0)
    medium_count: int = Field(default=0, ge=0)
    low_count: int = Field(default=0, ge=0)
    info_count: int = Field(default=0, ge=0)
    total_count: int | None = Field(default=None, ge=0)
    # Accepted for compatibility; the domain value is derived from the counts.
    highest_severity: str | None = None

    @model_validator(mode="after")
    def _total_matches_buckets(self) -> SummaryPayload:
        buckets = (
            self.critical_count
            + self.high_count
            + self.medium_count
            + self.low_count
            + self.info_count
        )
        if self.total_count is not None and self.total_count != buckets:
            raise ValueError(
                f"total_count {self.total_count} does not match bucket sum {buckets}"
            )
        return self


class AuditResultPayload(BaseModel):
    region: str
    cluster: str | None = None
    service: str | None = None
    scanned_at: str = ""
    summary: SummaryPayload
    vulns: list[VulnPayload] = Field(default_factory=list)

    def to_result(self) -> AuditResult:
        return AuditResult(
            region=self.region,
            cluster=self.cluster or "",
            service=self.service or "",
            scanned_at=self.scanned_at,
            summary=AuditSummary(
                critical_count=self.summary.critical_count,
                high_count=self.summary.high_count,
                medium_count=self.summary.medium_count,
                low_count=self.summary.low_count,
                info_count=self.summary.info_count,
            ),
            vulns=tuple(
                Vulnerability(
                    name=v.cve.name,
                    severity=Severity.parse(v.cve.severity),
                    package_name=v.cve.package_name,
                    package_version=v.cve.package_version,
                    uri=v.cve.uri,
                    description=v.cve.description,
                    containers=tuple(v.containers),
                )
                for v in self.vulns
            ),
        )
