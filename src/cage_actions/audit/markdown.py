"""Markdown rendering for audit results.

Everything here is a pure function of its input: the same results always
render to byte-identical text, which keeps issue updates quiet and lets the
tests compare whole documents.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from cage_actions.audit.models import (
    AuditResult,
    Severity,
    Vulnerability,
    sort_vulnerabilities,
)

EMPTY_SUMMARY = "## Scan Summary\n\nNo services were scanned."

_NEWLINE = re.compile(r"\r?\n")
_COMMENT_OPEN = "<!--"

_CAUTION = (
    "> [!CAUTION]\n"
    "> **Security Alert:** Critical or High severity vulnerabilities detected! "
    "Immediate action required."
)
_WARNING = (
    "> [!WARNING]\n"
    "> **Security Notice:** Medium severity vulnerabilities detected. "
    "Please review and address them promptly."
)
_INFO = (
    "> [!INFO]\n"
    "> **Security Info:** No Critical or High severity vulnerabilities detected."
)
_TIP = "> [!TIP]\n> **Security Good News:** No vulnerabilities detected!"

_ALERTS = {
    Severity.CRITICAL: _CAUTION,
    Severity.HIGH: _CAUTION,
    Severity.MEDIUM: _WARNING,
    Severity.LOW: _INFO,
    Severity.INFORMATIONAL: _INFO,
}

_VULN_HEADER = [
    "| Severity | CVE | Package | Version | Containers |",
    "| --- | --- | --- | --- | --- |",
]


def escape_inline(text: str) -> str:
    """Make free text safe inside a table cell or inline code.

    ``<!--`` is entity-escaped so rendered text can never carry a comment
    marker of its own.
    """
    text = text.replace("|", "\\|").replace("`", "\\`")
    text = text.replace(_COMMENT_OPEN, "&lt;!--")
    return _NEWLINE.sub(" ", text)


def escape_uri(uri: str) -> str:
    """Make a URI safe as a link target inside a table row."""
    return uri.replace("|", "%7C").replace(_COMMENT_OPEN, "%3C!--")


def render_row(vuln: Vulnerability) -> str:
    cells = [
        escape_inline(vuln.severity.value),
        f"[{escape_inline(vuln.name)}]({escape_uri(vuln.uri)})",
        escape_inline(vuln.package_name),
        escape_inline(vuln.package_version),
        escape_inline(", ".join(vuln.containers)),
    ]
    return "| " + " | ".join(cells) + " |"


def render_alert(severity: Severity | str | None) -> str:
    """Pick the banner for a result's highest severity.

    Every input maps to exactly one banner; ``None``, UNDEFINED and unknown
    strings mean nothing was found.
    """
    if severity is None:
        return _TIP
    return _ALERTS.get(Severity.parse(severity), _TIP)


def render_result(result: AuditResult) -> str:
    """Render one target: metadata, counts, alert and vulnerability details."""
    summary = result.summary
    highest = summary.highest_severity
    lines = [
        f"### {escape_inline(result.target_name) or '-'}",
        "",
        "| Region | Cluster | Service | Scanned At | Highest Severity |",
        "| --- | --- | --- | --- | --- |",
        "| "
        + " | ".join(
            _code(v)
            for v in (
                result.region,
                result.cluster,
                result.service,
                result.scanned_at,
                highest.value if highest else "NONE",
            )
        )
        + " |",
        "",
        "| Critical | High | Medium | Low | Info | Total |",
        "| --- | --- | --- | --- | --- | --- |",
        f"| {summary.critical_count} | {summary.high_count} "
        f"| {summary.medium_count} | {summary.low_count} "
        f"| {summary.info_count} | {summary.total_count} |",
        "",
        render_alert(highest),
    ]

    if result.vulns:
        lines.extend(
            [
                "",
                "<details>",
                "<summary>Click to expand vulnerability details</summary>",
                "",
                *_VULN_HEADER,
                *(render_row(v) for v in sort_vulnerabilities(result.vulns)),
                "",
                "</details>",
            ]
        )
    return "\n".join(lines)


def render_summary(results: Sequence[AuditResult]) -> str:
    """Render the combined report for every target scanned in one run.

    The headline total counts each CVE name once, however many targets or
    containers it was found in.
    """
    if not results:
        return EMPTY_SUMMARY

    unique = {v.name for result in results for v in result.vulns}
    headline = (
        f"Found **{len(unique)}** unique "
        f"{_plural(len(unique), 'vulnerability', 'vulnerabilities')} across "
        f"**{len(results)}** {_plural(len(results), 'service', 'services')}."
    )
    sections = [render_result(r) for r in results]
    return "\n\n".join(["## Scan Summary", headline, *sections])


def render_issue_body(summary: str) -> str:
    return "\n".join(
        [
            "Cage audit report.",
            "",
            "Results are posted as comments per service.",
            "",
            summary,
        ]
    )


def _code(value: str) -> str:
    if not value:
        return "-"
    return f"`{escape_inline(value)}`"


def _plural(n: int, one: str, many: str) -> str:
    return one if n == 1 else many
