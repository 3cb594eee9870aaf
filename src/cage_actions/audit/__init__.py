"""Vulnerability audit: scan targets with cage and track results in an issue."""

from cage_actions.audit.engine import AuditAction, AuditOutcome, AuditReconciler, audit
from cage_actions.audit.models import AuditIssueParams, AuditResult, Severity, Vulnerability

__all__ = [
    "AuditAction",
    "AuditIssueParams",
    "AuditOutcome",
    "AuditReconciler",
    "AuditResult",
    "Severity",
    "Vulnerability",
    "audit",
]
