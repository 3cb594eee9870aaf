"""Hidden per-service markers that tie an issue comment to its target."""

from __future__ import annotations

from cage_actions.audit.markdown import render_summary
from cage_actions.audit.models import AuditResult

_COMMENT_CLOSE = "-->"

# "%" first, so encoded delimiters stay distinct from literal "%3B"/"%3D".
_FIELD_ESCAPES = (("%", "%25"), (";", "%3B"), ("=", "%3D"))


def _sanitize(value: str) -> str:
    # A field must not be able to end the HTML comment early. Removing one
    # "-->" can splice a new one together ("---->>"), so repeat until clean.
    while _COMMENT_CLOSE in value:
        value = value.replace(_COMMENT_CLOSE, "")
    value = value.strip()
    for char, encoded in _FIELD_ESCAPES:
        value = value.replace(char, encoded)
    return value


def build_marker(region: str, cluster: str, service: str) -> str:
    return (
        f"<!-- cage-audit:region={_sanitize(region)};"
        f"cluster={_sanitize(cluster)};service={_sanitize(service)} -->"
    )


def marker_for(result: AuditResult) -> str:
    return build_marker(result.region, result.cluster, result.service)


def build_comment_body(result: AuditResult) -> str:
    return f"{marker_for(result)}\n\n{render_summary([result])}"


def has_marker(body: str | None, marker: str) -> bool:
    """Whether a comment body belongs to the target identified by ``marker``."""
    return isinstance(body, str) and marker in body
