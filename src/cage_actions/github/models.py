"""GitHub REST objects, normalized at the API boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def label_names(raw_labels: list[Any] | None) -> frozenset[str]:
    """Labels come back as bare strings or as ``{"name": ...}`` objects."""
    names: set[str] = set()
    for label in raw_labels or ():
        if isinstance(label, str):
            names.add(label)
        elif isinstance(label, dict) and label.get("name"):
            names.add(label["name"])
    return frozenset(names)


@dataclass(frozen=True)
class Issue:
    number: int
    title: str
    state: str = "open"
    labels: frozenset[str] = field(default_factory=frozenset)
    html_url: str = ""
    is_pull_request: bool = False

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Issue:
        return cls(
            number=data["number"],
            title=data.get("title") or "",
            state=data.get("state") or "open",
            labels=label_names(data.get("labels")),
            html_url=data.get("html_url") or "",
            is_pull_request=bool(data.get("pull_request")),
        )


@dataclass(frozen=True)
class Comment:
    id: int
    body: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Comment:
        return cls(id=data["id"], body=data.get("body"))


@dataclass(frozen=True)
class Label:
    name: str
    color: str = ""
    description: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Label:
        return cls(
            name=data["name"],
            color=data.get("color") or "",
            description=data.get("description") or "",
        )
