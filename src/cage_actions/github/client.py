"""Minimal GitHub Issues REST client used by the audit reconciler.

Only the calls the reconciler needs are wrapped. HTTP failures surface as
``requests.HTTPError`` unchanged; the one expected miss (an absent label) is
reported as ``None`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import requests

from cage_actions import __version__
from cage_actions.config import DEFAULT_API_URL
from cage_actions.github.models import Comment, Issue, Label

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

# Timeout in seconds for a single REST call.
_TIMEOUT = 30

T = TypeVar("T")


class GitHubClient:
    """Issues, labels and comments for one token."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"cage-actions/{__version__}",
            }
        )

    # -- issues ------------------------------------------------------------

    def find_issue(self, owner: str, repo: str, title: str, label: str) -> Issue | None:
        """First open issue carrying ``label`` whose title is exactly ``title``."""
        return self._find_first(
            f"/repos/{owner}/{repo}/issues",
            {"state": "open", "labels": label},
            Issue.from_api,
            lambda issue: not issue.is_pull_request and issue.title == title,
        )

    def create_issue(
        self, owner: str, repo: str, title: str, body: str, labels: list[str]
    ) -> Issue:
        data = self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            json={"title": title, "body": body, "labels": labels},
        ).json()
        return Issue.from_api(data)

    def update_issue(self, owner: str, repo: str, number: int, **fields: Any) -> Issue:
        data = self._request(
            "PATCH", f"/repos/{owner}/{repo}/issues/{number}", json=fields
        ).json()
        return Issue.from_api(data)

    # -- labels ------------------------------------------------------------

    def get_label(self, owner: str, repo: str, name: str) -> Label | None:
        """Look up a label; ``None`` means GitHub answered 404."""
        resp = self._session.request(
            "GET",
            self._url(f"/repos/{owner}/{repo}/labels/{quote(name, safe='')}"),
            timeout=_TIMEOUT,
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return Label.from_api(resp.json())

    def create_label(
        self, owner: str, repo: str, name: str, color: str, description: str
    ) -> Label:
        data = self._request(
            "POST",
            f"/repos/{owner}/{repo}/labels",
            json={"name": name, "color": color, "description": description},
        ).json()
        return Label.from_api(data)

    # -- comments ----------------------------------------------------------

    def find_comment(
        self,
        owner: str,
        repo: str,
        number: int,
        predicate: Callable[[Comment], bool],
    ) -> Comment | None:
        return self._find_first(
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            {},
            Comment.from_api,
            predicate,
        )

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        data = self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            json={"body": body},
        ).json()
        return Comment.from_api(data)

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> Comment:
        data = self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            json={"body": body},
        ).json()
        return Comment.from_api(data)

    # -- plumbing ----------------------------------------------------------

    def _find_first(
        self,
        path: str,
        params: dict[str, Any],
        parse: Callable[[dict[str, Any]], T],
        predicate: Callable[[T], bool],
    ) -> T | None:
        """Walk pages until a match or a short page; never past the last page."""
        page = 1
        while True:
            items = self._request(
                "GET", path, params={**params, "per_page": PAGE_SIZE, "page": page}
            ).json()
            for raw in items:
                item = parse(raw)
                if predicate(item):
                    return item
            if len(items) < PAGE_SIZE:
                return None
            page += 1

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, path)
        resp = self._session.request(method, self._url(path), timeout=_TIMEOUT, **kwargs)
        resp.raise_for_status()
        return resp

    def _url(self, path: str) -> str:
        return f"{self._api_url}{path}"
