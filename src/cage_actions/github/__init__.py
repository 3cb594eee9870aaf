"""GitHub REST access for issue tracking."""

from cage_actions.github.client import PAGE_SIZE, GitHubClient
from cage_actions.github.models import Comment, Issue, Label

__all__ = ["PAGE_SIZE", "Comment", "GitHubClient", "Issue", "Label"]
