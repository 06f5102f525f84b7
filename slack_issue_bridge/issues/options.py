"""Repository selection helpers for the modal's external select."""

from __future__ import annotations

from typing import Iterable, List

import structlog

from slack_issue_bridge.errors import UpstreamCallError
from slack_issue_bridge.github_client import GitHubClient


def filter_repositories(repositories: Iterable[str], prefix: str | None) -> List[str]:
    """Keep repositories whose name starts with ``prefix``, in source order.

    An empty prefix keeps everything.
    """

    if not prefix:
        return list(repositories)
    return [name for name in repositories if name.startswith(prefix)]


def resolve_default_repository(configured: str | None, github: GitHubClient) -> str | None:
    """Return the configured default, falling back to the first listed repository."""

    if configured:
        return configured
    try:
        repositories = github.list_repositories()
    except UpstreamCallError as exc:
        structlog.get_logger().warning(
            "default_repository_unavailable",
            operation=exc.operation,
            error=exc.error,
            status_code=exc.status_code,
        )
        return None
    return repositories[0] if repositories else None
