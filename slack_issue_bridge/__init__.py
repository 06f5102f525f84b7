"""Slack issue bridge package initialisation."""

from .background import run_async  # noqa: F401
from .config import AppSettings, get_settings  # noqa: F401
from .errors import DecodeError, IssueBridgeError, UpstreamCallError, ValidationGap  # noqa: F401
from .github_client import GitHubClient, IssueReference  # noqa: F401
from .logging_config import configure_logging  # noqa: F401
from .slack_client import SlackClient  # noqa: F401

__all__ = [
    "AppSettings",
    "get_settings",
    "run_async",
    "DecodeError",
    "IssueBridgeError",
    "UpstreamCallError",
    "ValidationGap",
    "GitHubClient",
    "IssueReference",
    "SlackClient",
    "configure_logging",
]
