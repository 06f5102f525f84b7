"""Text posted back into Slack once an issue exists."""

from __future__ import annotations

from slack_issue_bridge.github_client import IssueReference


def build_confirmation_text(issue: IssueReference) -> str:
    return f"Created issue {issue.repository}#{issue.number}: {issue.html_url}"
