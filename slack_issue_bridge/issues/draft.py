"""Issue draft construction from a submitted form and its correlation token."""

from __future__ import annotations

from dataclasses import dataclass

from .modal import MAX_ISSUE_TITLE_LENGTH
from .payloads import IssueForm
from .token import CorrelationToken


ATTRIBUTION_FOOTER = (
    "\n\n----\n"
    ":octocat: This issue was created based on [this message]({permalink})"
)


@dataclass(frozen=True)
class IssueDraft:
    repository: str
    title: str
    body: str


def suggest_title(message_text: str | None) -> str:
    """Use the first non-blank line of the message as the default issue title."""

    for line in (message_text or "").splitlines():
        line = line.strip()
        if line:
            if len(line) > MAX_ISSUE_TITLE_LENGTH:
                return line[: MAX_ISSUE_TITLE_LENGTH - 3] + "..."
            return line
    return ""


def build_issue_draft(form: IssueForm, token: CorrelationToken) -> IssueDraft:
    """Combine form values with the attribution footer linking the source message."""

    body = form.body + ATTRIBUTION_FOOTER.format(permalink=token.permalink)
    return IssueDraft(repository=form.repository, title=form.title, body=body)
